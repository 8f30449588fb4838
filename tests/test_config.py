import json

import pytest

from posecheck import config as config_module
from posecheck.config import AppConfig, EditorConfig, get_default_config_path, load_config


def write(tmp_path, data):
    path = tmp_path / "posecheck.json"
    path.write_text(data if isinstance(data, str) else json.dumps(data), encoding="utf-8")
    return path


def test_missing_file_gives_defaults(tmp_path):
    assert load_config(tmp_path / "none.json") == AppConfig()


def test_defaults():
    cfg = AppConfig()
    assert cfg.editor == EditorConfig(45.0, 30.0, 35.0)
    assert cfg.analysis.min_keypoint_score == 0.5
    assert cfg.analysis.body_height_cm == 170.0
    assert cfg.analysis.language == "en"


def test_load_values(tmp_path):
    path = write(tmp_path, {
        "editor": {"point_tolerance": 30, "angle_tolerance": "20"},
        "analysis": {"body_height_cm": 182.5, "language": "vi"},
    })
    cfg = load_config(path)
    assert cfg.editor.point_tolerance == 30.0
    assert cfg.editor.connection_tolerance == 30.0
    assert cfg.editor.angle_tolerance == 20.0
    assert cfg.analysis.body_height_cm == 182.5
    assert cfg.analysis.language == "vi"


def test_invalid_values_fall_back(tmp_path):
    path = write(tmp_path, {
        "editor": {"point_tolerance": -1, "connection_tolerance": "wide"},
        "analysis": {"language": "  "},
    })
    cfg = load_config(path)
    assert cfg.editor.point_tolerance == 45.0
    assert cfg.editor.connection_tolerance == 30.0
    assert cfg.analysis.language == "en"


@pytest.mark.parametrize("text", ["{not json", "[1, 2]"])
def test_malformed_file_logs_and_falls_back(tmp_path, caplog, text):
    path = write(tmp_path, text)
    with caplog.at_level("WARNING", logger="posecheck.config"):
        assert load_config(path) == AppConfig()
    assert "Ignoring" in caplog.text


def test_env_var_path(tmp_path, monkeypatch):
    path = write(tmp_path, {"analysis": {"body_height_cm": 160}})
    monkeypatch.setenv("POSECHECK_CONFIG", str(path))
    assert get_default_config_path() == path
    assert load_config().analysis.body_height_cm == 160.0


def test_get_config_is_cached(tmp_path, monkeypatch):
    monkeypatch.setenv("POSECHECK_CONFIG", str(tmp_path / "none.json"))
    monkeypatch.setattr(config_module, "_CONFIG_CACHE", None)
    first = config_module.get_config()
    assert config_module.get_config() is first
