"""
Application configuration.

Values come from a JSON file (``POSECHECK_CONFIG`` or ``./posecheck.json``);
anything missing or malformed falls back to the defaults below.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "POSECHECK_CONFIG"


@dataclass(frozen=True)
class EditorConfig:
    # 히트 테스트 허용 거리 (px)
    point_tolerance: float = 45.0
    connection_tolerance: float = 30.0
    angle_tolerance: float = 35.0


@dataclass(frozen=True)
class AnalysisConfig:
    # 이 점수 미만의 키포인트는 검출되지 않은 것으로 처리
    min_keypoint_score: float = 0.5
    # 귀-발목 이동량(cm) 환산에 쓰는 가정 키
    body_height_cm: float = 170.0
    language: str = "en"


@dataclass(frozen=True)
class AppConfig:
    editor: EditorConfig = field(default_factory=EditorConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)


_CONFIG_CACHE: Optional[AppConfig] = None


def get_default_config_path() -> Path:
    env = os.environ.get(CONFIG_ENV_VAR)
    if env:
        return Path(env).expanduser()
    return Path.cwd() / "posecheck.json"


def _deep_get(d: Dict[str, Any], keys: list, default: Any = None) -> Any:
    cur: Any = d
    for k in keys:
        if not isinstance(cur, dict):
            return default
        cur = cur.get(k)
    return cur if cur is not None else default


def _as_positive_float(v: Any, default: float) -> float:
    try:
        value = float(v)
    except (TypeError, ValueError):
        return float(default)
    return value if value > 0 else float(default)


def _as_str(v: Any, default: str) -> str:
    return str(v).strip() if v is not None and str(v).strip() else default


def load_config(path: Optional[Union[str, Path]] = None) -> AppConfig:
    p = Path(path).expanduser() if path else get_default_config_path()
    if not p.exists():
        return AppConfig()
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config %s: %s", p, e)
        return AppConfig()
    if not isinstance(raw, dict):
        logger.warning("Ignoring config %s: top level is not an object", p)
        return AppConfig()

    editor = EditorConfig()
    analysis = AnalysisConfig()
    return AppConfig(
        editor=EditorConfig(
            point_tolerance=_as_positive_float(
                _deep_get(raw, ["editor", "point_tolerance"]), editor.point_tolerance),
            connection_tolerance=_as_positive_float(
                _deep_get(raw, ["editor", "connection_tolerance"]), editor.connection_tolerance),
            angle_tolerance=_as_positive_float(
                _deep_get(raw, ["editor", "angle_tolerance"]), editor.angle_tolerance),
        ),
        analysis=AnalysisConfig(
            min_keypoint_score=_as_positive_float(
                _deep_get(raw, ["analysis", "min_keypoint_score"]), analysis.min_keypoint_score),
            body_height_cm=_as_positive_float(
                _deep_get(raw, ["analysis", "body_height_cm"]), analysis.body_height_cm),
            language=_as_str(_deep_get(raw, ["analysis", "language"]), analysis.language),
        ),
    )


def get_config() -> AppConfig:
    global _CONFIG_CACHE
    if _CONFIG_CACHE is None:
        _CONFIG_CACHE = load_config()
    return _CONFIG_CACHE
