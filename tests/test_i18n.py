import pytest

from posecheck.i18n import LANGUAGES, build_translator, format_arg, load_messages


def test_placeholders(t):
    assert t("app.score", 90, "A") == "Score: 90/100 (rank A)"
    assert t("detail.plumb.shift", 9.2) == "Ear-to-ankle shift: 9.2 cm"


def test_missing_key_returns_key(t):
    assert t("no.such.key") == "no.such.key"


@pytest.mark.parametrize("arg, text", [(170.0, "170"), (168.5, "168.5"), (3, "3"), ("A", "A")])
def test_format_arg(arg, text):
    assert format_arg(arg) == text


def test_catalogs_have_same_keys():
    keys = [set(load_messages(language)) for language in LANGUAGES]
    assert all(k == keys[0] for k in keys)


def test_every_test_has_catalog_entries():
    from posecheck.assessments import get_tests

    messages = load_messages("en")
    for test in get_tests():
        assert f"test.{test.key}.name" in messages
        assert f"test.{test.key}.desc" in messages


def test_vietnamese():
    t = build_translator("vi")
    assert t("app.score", 90, "A") != "Score: 90/100 (rank A)"
    assert "90" in t("app.score", 90, "A")


def test_unknown_language():
    with pytest.raises(ValueError):
        build_translator("xx")
