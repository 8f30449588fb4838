"""
Message catalogs for report text.

``build_translator(language)`` returns ``t(key, *args)``; ``{0}``, ``{1}``, ...
in the catalog text are replaced by the positional arguments.
"""

import json
from functools import lru_cache
from importlib import resources
from typing import Callable, Dict

Translator = Callable[..., str]

LANGUAGES = ("en", "vi")


@lru_cache(maxsize=None)
def load_messages(language: str) -> Dict[str, str]:
    if language not in LANGUAGES:
        raise ValueError(f"unsupported language: {language!r}")
    text = resources.files("posecheck").joinpath("locales").joinpath(f"{language}.json").read_text(encoding="utf-8")
    return json.loads(text)


def format_arg(arg) -> str:
    """170.0 -> '170', 168.5 -> '168.5'"""
    if isinstance(arg, float) and arg.is_integer():
        return str(int(arg))
    return str(arg)


def build_translator(language: str = "en") -> Translator:
    messages = load_messages(language)

    def t(key: str, *args) -> str:
        text = messages.get(key, key)
        for i, arg in enumerate(args):
            text = text.replace("{%d}" % i, format_arg(arg), 1)
        return text

    return t
