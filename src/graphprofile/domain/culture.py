"""Process-wide culture defaults for locale and date/time formatting."""

from __future__ import annotations

import locale
from dataclasses import dataclass
from typing import Final

DEFAULT_CULTURE_NAME: Final = "en-US"

# Short patterns in the directory's own notation, keyed by language.
_SHORT_PATTERNS: Final[dict[str, tuple[str, str]]] = {
    "en-US": ("M/d/yyyy", "h:mm tt"),
    "en-GB": ("dd/MM/yyyy", "HH:mm"),
    "de": ("dd.MM.yyyy", "HH:mm"),
    "fr": ("dd/MM/yyyy", "HH:mm"),
    "es": ("dd/MM/yyyy", "H:mm"),
    "it": ("dd/MM/yyyy", "HH:mm"),
    "nl": ("d-M-yyyy", "HH:mm"),
    "ja": ("yyyy/MM/dd", "H:mm"),
    "zh": ("yyyy/M/d", "H:mm"),
}
_INVARIANT_PATTERNS: Final = ("MM/dd/yyyy", "HH:mm")


@dataclass(slots=True, frozen=True)
class CultureDefaults:
    name: str
    short_date_pattern: str
    short_time_pattern: str


def current_culture() -> CultureDefaults:
    """Resolve defaults from the process locale (``LC_TIME``)."""

    name = _culture_name(locale.getlocale(locale.LC_TIME)[0])
    date_pattern, time_pattern = _patterns_for(name)
    return CultureDefaults(
        name=name,
        short_date_pattern=date_pattern,
        short_time_pattern=time_pattern,
    )


def _culture_name(locale_name: str | None) -> str:
    if not locale_name or locale_name in {"C", "POSIX"}:
        return DEFAULT_CULTURE_NAME
    return locale_name.split(".", 1)[0].replace("_", "-")


def _patterns_for(name: str) -> tuple[str, str]:
    if name in _SHORT_PATTERNS:
        return _SHORT_PATTERNS[name]
    language = name.split("-", 1)[0]
    return _SHORT_PATTERNS.get(language, _INVARIANT_PATTERNS)


__all__ = ["DEFAULT_CULTURE_NAME", "CultureDefaults", "current_culture"]
