from __future__ import annotations

import locale

import pytest

from graphprofile.domain import culture as culture_module
from graphprofile.domain.culture import DEFAULT_CULTURE_NAME, current_culture


@pytest.mark.parametrize(
    ("locale_name", "expected"),
    [
        (None, (DEFAULT_CULTURE_NAME, "M/d/yyyy", "h:mm tt")),
        ("C", (DEFAULT_CULTURE_NAME, "M/d/yyyy", "h:mm tt")),
        ("de_DE.UTF-8", ("de-DE", "dd.MM.yyyy", "HH:mm")),
        ("en_GB", ("en-GB", "dd/MM/yyyy", "HH:mm")),
        ("sv_SE.UTF-8", ("sv-SE", "MM/dd/yyyy", "HH:mm")),
    ],
)
def test_current_culture_follows_process_locale(
    monkeypatch: pytest.MonkeyPatch,
    locale_name: str | None,
    expected: tuple[str, str, str],
) -> None:
    def fake_getlocale(category: int = locale.LC_CTYPE) -> tuple[str | None, str | None]:
        del category
        return (locale_name, None)

    monkeypatch.setattr(culture_module.locale, "getlocale", fake_getlocale)

    defaults = current_culture()

    assert (defaults.name, defaults.short_date_pattern, defaults.short_time_pattern) == expected
