from __future__ import annotations

import pytest

from theme_archive.exceptions import (
    ConfigError,
    FetchFailure,
    MalformedCatalogError,
    MissingInputFileError,
    ThemeArchiveError,
)


@pytest.mark.parametrize(
    "error, code",
    [
        (MissingInputFileError("themes.json"), "INPUT_MISSING"),
        (MalformedCatalogError("themes.json", "not valid JSON"), "CATALOG_MALFORMED"),
        (FetchFailure("public/index.html"), "FETCH_FAILED"),
        (ConfigError("bad value"), "CONFIG_INVALID"),
    ],
)
def test_error_codes_are_documented(error: ThemeArchiveError, code: str) -> None:
    assert isinstance(error, ThemeArchiveError)
    assert error.code == code
    assert str(error).startswith(f"[{code}] ")
    assert code in (ThemeArchiveError.__doc__ or "")


def test_details_are_appended() -> None:
    error = MalformedCatalogError("themes.json", "not valid JSON", details={"line": 3})
    assert str(error) == "[CATALOG_MALFORMED] Malformed catalog 'themes.json': not valid JSON\nDetails: {'line': 3}"
