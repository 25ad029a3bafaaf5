"""Shared fixtures and sys.path adjustments for local runs."""

import json
import os
import sys
from pathlib import Path

import pytest

# Repository root (three levels up from this file) so `import theme_archive` works uninstalled
ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from theme_archive.type_definitions import ThemeRecord


SAMPLE_THEMES = [
    {
        "id": "xperia-gold",
        "name": "Xperia X1 Gold",
        "supportedModels": ["X1", "X2"],
        "originalModel": "X1",
        "platform": "Panther",
        "resolution": "480x800",
        "homeType": "Panel",
        "screenshots": ["img/gold1.png", "img/gold2.png"],
        "file": "themes/gold.zip",
    },
    {
        "id": "w810-walkman",
        "name": "Walkman Orange",
        "supportedModels": ["W810i"],
        "originalModel": ["W810i", "W800i"],
        "platform": "A1",
        "resolution": "176x220",
        "screenshots": ["img/walkman.png"],
        "file": "themes/walkman.thm",
        "swf": "themes/walkman_menu.swf",
    },
    {
        "id": "vodafone-red",
        "name": "Vodafone Red",
        "supportedModels": ["K750i"],
        "originalModel": "K750i",
        "carrier": "Vodafone",
        "platform": "A1",
        "resolution": "176x220",
        "screenshots": ["img/voda.png"],
        "file": "themes/voda.thm",
    },
    {
        "id": "dark-nebula",
        "name": "Dark Nebula",
        "supportedModels": ["K800i", "K810i"],
        "author": "Beamish",
        "carrier": "Orange",
        "platform": ["A1", "A2"],
        "resolution": "240x320",
        "note": "Works best with the dark menu.",
        "screenshots": ["img/nebula1.png", "img/nebula2.png", "img/nebula3.png"],
        "file": "themes/nebula.thm",
        "alternateFlashMenus": [
            {"screenshot": "img/nebula_alt1.png", "file": "themes/nebula_alt1.swf", "note": "Round icons"},
            {"screenshot": "img/nebula_alt2.png", "file": "themes/nebula_alt2.swf"},
        ],
    },
]


@pytest.fixture(autouse=True)
def ensure_test_environment():
    """Keep THEME_ARCHIVE_* variables from leaking between tests."""
    original_env = os.environ.copy()
    for key in list(os.environ):
        if key.startswith("THEME_ARCHIVE_"):
            del os.environ[key]

    yield

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def sample_raw() -> list[dict]:
    return json.loads(json.dumps(SAMPLE_THEMES))


@pytest.fixture
def sample_themes(sample_raw) -> list[ThemeRecord]:
    return [ThemeRecord.model_validate(item) for item in sample_raw]


@pytest.fixture
def catalog_file(tmp_path: Path, sample_raw) -> Path:
    path = tmp_path / "themes.json"
    path.write_text(json.dumps(sample_raw), encoding="utf-8")
    return path
