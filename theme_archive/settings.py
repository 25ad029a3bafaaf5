from __future__ import annotations

# Standard library imports
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

# Third-party imports
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

# Local imports
from theme_archive.exceptions import ConfigError
from theme_archive.type_definitions import ThemeType, TypePrecedence

# ----------------------------------------------------------------------------------
# SITE DEFAULTS
# ----------------------------------------------------------------------------------
DEFAULT_SITE_TITLE: str = 'Sony Ericsson Themes'
DEFAULT_FOOTER_TEXT: str = 'made by Beamish 🦆'
DEFAULT_CATALOG: str = 'themes.json'
DEFAULT_MODEL_IMAGES: str = 'models.json'
DEFAULT_OUTPUT_DIR: str = '.'
DEFAULT_PAGES_DIR: str = 'themes-pages'
DEFAULT_TYPE_PRECEDENCE: TypePrecedence = TypePrecedence.AUTHOR_FIRST

# Sentinel used by every filter control for "any value matches"
ALL_SENTINEL: str = 'all'

# Ordered theme-type filter choices (after the sentinel)
THEME_TYPE_CHOICES: List[str] = [t.value for t in ThemeType]

# Badge labels for the derived theme type
THEME_TYPE_LABELS: Dict[ThemeType, str] = {
    ThemeType.USER: 'User-made',
    ThemeType.CARRIER: 'Carrier',
    ThemeType.PRELOADED: 'Preloaded',
}

# Static assets bundled with the package and copied next to index.html
STATIC_ASSETS: List[str] = [
    'css/style.css',
    'js/main.js',
    'js/lightbox.js',
]

# Lightbox limits (mirrored in js/lightbox.js)
LIGHTBOX_MIN_SCALE: float = 0.5
LIGHTBOX_MAX_SCALE: float = 5.0
LIGHTBOX_ZOOM_STEP: float = 0.1
LIGHTBOX_TOGGLE_SCALE: float = 2.0

# ----------------------------------------------------------------------------------
# ENVIRONMENT KEYS
# ----------------------------------------------------------------------------------
# Each SiteConfig field can be overridden by the matching variable.
ENV_KEYS: Dict[str, str] = {
    'site_title': 'THEME_ARCHIVE_TITLE',
    'footer_text': 'THEME_ARCHIVE_FOOTER',
    'catalog': 'THEME_ARCHIVE_CATALOG',
    'model_images': 'THEME_ARCHIVE_MODEL_IMAGES',
    'output_dir': 'THEME_ARCHIVE_OUTPUT_DIR',
    'pages_dir': 'THEME_ARCHIVE_PAGES_DIR',
    'type_precedence': 'THEME_ARCHIVE_TYPE_PRECEDENCE',
    'embed_cards': 'THEME_ARCHIVE_EMBED',
}
CONFIG_ENV_KEY: str = 'THEME_ARCHIVE_CONFIG'


class SiteConfig(BaseModel):
    """Resolved generator configuration."""

    site_title: str = Field(DEFAULT_SITE_TITLE, description="Title of the home page and header")
    footer_text: str = Field(DEFAULT_FOOTER_TEXT, description="Footer line shown on every page")
    catalog: str = Field(DEFAULT_CATALOG, description="Path of the theme catalog JSON array")
    model_images: str = Field(DEFAULT_MODEL_IMAGES, description="Path of the optional model -> image lookup table")
    output_dir: str = Field(DEFAULT_OUTPUT_DIR, description="Site root; index.html is written here")
    pages_dir: str = Field(DEFAULT_PAGES_DIR, description="Subdirectory of output_dir holding detail pages")
    type_precedence: TypePrecedence = Field(
        DEFAULT_TYPE_PRECEDENCE,
        description="Which of author/carrier decides the theme type when both are present",
    )
    embed_cards: bool = Field(False, description="Pre-render the home-page cards into index.html")

    model_config = ConfigDict(extra='forbid', protected_namespaces=())

    @property
    def output_path(self) -> Path:
        return Path(self.output_dir)

    @property
    def pages_path(self) -> Path:
        return Path(self.output_dir) / self.pages_dir


def _env_values() -> Dict[str, str]:
    out: Dict[str, str] = {}
    for field_name, env_key in ENV_KEYS.items():
        raw = os.getenv(env_key)
        raw = raw.strip() if isinstance(raw, str) else None
        if raw:
            out[field_name] = raw
    return out


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding='utf-8')) or {}
    except FileNotFoundError as exc:
        raise ConfigError(f"Config file not found: '{path}'") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Config file '{path}' is not valid YAML", details={'error': str(exc)}) from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file '{path}' must contain a mapping at the top level")
    return data


def load_config(path: str | os.PathLike[str] | None = None, **overrides: Optional[Any]) -> SiteConfig:
    """Resolve the site configuration.

    Precedence (highest first): keyword overrides (CLI flags), the YAML config
    file, ``THEME_ARCHIVE_*`` environment variables, built-in defaults.
    ``None`` overrides are ignored so argparse defaults can be passed through.

    Args:
        path: Optional YAML config path. Falls back to ``THEME_ARCHIVE_CONFIG``.
        **overrides: Field values that win over every other source.

    Raises:
        ConfigError: Unreadable config file or invalid field value.
    """
    values: Dict[str, Any] = _env_values()
    config_path = path or os.getenv(CONFIG_ENV_KEY)
    if config_path:
        values.update(_read_yaml(Path(config_path)))
    values.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return SiteConfig.model_validate(values)
    except ValidationError as exc:
        raise ConfigError("Invalid site configuration", details={'errors': exc.errors(include_url=False)}) from exc
