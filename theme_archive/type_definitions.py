"""Pydantic models for the theme catalog.

These mirror the records in ``themes.json``. JSON keys are camelCase (the
catalog is shared with the browser filter engine) and map onto snake_case
attributes through field aliases. Validation is deliberately lenient: the
catalog is hand-edited and only ``id`` and ``name`` are required. Empty
strings count as absent and scalar values are coerced to text.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ThemeType(str, Enum):
    """Derived theme classification (never stored in the catalog)."""

    USER = "user"  # has an author
    CARRIER = "carrier"  # carrier-branded
    PRELOADED = "preloaded"  # factory-installed


class TypePrecedence(str, Enum):
    """Which field wins the theme-type classification when both are set."""

    AUTHOR_FIRST = "author_first"
    CARRIER_FIRST = "carrier_first"


def _as_text(value: Any) -> Optional[str]:
    """Text form of a scalar, or None when blank. Same rule as text() in js/main.js."""
    if value is None:
        return None
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer():
        # JSON 128.0 reads as 128 in the browser
        value = int(value)
    text = str(value)
    return text if text.strip() else None


def _as_text_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [t for t in (_as_text(v) for v in value) if t is not None]
    single = _as_text(value)
    return [single] if single is not None else []


class AlternateFlashMenu(BaseModel):
    """An alternative downloadable flash menu with its own preview."""

    screenshot: Optional[str] = None
    file: Optional[str] = None
    note: Optional[str] = None

    model_config = ConfigDict(extra='allow')

    @field_validator('screenshot', 'file', 'note', mode='before')
    @classmethod
    def _text(cls, value: Any) -> Optional[str]:
        return _as_text(value)


class ThemeRecord(BaseModel):
    id: str = Field(..., description="Unique output filename key")
    name: str = Field(..., description="Display name")
    supported_models: List[str] = Field(default_factory=list, alias='supportedModels')
    original_model: Union[str, List[str], None] = Field(
        None, alias='originalModel', description="Factory device(s) the theme shipped on"
    )
    author: Optional[str] = Field(None, description="Present for user-made themes")
    carrier: Optional[str] = Field(None, description="Present for carrier-branded themes")
    platform: Union[str, List[str], None] = None
    resolution: Optional[str] = Field(None, description="Screen resolution, e.g. '128x160'")
    home_type: Optional[str] = Field(None, alias='homeType')
    screenshots: List[str] = Field(default_factory=list, description="Relative image paths; first is the card preview")
    file: Optional[str] = Field(None, description="Relative path of the downloadable theme package")
    swf: Optional[str] = Field(None, description="Optional supplementary flash-menu asset")
    note: Optional[str] = None
    alternate_flash_menus: List[AlternateFlashMenu] = Field(default_factory=list, alias='alternateFlashMenus')

    model_config = ConfigDict(extra='allow', populate_by_name=True)

    @field_validator('id', 'name', mode='before')
    @classmethod
    def _required_text(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return _as_text(value)
        return value

    @field_validator('author', 'carrier', 'resolution', 'home_type', 'file', 'swf', 'note', mode='before')
    @classmethod
    def _optional_text(cls, value: Any) -> Optional[str]:
        return _as_text(value)

    @field_validator('supported_models', 'screenshots', mode='before')
    @classmethod
    def _text_list(cls, value: Any) -> List[str]:
        return _as_text_list(value)

    @field_validator('original_model', 'platform', mode='before')
    @classmethod
    def _text_or_list(cls, value: Any) -> Union[str, List[str], None]:
        if isinstance(value, (list, tuple)):
            return _as_text_list(value)
        return _as_text(value)

    @field_validator('alternate_flash_menus', mode='before')
    @classmethod
    def _menus(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, list):
            return [v for v in value if isinstance(v, (dict, AlternateFlashMenu))]
        return []

    @property
    def platforms(self) -> List[str]:
        if isinstance(self.platform, list):
            return list(self.platform)
        return [self.platform] if self.platform else []

    @property
    def original_models(self) -> List[str]:
        if isinstance(self.original_model, list):
            return list(self.original_model)
        return [self.original_model] if self.original_model else []

    @property
    def preview(self) -> Optional[str]:
        return self.screenshots[0] if self.screenshots else None


class FilterOptions(BaseModel):
    """Distinct, sorted values used to populate the filter controls."""

    models: List[str] = Field(default_factory=list)
    platforms: List[str] = Field(default_factory=list)
    resolutions: List[str] = Field(default_factory=list)


class FilterState(BaseModel):
    """Current selections of every filter control.

    ``"all"`` or an empty string means "any value matches".
    """

    model: str = "all"
    platform: str = "all"
    resolution: str = "all"
    theme_type: str = "all"
    search: str = ""

    model_config = ConfigDict(frozen=True)
