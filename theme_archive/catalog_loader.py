"""Loader for the theme catalog and the optional model image table."""
from __future__ import annotations

import json
import os
from collections import Counter
from pathlib import Path
from typing import Any, Dict, Iterable, List

from pydantic import ValidationError

from theme_archive import logging_util, settings
from theme_archive.exceptions import MalformedCatalogError, MissingInputFileError
from theme_archive.type_definitions import ThemeRecord

LOGGER = logging_util.get_logger(__name__)


def _resolve_path(override: str | os.PathLike[str] | None, env_key: str, default: str) -> Path:
    if override:
        return Path(override)
    env_override = os.environ.get(env_key)
    if env_override and env_override.strip():
        return Path(env_override.strip())
    return Path(default)


def resolve_catalog_path(override: str | os.PathLike[str] | None = None) -> Path:
    return _resolve_path(override, settings.ENV_KEYS["catalog"], settings.DEFAULT_CATALOG)


def resolve_model_images_path(override: str | os.PathLike[str] | None = None) -> Path:
    return _resolve_path(override, settings.ENV_KEYS["model_images"], settings.DEFAULT_MODEL_IMAGES)


def _read_json(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8-sig")
    except FileNotFoundError as exc:
        raise MissingInputFileError(str(path)) from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedCatalogError(
            str(path),
            "not valid JSON",
            details={"line": exc.lineno, "column": exc.colno, "error": exc.msg},
        ) from exc


def parse_catalog(raw: Any, source: str = "<memory>") -> List[ThemeRecord]:
    """Turn decoded JSON into theme records, preserving catalog order.

    Only the top-level shape and the required ``id``/``name`` keys are
    checked; every other field is optional.
    """
    if not isinstance(raw, list):
        raise MalformedCatalogError(source, f"top level must be an array, got {type(raw).__name__}")
    themes: List[ThemeRecord] = []
    for position, item in enumerate(raw):
        if not isinstance(item, dict):
            raise MalformedCatalogError(
                source,
                f"entry {position} must be an object, got {type(item).__name__}",
            )
        try:
            themes.append(ThemeRecord.model_validate(item))
        except ValidationError as exc:
            raise MalformedCatalogError(
                source,
                f"entry {position} is missing a usable id or name",
                details={"errors": exc.errors(include_url=False)},
            ) from exc
    return themes


def load_catalog(catalog_path: str | os.PathLike[str] | None = None) -> List[ThemeRecord]:
    """Load the theme catalog.

    Args:
        catalog_path: Optional override path. Defaults to ``themes.json`` or the
            ``THEME_ARCHIVE_CATALOG`` environment variable.

    Returns:
        Theme records in catalog order.

    Raises:
        MissingInputFileError: The catalog file does not exist.
        MalformedCatalogError: Invalid JSON, a non-array top level, or an entry
            that is not an object with an id and a name.
    """
    resolved = resolve_catalog_path(catalog_path)
    themes = parse_catalog(_read_json(resolved), str(resolved))
    LOGGER.info("theme_catalog_loaded size=%d path=%s", len(themes), resolved)
    return themes


def load_model_images(images_path: str | os.PathLike[str] | None = None) -> Dict[str, str]:
    """Load the optional device-model -> representative image table.

    A missing file is normal and yields an empty mapping.

    Raises:
        MalformedCatalogError: The file exists but is not a JSON object of strings.
    """
    resolved = resolve_model_images_path(images_path)
    if not resolved.exists():
        LOGGER.debug("model_images_missing path=%s", resolved)
        return {}
    raw = _read_json(resolved)
    if not isinstance(raw, dict):
        raise MalformedCatalogError(str(resolved), f"top level must be an object, got {type(raw).__name__}")
    images: Dict[str, str] = {}
    for model, image in raw.items():
        if not isinstance(image, str):
            raise MalformedCatalogError(str(resolved), f"image for model '{model}' must be a string")
        images[str(model)] = image
    LOGGER.info("model_images_loaded size=%d path=%s", len(images), resolved)
    return images


def duplicate_ids(themes: Iterable[ThemeRecord]) -> List[str]:
    """Return ids that appear more than once, in first-seen order."""
    counts = Counter(t.id for t in themes)
    return [theme_id for theme_id, count in counts.items() if count > 1]
