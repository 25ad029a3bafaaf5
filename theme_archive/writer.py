"""Write the generated site to disk.

Layout under the output directory::

    index.html
    themes.json              (copied when the catalog lives elsewhere)
    models.json              (optional, copied likewise)
    css/style.css, js/main.js, js/lightbox.js
    <pages_dir>/<theme id>.html

Every run overwrites what it writes; stale pages for removed ids are left
alone. Errors are not caught here.
"""
from __future__ import annotations

import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from theme_archive import logging_util, settings
from theme_archive.catalog_loader import (
    duplicate_ids,
    load_catalog,
    load_model_images,
    resolve_catalog_path,
    resolve_model_images_path,
)
from theme_archive.exceptions import MalformedCatalogError
from theme_archive.filters import extract_filter_options
from theme_archive.path_util import static_asset_path, theme_page_path
from theme_archive.render import render_home, render_theme_page
from theme_archive.settings import SiteConfig
from theme_archive.type_definitions import ThemeRecord

LOGGER = logging_util.get_logger(__name__)

_UNSAFE_IDS = {"", ".", ".."}
_UNSAFE_ID_CHARS = ("/", "\\", "\x00")


@dataclass
class SiteBuildResult:
    index_path: Path
    page_paths: List[Path] = field(default_factory=list)
    asset_paths: List[Path] = field(default_factory=list)
    dry_run: bool = False

    @property
    def written(self) -> List[Path]:
        return [self.index_path, *self.page_paths, *self.asset_paths]


def _check_page_id(theme: ThemeRecord, source: str) -> None:
    if theme.id.strip() in _UNSAFE_IDS or any(ch in theme.id for ch in _UNSAFE_ID_CHARS):
        raise MalformedCatalogError(
            source,
            f"theme id '{theme.id}' cannot be used as a file name",
            details={"name": theme.name},
        )


def _write_text(path: Path, text: str, dry_run: bool) -> None:
    if dry_run:
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def _copy(source: Path, target: Path, dry_run: bool) -> bool:
    """Copy ``source`` to ``target`` unless they are the same file."""
    try:
        if target.exists() and os.path.samefile(source, target):
            return False
    except FileNotFoundError:
        pass
    if not dry_run:
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, target)
    return True


def write_site(
    themes: Sequence[ThemeRecord],
    *,
    site: Optional[SiteConfig] = None,
    model_images: Optional[Mapping[str, str]] = None,
    catalog_source: str | os.PathLike[str] | None = None,
    model_images_source: str | os.PathLike[str] | None = None,
    copy_assets: bool = True,
    dry_run: bool = False,
) -> SiteBuildResult:
    """Render and write the home page, every detail page and the static assets.

    Args:
        themes: Catalog records in display order.
        site: Resolved configuration; defaults to :class:`SiteConfig` defaults.
        model_images: Optional model -> image table for the model picker.
        catalog_source: Catalog file to place next to ``index.html`` for the
            browser filter engine. Skipped when it is already there.
        model_images_source: Same, for ``models.json``.
        copy_assets: Copy the bundled css/js files into the output directory.
        dry_run: Render everything but write nothing.

    Returns:
        :class:`SiteBuildResult` listing every path written (or planned).
    """
    cfg = site if site is not None else SiteConfig()
    out_dir = cfg.output_path
    pages_dir = cfg.pages_path
    for theme in themes:
        _check_page_id(theme, cfg.catalog)
    if not dry_run:
        out_dir.mkdir(parents=True, exist_ok=True)
        pages_dir.mkdir(parents=True, exist_ok=True)

    for theme_id in duplicate_ids(themes):
        LOGGER.warning("theme_id_duplicate id=%s (last entry wins)", theme_id)

    options = extract_filter_options(themes)
    index_path = out_dir / "index.html"
    _write_text(index_path, render_home(themes, options, model_images=model_images, site=cfg), dry_run)
    LOGGER.info("home_page_written path=%s themes=%d", index_path, len(themes))
    result = SiteBuildResult(index_path=index_path, dry_run=dry_run)

    for theme in themes:
        page_path = theme_page_path(pages_dir, theme.id)
        _write_text(page_path, render_theme_page(theme, site=cfg), dry_run)
        result.page_paths.append(page_path)
        LOGGER.info("theme_page_written id=%s path=%s", theme.id, page_path)

    if copy_assets:
        for relative in settings.STATIC_ASSETS:
            target = out_dir / relative
            _copy(static_asset_path(relative), target, dry_run)
            result.asset_paths.append(target)

    for source, name in (
        (catalog_source, "themes.json"),
        (model_images_source, "models.json"),
    ):
        if source is None or not Path(source).exists():
            continue
        target = out_dir / name
        if _copy(Path(source), target, dry_run):
            result.asset_paths.append(target)
            LOGGER.info("data_file_copied source=%s target=%s", source, target)

    LOGGER.info(
        "site_generated pages=%d assets=%d out=%s%s",
        len(result.page_paths),
        len(result.asset_paths),
        out_dir,
        " (dry run)" if dry_run else "",
    )
    return result


def build_site(
    site: Optional[SiteConfig] = None,
    *,
    copy_assets: bool = True,
    dry_run: bool = False,
) -> SiteBuildResult:
    """Load the configured catalog (and model images) and write the site."""
    cfg = site if site is not None else settings.load_config()
    catalog_path = resolve_catalog_path(cfg.catalog)
    images_path = resolve_model_images_path(cfg.model_images)
    themes = load_catalog(catalog_path)
    model_images = load_model_images(images_path)
    return write_site(
        themes,
        site=cfg,
        model_images=model_images,
        catalog_source=catalog_path,
        model_images_source=images_path if model_images else None,
        copy_assets=copy_assets,
        dry_run=dry_run,
    )
