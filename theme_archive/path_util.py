from __future__ import annotations

import os
from pathlib import Path
from urllib.parse import quote

# Bundled templates and static assets live beside the preview app
PACKAGE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = PACKAGE_DIR / "web" / "templates"
STATIC_DIR = PACKAGE_DIR / "web" / "static"

# Characters encodeURIComponent leaves untouched
_URI_COMPONENT_SAFE = "-_.!~*'()"


def static_asset_path(relative: str) -> Path:
    """Return the packaged source path of a static asset such as ``js/main.js``."""
    return STATIC_DIR / relative


def theme_page_name(theme_id: str) -> str:
    """File name of a detail page. The id is used verbatim on disk."""
    return f"{theme_id}.html"


def theme_page_path(pages_dir: str | os.PathLike[str], theme_id: str) -> Path:
    """Return ``<pages_dir>/<theme_id>.html``."""
    return Path(pages_dir) / theme_page_name(theme_id)


def theme_page_href(pages_dir_name: str, theme_id: str) -> str:
    """Link from the site root to a detail page, percent-encoding the id.
    
    Matches ``encodeURIComponent`` in js/main.js.
    """
    return f"{pages_dir_name}/{quote(theme_id, safe=_URI_COMPONENT_SAFE)}.html"


def site_relative(path: str | None, depth: int = 1) -> str:
    """Prefix a site-root-relative asset path for a page ``depth`` levels down.
    
    Detail pages sit one directory below the root, so ``s1.png`` becomes
    ``../s1.png``. Empty paths stay empty and absolute URLs pass through.
    """
    if not path:
        return ""
    if "://" in path or path.startswith(("data:", "//")):
        return path
    return "../" * depth + path.lstrip("/")
