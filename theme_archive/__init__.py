"""Static catalog site generator for mobile-phone themes.

Reads ``themes.json`` and writes a filterable home page plus one detail page
per theme. Run ``theme-archive build`` or ``python -m theme_archive.main build``.
"""

from __future__ import annotations

__version__ = "1.0.0"

__all__ = ["__version__"]
