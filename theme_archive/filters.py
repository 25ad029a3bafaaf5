"""Filter-option extraction and the catalog filter engine.

This is the Python side of the filtering semantics js/main.js runs in the
browser; both must agree:

 - filter options are the distinct values of ``supportedModels``,
   ``platform`` and ``resolution`` across the catalog, sorted ascending;
 - a theme is visible when it passes every active filter (search text,
   model, platform, resolution, theme type);
 - the theme type comes from an ordered rule table whose order depends on
   the configured :class:`TypePrecedence`.
"""
from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from theme_archive import settings
from theme_archive.type_definitions import (
    FilterOptions,
    FilterState,
    ThemeRecord,
    ThemeType,
    TypePrecedence,
)

ThemeRule = Tuple[Callable[[ThemeRecord], bool], ThemeType]

_USER_RULE: ThemeRule = (lambda t: bool(t.author), ThemeType.USER)
_CARRIER_RULE: ThemeRule = (lambda t: bool(t.carrier), ThemeType.CARRIER)

THEME_TYPE_RULES: Dict[TypePrecedence, List[ThemeRule]] = {
    TypePrecedence.AUTHOR_FIRST: [_USER_RULE, _CARRIER_RULE],
    TypePrecedence.CARRIER_FIRST: [_CARRIER_RULE, _USER_RULE],
}


def _sorted_unique(values: Iterable[str]) -> List[str]:
    return sorted({v for v in values if v})


def extract_filter_options(themes: Iterable[ThemeRecord]) -> FilterOptions:
    models: List[str] = []
    platforms: List[str] = []
    resolutions: List[str] = []
    for t in themes:
        models.extend(t.supported_models)
        platforms.extend(t.platforms)
        if t.resolution:
            resolutions.append(t.resolution)
    return FilterOptions(
        models=_sorted_unique(models),
        platforms=_sorted_unique(platforms),
        resolutions=_sorted_unique(resolutions),
    )


def theme_type(theme: ThemeRecord, precedence: TypePrecedence = settings.DEFAULT_TYPE_PRECEDENCE) -> ThemeType:
    for predicate, kind in THEME_TYPE_RULES[TypePrecedence(precedence)]:
        if predicate(theme):
            return kind
    return ThemeType.PRELOADED


def search_haystack(theme: ThemeRecord) -> str:
    """Lower-cased text the search box is matched against."""
    parts = [
        theme.name or "",
        " ".join(theme.supported_models),
        theme.author or "",
        " ".join(theme.original_models),
        theme.carrier or "",
        " ".join(theme.platforms),
        theme.resolution or "",
    ]
    return " ".join(parts).lower()


def _is_any(value: Optional[str]) -> bool:
    return not value or value == settings.ALL_SENTINEL


def matches(
    theme: ThemeRecord,
    state: FilterState,
    precedence: TypePrecedence = settings.DEFAULT_TYPE_PRECEDENCE,
) -> bool:
    query = (state.search or "").strip().lower()
    if query and query not in search_haystack(theme):
        return False
    if not _is_any(state.model) and state.model not in theme.supported_models:
        return False
    if not _is_any(state.platform) and state.platform not in theme.platforms:
        return False
    if not _is_any(state.resolution) and theme.resolution != state.resolution:
        return False
    if not _is_any(state.theme_type) and theme_type(theme, precedence).value != state.theme_type:
        return False
    return True


def apply_filters(
    themes: Sequence[ThemeRecord],
    state: FilterState,
    precedence: TypePrecedence = settings.DEFAULT_TYPE_PRECEDENCE,
) -> List[str]:
    """Return ids of the themes visible under ``state``, in catalog order.

    An empty list is the "no results" case, not an error.
    """
    return [t.id for t in themes if matches(t, state, precedence)]
