"""HTML rendering for the home page and the per-theme detail pages.

Pages are Jinja2 templates under ``web/templates`` with autoescaping on, so
every catalog value is escaped against ``& < > " '`` before it reaches the
document. Badge and meta-line rules are small ordered tables rather than
per-template conditionals.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from jinja2 import Environment, FileSystemLoader, select_autoescape

from theme_archive import lightbox, settings
from theme_archive.filters import extract_filter_options, theme_type
from theme_archive.path_util import TEMPLATES_DIR, site_relative, theme_page_href
from theme_archive.settings import SiteConfig
from theme_archive.type_definitions import FilterOptions, ThemeRecord, TypePrecedence

_ENV: Optional[Environment] = None


def get_environment() -> Environment:
    """Shared template environment (built on first use)."""
    global _ENV
    if _ENV is None:
        env = Environment(
            loader=FileSystemLoader(str(TEMPLATES_DIR)),
            autoescape=select_autoescape(["html"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        env.filters["site_relative"] = site_relative
        env.globals.update({
            "all_sentinel": settings.ALL_SENTINEL,
            "theme_type_choices": settings.THEME_TYPE_CHOICES,
            "theme_type_labels": {k.value: v for k, v in settings.THEME_TYPE_LABELS.items()},
        })
        _ENV = env
    return _ENV


def _site(site: Optional[SiteConfig]) -> SiteConfig:
    return site if site is not None else SiteConfig()


# Ordered (predicate, label, value) rules for the meta block. The first rule
# whose predicate holds decides the block; an author hides the preload lines.
MetaRule = Tuple[Callable[[ThemeRecord], bool], List[Tuple[str, Callable[[ThemeRecord], str]]]]

META_RULES: List[MetaRule] = [
    (lambda t: bool(t.author), [("Author", lambda t: t.author or "")]),
    (lambda t: True, [("Preloaded on", lambda t: ", ".join(t.original_models))]),
]

# Extra lines appended when no author is set
META_EXTRAS: List[Tuple[Callable[[ThemeRecord], bool], str, Callable[[ThemeRecord], str]]] = [
    (lambda t: not t.author and bool(t.carrier), "Carrier", lambda t: t.carrier or ""),
]


def meta_lines(theme: ThemeRecord) -> List[Tuple[str, str]]:
    """Label/value pairs shown under the detail-page heading."""
    lines: List[Tuple[str, str]] = []
    for predicate, fields in META_RULES:
        if predicate(theme):
            lines.extend((label, value(theme)) for label, value in fields)
            break
    for predicate, label, value in META_EXTRAS:
        if predicate(theme):
            lines.append((label, value(theme)))
    return lines


def detail_badges(theme: ThemeRecord, precedence: TypePrecedence) -> List[Tuple[str, str]]:
    """``(css class, text)`` badges for the detail page."""
    badges: List[Tuple[str, str]] = [("platform", p) for p in theme.platforms]
    if theme.resolution:
        badges.append(("resolution", theme.resolution))
    if theme.home_type:
        badges.append(("home-type", theme.home_type))
    kind = theme_type(theme, precedence)
    badges.append((f"type {kind.value}", settings.THEME_TYPE_LABELS[kind]))
    return badges


def model_badge(theme: ThemeRecord) -> str:
    if len(theme.supported_models) > 1:
        return "Multi-model"
    return theme.supported_models[0] if theme.supported_models else ""


def project_card(
    theme: ThemeRecord,
    precedence: TypePrecedence = settings.DEFAULT_TYPE_PRECEDENCE,
    pages_dir: str = settings.DEFAULT_PAGES_DIR,
) -> Dict[str, Any]:
    """Summary of one theme as the home-page card shows it."""
    kind = theme_type(theme, precedence)
    if theme.author:
        meta_label, meta_value = "Author", theme.author
    else:
        meta_label, meta_value = "Preloaded on", ", ".join(theme.original_models)
    badges: List[Tuple[str, str]] = [
        ("model", model_badge(theme)),
        ("platform", ", ".join(theme.platforms)),
        ("resolution", theme.resolution or ""),
    ]
    if theme.home_type:
        badges.append(("home-type", theme.home_type))
    badges.append((f"type {kind.value}", settings.THEME_TYPE_LABELS[kind]))
    return {
        "id": theme.id,
        "href": theme_page_href(pages_dir, theme.id),
        "name": theme.name,
        "preview": theme.preview,
        "meta_label": meta_label,
        "meta_value": meta_value,
        "badges": badges,
        "theme_type": kind.value,
    }


def render_home(
    themes: Sequence[ThemeRecord],
    options: Optional[FilterOptions] = None,
    *,
    model_images: Optional[Mapping[str, str]] = None,
    site: Optional[SiteConfig] = None,
) -> str:
    """Render ``index.html``.

    The page carries the filter controls and the list container; js/main.js
    fills the list from ``themes.json`` at runtime. With ``embed_cards`` set
    the container starts out holding every card, so the page still lists
    the catalog when the fetch fails (e.g. opened from ``file://``).
    """
    cfg = _site(site)
    if options is None:
        options = extract_filter_options(themes)
    cards = None
    if cfg.embed_cards:
        cards = [project_card(t, cfg.type_precedence, cfg.pages_dir) for t in themes]
    template = get_environment().get_template("index.html")
    return template.render(
        site=cfg,
        options=options,
        model_images=dict(model_images or {}),
        root="",
        cards=cards,
    )


def render_theme_page(
    theme: ThemeRecord,
    *,
    site: Optional[SiteConfig] = None,
) -> str:
    """Render one self-contained detail page for ``theme``."""
    cfg = _site(site)
    template = get_environment().get_template("theme.html")
    return template.render(
        site=cfg,
        root="../",
        theme=theme,
        badges=detail_badges(theme, cfg.type_precedence),
        meta=meta_lines(theme),
        models_text=", ".join(theme.supported_models),
        platforms_text=", ".join(theme.platforms),
        gallery_attrs=lightbox.data_attributes(navigable=True),
        alt_attrs=lightbox.data_attributes(navigable=False),
    )
