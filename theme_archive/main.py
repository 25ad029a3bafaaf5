"""Command-line entrypoint for the theme archive site generator.

Subcommands:
  build    generate index.html, the detail pages and the client assets
  options  print the filter option sets derived from the catalog
  filter   print the ids the home-page filters would show
  serve    preview a generated site over HTTP
"""
from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

from theme_archive import logging_util, settings
from theme_archive.catalog_loader import load_catalog
from theme_archive.exceptions import ThemeArchiveError
from theme_archive.filters import apply_filters, extract_filter_options
from theme_archive.type_definitions import FilterState, TypePrecedence
from theme_archive.writer import build_site

logger = logging_util.get_logger(__name__)


def _add_config_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--config", metavar="PATH", default=None,
                   help="YAML config file (or THEME_ARCHIVE_CONFIG)")
    p.add_argument("--catalog", metavar="PATH", default=None,
                   help="Theme catalog JSON array (default: themes.json)")


def _build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="theme-archive", description="Static theme catalog site generator")
    sub = p.add_subparsers(dest="command", required=True)

    b = sub.add_parser("build", help="Generate the site")
    _add_config_args(b)
    b.add_argument("--model-images", metavar="PATH", default=None,
                   help="Optional model -> image JSON table (default: models.json)")
    b.add_argument("--out", metavar="DIR", default=None, help="Output directory (default: .)")
    b.add_argument("--pages-dir", metavar="NAME", default=None,
                   help="Detail page subdirectory (default: themes-pages)")
    b.add_argument("--title", metavar="TEXT", default=None, help="Site title")
    b.add_argument("--type-precedence", choices=[t.value for t in TypePrecedence], default=None,
                   help="Which of author/carrier decides the theme type when both are set")
    b.add_argument("--no-assets", action="store_true", help="Do not copy css/js assets")
    b.add_argument("--embed", action="store_true", default=None,
                   help="Pre-render theme cards into index.html (readable without the JSON fetch)")
    b.add_argument("--dry-run", action="store_true", help="Render without writing files")

    o = sub.add_parser("options", help="Print derived filter options")
    _add_config_args(o)
    o.add_argument("--json", action="store_true", help="Emit JSON instead of text")

    f = sub.add_parser("filter", help="Print ids matching the given filters")
    _add_config_args(f)
    f.add_argument("--model", default=settings.ALL_SENTINEL)
    f.add_argument("--platform", default=settings.ALL_SENTINEL)
    f.add_argument("--resolution", default=settings.ALL_SENTINEL)
    f.add_argument("--type", dest="theme_type", default=settings.ALL_SENTINEL,
                   choices=[settings.ALL_SENTINEL, *settings.THEME_TYPE_CHOICES])
    f.add_argument("--search", default="")
    f.add_argument("--type-precedence", choices=[t.value for t in TypePrecedence], default=None)

    s = sub.add_parser("serve", help="Preview a generated site")
    s.add_argument("--config", metavar="PATH", default=None)
    s.add_argument("--out", metavar="DIR", default=None, help="Site directory to serve")
    s.add_argument("--host", default="127.0.0.1")
    s.add_argument("--port", type=int, default=8000)
    return p


def _cmd_build(args: argparse.Namespace) -> None:
    cfg = settings.load_config(
        args.config,
        catalog=args.catalog,
        model_images=args.model_images,
        output_dir=args.out,
        pages_dir=args.pages_dir,
        site_title=args.title,
        type_precedence=args.type_precedence,
        embed_cards=args.embed,
    )
    if args.dry_run:
        logger.info("DRY RUN - no files will be written")
    result = build_site(cfg, copy_assets=not args.no_assets, dry_run=args.dry_run)
    logger.info("All theme pages generated successfully! (%d pages)", len(result.page_paths))


def _cmd_options(args: argparse.Namespace) -> None:
    cfg = settings.load_config(args.config, catalog=args.catalog)
    options = extract_filter_options(load_catalog(cfg.catalog))
    if args.json:
        print(json.dumps(options.model_dump(), indent=2, ensure_ascii=False))
        return
    for label, values in (
        ("Models", options.models),
        ("Platforms", options.platforms),
        ("Resolutions", options.resolutions),
    ):
        print(f"{label}: {', '.join(values) if values else '-'}")


def _cmd_filter(args: argparse.Namespace) -> None:
    cfg = settings.load_config(args.config, catalog=args.catalog, type_precedence=args.type_precedence)
    state = FilterState(
        model=args.model,
        platform=args.platform,
        resolution=args.resolution,
        theme_type=args.theme_type,
        search=args.search,
    )
    ids = apply_filters(load_catalog(cfg.catalog), state, cfg.type_precedence)
    if not ids:
        print("No themes match your search/filters.", file=sys.stderr)
    for theme_id in ids:
        print(theme_id)


def _cmd_serve(args: argparse.Namespace) -> None:
    from theme_archive.web.app import serve

    cfg = settings.load_config(args.config, output_dir=args.out)
    serve(cfg.output_dir, host=args.host, port=args.port)


_COMMANDS = {
    "build": _cmd_build,
    "options": _cmd_options,
    "filter": _cmd_filter,
    "serve": _cmd_serve,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_arg_parser().parse_args(argv)
    try:
        _COMMANDS[args.command](args)
    except ThemeArchiveError as exc:
        logger.error("%s", exc)
        return 1
    return 0


def entrypoint() -> None:
    sys.exit(main())


if __name__ == "__main__":
    entrypoint()
