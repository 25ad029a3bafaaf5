"""Local preview server for a generated site.

Browsers refuse ``fetch('themes.json')`` from ``file://`` pages, so the
client filter engine only works when the site is served over HTTP. This app
serves the output directory read-only; it is not a backend.
"""
from __future__ import annotations

import os
from pathlib import Path

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .. import logging_util
from ..catalog_loader import load_catalog
from ..exceptions import FetchFailure, ThemeArchiveError

LOGGER = logging_util.get_logger(__name__)


class NoCacheStatic(StaticFiles):
    async def get_response(self, path, scope):  # type: ignore[override]
        resp = await super().get_response(path, scope)
        # Regenerated pages must show up on reload
        resp.headers["Cache-Control"] = "no-cache"
        return resp


def create_app(site_dir: str | os.PathLike[str]) -> FastAPI:
    """Build the preview app for ``site_dir``.

    Raises:
        FetchFailure: ``site_dir`` does not exist or has no ``index.html``.
    """
    root = Path(site_dir)
    if not (root / "index.html").is_file():
        raise FetchFailure(str(root / "index.html"), details={"hint": "run 'theme-archive build' first"})

    app = FastAPI(title="Theme Archive Preview", docs_url=None, redoc_url=None, openapi_url=None)

    @app.get("/healthz")
    async def healthz() -> JSONResponse:
        try:
            themes = load_catalog(root / "themes.json")
        except ThemeArchiveError as exc:
            LOGGER.warning("preview_catalog_unavailable error=%s", exc.code)
            return JSONResponse({"status": "degraded", "error": exc.code, "themes": 0}, status_code=503)
        return JSONResponse({"status": "ok", "themes": len(themes)})

    app.mount("/", NoCacheStatic(directory=str(root), html=True), name="site")
    return app


def serve(site_dir: str | os.PathLike[str], host: str = "127.0.0.1", port: int = 8000) -> None:
    """Run the preview app with uvicorn until interrupted."""
    import uvicorn

    app = create_app(site_dir)
    LOGGER.info("preview_serving url=http://%s:%d/ dir=%s", host, port, site_dir)
    uvicorn.run(app, host=host, port=port, log_level="info")
