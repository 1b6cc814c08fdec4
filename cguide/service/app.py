from __future__ import annotations

import logging

from fastapi import APIRouter, FastAPI, HTTPException, Query
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from cguide.config import Config
from cguide.navigation import resolve_name
from cguide.rendering.render import render
from cguide.store.document_store import DocumentNotFound, DocumentStore

log = logging.getLogger("cguide.service")

SUFFIX_FORMATS = {
    ".html": "html",
    ".txt": "text",
    ".md": "markdown",
}


def _requested_format(raw_name: str, fmt: str | None) -> str:
    if fmt:
        return fmt
    lowered = raw_name.lower()
    for suffix, suffix_fmt in SUFFIX_FORMATS.items():
        if lowered.endswith(suffix):
            return suffix_fmt
    return "html"


def build_router(store: DocumentStore, cfg: Config) -> APIRouter:
    router = APIRouter()

    @router.get("/health")
    def health() -> dict:
        return {"status": "ok", "documents": len(store)}

    @router.get("/documents")
    def list_documents() -> list[dict]:
        return [{"name": doc.name, "title": doc.title} for doc in store.documents()]

    @router.get("/documents/{raw_name}")
    def get_document(
        raw_name: str,
        format: str | None = Query(default=None, pattern="^(html|text|markdown)$"),
    ) -> Response:
        try:
            doc = store.get_document(resolve_name(raw_name))
        except DocumentNotFound as e:
            log.info("404 for %s", raw_name)
            raise HTTPException(status_code=404, detail=str(e)) from None

        fmt = _requested_format(raw_name, format)
        body = render(doc, fmt, width=cfg.render.width, full_page=True)
        if fmt == "html":
            return HTMLResponse(body)
        return PlainTextResponse(body)

    return router


def create_app(store: DocumentStore, cfg: Config | None = None) -> FastAPI:
    cfg = cfg or Config()
    app = FastAPI(title="cguide", description="C style and security guides")
    app.include_router(build_router(store, cfg))
    return app


def serve(store: DocumentStore, cfg: Config) -> None:
    import uvicorn

    log.info("Serving %d documents on http://%s:%d", len(store), cfg.serve.host, cfg.serve.port)
    uvicorn.run(create_app(store, cfg), host=cfg.serve.host, port=cfg.serve.port, log_level="warning")
