from __future__ import annotations

import logging
from pathlib import Path
from typing import TextIO

from cguide.markup.outline import outline, snippets
from cguide.rendering.render import FILE_SUFFIXES, render
from cguide.rendering.text_renderer import DEFAULT_WIDTH
from cguide.store.document_store import DocumentStore, SearchHit

log = logging.getLogger("cguide.navigation")

KNOWN_SUFFIXES = (".md", ".html", ".txt")


def resolve_name(raw: str) -> str:
    name = raw.strip().strip("/").lower()
    for suffix in KNOWN_SUFFIXES:
        if name.endswith(suffix):
            return name[: -len(suffix)]
    return name


def show(store: DocumentStore, raw_name: str, fmt: str, out: TextIO, *, width: int = DEFAULT_WIDTH, full_page: bool = False) -> int:
    doc = store.get_document(resolve_name(raw_name))
    out.write(render(doc, fmt, width=width, full_page=full_page))
    return 0


def write_outline(store: DocumentStore, raw_name: str, out: TextIO) -> int:
    doc = store.get_document(resolve_name(raw_name))
    entries = outline(doc)
    top = min((e.level for e in entries), default=1)
    for entry in entries:
        out.write(f"{'  ' * (entry.level - top)}{entry.text}  #{entry.anchor}\n")
    return 0


def write_snippets(store: DocumentStore, raw_name: str, out: TextIO, language: str | None = None) -> int:
    doc = store.get_document(resolve_name(raw_name))
    for n, fence in enumerate(snippets(doc, language), start=1):
        out.write(f"--- {n} [{fence.language or 'text'}] ---\n")
        out.write(fence.text.rstrip("\n") + "\n")
    return 0


def format_hit(hit: SearchHit) -> str:
    return f"{hit.document}:{hit.block_index}: {hit.heading} | {hit.text}"


def write_search(store: DocumentStore, term: str, out: TextIO) -> int:
    hits = store.search(term)
    for hit in hits:
        out.write(format_hit(hit) + "\n")
    log.debug("Search for %r matched %d blocks", term, len(hits))
    return 0 if hits else 1


def export_documents(
    store: DocumentStore,
    out_dir: Path,
    fmt: str,
    *,
    width: int = DEFAULT_WIDTH,
    overwrite: bool = False,
) -> list[Path]:
    suffix = FILE_SUFFIXES[fmt]
    targets = [(doc, out_dir / f"{doc.name}{suffix}") for doc in store.documents()]
    existing = [p for _, p in targets if p.exists()]
    if existing and not overwrite:
        raise ValueError(f"Refusing to overwrite existing file: {existing[0]} (use --overwrite)")

    out_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for doc, path in targets:
        path.write_text(render(doc, fmt, width=width, full_page=True), encoding="utf-8")
        log.info("Wrote %s", path)
        written.append(path)
    return written
