from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

from cguide.markup.blocks import CodeFence, Document, Heading, ListItem, Paragraph
from cguide.markup.inline import plain_text
from cguide.markup.parser import parse_document

log = logging.getLogger("cguide.store")

BUNDLED_DOCS_DIR = Path(__file__).resolve().parent.parent / "docs"


class DocumentNotFound(LookupError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Document not found: {name}")
        self.name = name


@dataclass(frozen=True)
class SearchHit:
    document: str
    block_index: int
    heading: str
    text: str


class DocumentStore:
    def __init__(self, documents: Iterable[Document]) -> None:
        by_name: dict[str, Document] = {}
        for doc in documents:
            if doc.name in by_name:
                raise ValueError(f"Duplicate document name: {doc.name}")
            by_name[doc.name] = doc
        self._by_name = MappingProxyType(by_name)

    def __len__(self) -> int:
        return len(self._by_name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def list_documents(self) -> list[str]:
        return sorted(self._by_name)

    def get_document(self, name: str) -> Document:
        try:
            return self._by_name[name]
        except KeyError:
            raise DocumentNotFound(name) from None

    def documents(self) -> list[Document]:
        return [self._by_name[name] for name in self.list_documents()]

    def search(self, term: str) -> list[SearchHit]:
        needle = term.strip().lower()
        if not needle:
            return []
        hits: list[SearchHit] = []
        for doc in self.documents():
            heading = doc.title
            for idx, block in enumerate(doc.body):
                if isinstance(block, Heading):
                    heading = plain_text(block.text)
                    text = heading
                elif isinstance(block, (Paragraph, ListItem)):
                    text = plain_text(block.text)
                elif isinstance(block, CodeFence):
                    text = block.text
                else:
                    continue
                for line in text.splitlines():
                    if needle in line.lower():
                        hits.append(SearchHit(document=doc.name, block_index=idx, heading=heading, text=line.strip()))
                        break
        return hits


def _markdown_files(directory: Path) -> list[Path]:
    return sorted(p for p in directory.glob("*.md") if p.is_file())


def load_documents(directory: Path) -> list[Document]:
    docs: list[Document] = []
    for path in _markdown_files(directory):
        doc = parse_document(path.stem.lower(), path.read_text(encoding="utf-8"))
        log.debug("Loaded document %s (%d blocks) from %s", doc.name, len(doc.body), path)
        docs.append(doc)
    return docs


def load_store(extra_dirs: Iterable[str | Path] = (), bundled_dir: Path = BUNDLED_DOCS_DIR) -> DocumentStore:
    docs = load_documents(bundled_dir)
    for raw in extra_dirs:
        directory = Path(raw).expanduser()
        if not directory.is_dir():
            raise ValueError(f"Document directory does not exist: {raw}")
        docs.extend(load_documents(directory))
    store = DocumentStore(docs)
    log.debug("Loaded %d documents: %s", len(store), ", ".join(store.list_documents()))
    return store
