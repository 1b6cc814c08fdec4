from __future__ import annotations

from dataclasses import dataclass

from cguide.markup.blocks import CodeFence, Document, Heading
from cguide.markup.inline import plain_text


@dataclass(frozen=True)
class OutlineEntry:
    level: int
    text: str
    anchor: str


def slugify(text: str) -> str:
    slug = "".join(ch.lower() if ch.isalnum() else "-" for ch in plain_text(text))
    while "--" in slug:
        slug = slug.replace("--", "-")
    return slug.strip("-") or "section"


class AnchorAllocator:
    """Hands out unique heading anchors within one rendered document."""

    def __init__(self) -> None:
        self._issued: set[str] = set()
        self._next_suffix: dict[str, int] = {}

    def anchor(self, text: str) -> str:
        base = slugify(text)
        n = self._next_suffix.get(base, 0)
        candidate = base if n == 0 else f"{base}-{n}"
        # A suffixed slug may already belong to a heading such as "Foo 1".
        while candidate in self._issued:
            n += 1
            candidate = f"{base}-{n}"
        self._next_suffix[base] = n + 1
        self._issued.add(candidate)
        return candidate


def outline(document: Document) -> list[OutlineEntry]:
    anchors = AnchorAllocator()
    return [
        OutlineEntry(level=b.level, text=plain_text(b.text), anchor=anchors.anchor(b.text))
        for b in document.body
        if isinstance(b, Heading)
    ]


def snippets(document: Document, language: str | None = None) -> list[CodeFence]:
    wanted = language.lower().strip() if language else None
    return [
        b
        for b in document.body
        if isinstance(b, CodeFence) and (wanted is None or b.language.lower() == wanted)
    ]
