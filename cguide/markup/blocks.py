from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Heading:
    level: int
    text: str


@dataclass(frozen=True)
class Paragraph:
    text: str


@dataclass(frozen=True)
class CodeFence:
    language: str
    text: str


@dataclass(frozen=True)
class ListItem:
    text: str
    ordered: bool = False
    depth: int = 0


@dataclass(frozen=True)
class Rule:
    pass


Block = Heading | Paragraph | CodeFence | ListItem | Rule


@dataclass(frozen=True)
class Document:
    name: str
    title: str
    body: tuple[Block, ...] = field(default_factory=tuple)
