from __future__ import annotations

import logging
import textwrap

from cguide.markup.blocks import Block, CodeFence, Document, Heading, ListItem, Paragraph, Rule
from cguide.markup.inline import plain_text

log = logging.getLogger("cguide.rendering")

DEFAULT_WIDTH = 80
CODE_INDENT = "    "


def _wrap(text: str, width: int, initial: str = "", subsequent: str = "") -> list[str]:
    return textwrap.wrap(
        text,
        width=width,
        initial_indent=initial,
        subsequent_indent=subsequent,
        break_long_words=False,
        break_on_hyphens=False,
    ) or [initial.rstrip()]


def _heading_lines(block: Heading, width: int) -> list[str]:
    text = plain_text(block.text)
    if block.level == 1:
        return [text, "=" * min(max(len(text), 3), width)]
    if block.level == 2:
        return [text, "-" * min(max(len(text), 3), width)]
    return ["#" * block.level + " " + text]


def _list_item_lines(block: ListItem, width: int, ordinal: int) -> list[str]:
    indent = "  " * block.depth
    marker = f"{ordinal}. " if block.ordered else "* "
    return _wrap(plain_text(block.text), width, indent + marker, indent + " " * len(marker))


def _code_lines(block: CodeFence) -> list[str]:
    lines = [f"{CODE_INDENT}[{block.language}]"] if block.language else []
    lines.extend((CODE_INDENT + line).rstrip() for line in block.text.split("\n"))
    return lines


def _block_lines(block: Block, width: int, ordinal: int) -> list[str]:
    if isinstance(block, Heading):
        return _heading_lines(block, width)
    if isinstance(block, Paragraph):
        return _wrap(plain_text(block.text), width)
    if isinstance(block, ListItem):
        return _list_item_lines(block, width, ordinal)
    if isinstance(block, CodeFence):
        return _code_lines(block)
    if isinstance(block, Rule):
        return ["-" * width]
    log.warning("Rendering unrecognized block %s as a literal paragraph", type(block).__name__)
    return _wrap(repr(block), width)


def render_text(document: Document, width: int = DEFAULT_WIDTH) -> str:
    out: list[str] = []
    counters: dict[int, int] = {}
    prev: Block | None = None
    for block in document.body:
        ordinal = 0
        if isinstance(block, ListItem):
            for depth in [d for d in counters if d > block.depth]:
                del counters[depth]
            if block.ordered:
                counters[block.depth] = counters.get(block.depth, 0) + 1
                ordinal = counters[block.depth]
        else:
            counters.clear()
        # Adjacent list items stay together; every other boundary gets a blank line.
        if out and not (isinstance(prev, ListItem) and isinstance(block, ListItem)):
            out.append("")
        out.extend(_block_lines(block, width, ordinal))
        prev = block
    return "\n".join(out).rstrip() + "\n"
