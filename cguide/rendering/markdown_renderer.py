from __future__ import annotations

import logging

from cguide.markup.blocks import Block, CodeFence, Document, Heading, ListItem, Paragraph, Rule

log = logging.getLogger("cguide.rendering")


def _fence_marker(text: str) -> str:
    longest = 0
    run = 0
    for ch in text:
        run = run + 1 if ch == "`" else 0
        longest = max(longest, run)
    return "`" * max(3, longest + 1)


def _block_markdown(block: Block) -> str:
    if isinstance(block, Heading):
        return "#" * block.level + " " + block.text
    if isinstance(block, Paragraph):
        return block.text
    if isinstance(block, ListItem):
        marker = "1." if block.ordered else "-"
        return "  " * block.depth + f"{marker} {block.text}"
    if isinstance(block, CodeFence):
        fence = _fence_marker(block.text)
        return f"{fence}{block.language}\n{block.text}\n{fence}"
    if isinstance(block, Rule):
        return "---"
    log.warning("Rendering unrecognized block %s as a literal paragraph", type(block).__name__)
    return repr(block).replace("*", "\\*").replace("_", "\\_").replace("`", "\\`")


def render_markdown(document: Document) -> str:
    out: list[str] = []
    prev: Block | None = None
    for block in document.body:
        if out and not (isinstance(prev, ListItem) and isinstance(block, ListItem)):
            out.append("")
        out.append(_block_markdown(block))
        prev = block
    return "\n".join(out).rstrip() + "\n"
