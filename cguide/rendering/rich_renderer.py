from __future__ import annotations

import io
import logging

from rich import box
from rich.console import Console, RenderableType
from rich.padding import Padding
from rich.panel import Panel
from rich.rule import Rule as RichRule
from rich.syntax import Syntax
from rich.text import Text

from cguide.markup.blocks import Block, CodeFence, Document, Heading, ListItem, Paragraph, Rule
from cguide.markup.inline import tokenize_inline

log = logging.getLogger("cguide.rendering")

HEADING_STYLES = {
    1: "bold magenta underline",
    2: "bold cyan",
    3: "bold",
}
SPAN_STYLES = {
    "code": "bold yellow",
    "strong": "bold",
    "em": "italic",
    "link": "underline blue",
}


def inline_text(text: str) -> Text:
    out = Text()
    for span in tokenize_inline(text):
        if span.kind == "link":
            out.append(span.text, style=f"{SPAN_STYLES['link']} link {span.url}")
            if span.url != span.text:
                out.append(f" <{span.url}>", style="dim")
        else:
            out.append(span.text, style=SPAN_STYLES.get(span.kind, ""))
    return out


def _block_renderable(block: Block, ordinal: int) -> RenderableType:
    if isinstance(block, Heading):
        heading = inline_text(block.text)
        heading.stylize(HEADING_STYLES.get(block.level, "bold"))
        if block.level <= 2:
            return Padding(heading, (1, 0, 0, 0))
        return heading
    if isinstance(block, Paragraph):
        return inline_text(block.text)
    if isinstance(block, ListItem):
        marker = f"{ordinal}. " if block.ordered else "• "
        item = Text("  " * block.depth + marker, style="bold")
        item.append_text(inline_text(block.text))
        return item
    if isinstance(block, CodeFence):
        syntax = Syntax(block.text, block.language or "text", theme="ansi_dark", word_wrap=False, background_color="default")
        return Panel(syntax, title=block.language or None, title_align="left", box=box.ROUNDED, expand=True)
    if isinstance(block, Rule):
        return RichRule(style="dim")
    log.warning("Rendering unrecognized block %s as a literal paragraph", type(block).__name__)
    return Text(repr(block))


def document_renderables(document: Document) -> list[RenderableType]:
    renderables: list[RenderableType] = []
    counters: dict[int, int] = {}
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
        renderables.append(_block_renderable(block, ordinal))
    return renderables


def print_document(console: Console, document: Document) -> None:
    for renderable in document_renderables(document):
        console.print(renderable)


def render_rich(document: Document, width: int = 80) -> str:
    buf = io.StringIO()
    console = Console(
        file=buf,
        width=width,
        color_system=None,
        force_terminal=False,
        no_color=True,
        highlight=False,
        emoji=False,
        soft_wrap=False,
    )
    print_document(console, document)
    return buf.getvalue()
