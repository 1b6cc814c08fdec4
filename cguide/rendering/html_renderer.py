from __future__ import annotations

import logging
from html import escape

from cguide.markup.blocks import Block, CodeFence, Document, Heading, ListItem, Paragraph, Rule
from cguide.markup.inline import tokenize_inline
from cguide.markup.outline import AnchorAllocator

log = logging.getLogger("cguide.rendering")

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{title}</title>
</head>
<body>
<article id="{name}">
{body}
</article>
</body>
</html>"""


def inline_html(text: str) -> str:
    out: list[str] = []
    for span in tokenize_inline(text):
        if span.kind == "code":
            out.append(f"<code>{escape(span.text)}</code>")
        elif span.kind == "strong":
            out.append(f"<strong>{escape(span.text)}</strong>")
        elif span.kind == "em":
            out.append(f"<em>{escape(span.text)}</em>")
        elif span.kind == "link":
            out.append(f'<a href="{escape(span.url, quote=True)}">{escape(span.text)}</a>')
        else:
            out.append(escape(span.text))
    return "".join(out)


def _close_item(out: list[str]) -> None:
    # An item with no nested list closes on its own line.
    if out[-1].startswith("<li>") and not out[-1].endswith("</li>"):
        out[-1] += "</li>"
    else:
        out.append("</li>")


def _close_lists(open_lists: list[str], depth: int, out: list[str]) -> None:
    while len(open_lists) > depth:
        _close_item(out)
        out.append(f"</{open_lists.pop()}>")


def _list_lines(item: ListItem, open_lists: list[str], out: list[str]) -> None:
    # Every open list holds an open <li>; a deeper item nests inside it, one level at a time.
    tag = "ol" if item.ordered else "ul"
    depth = min(item.depth, len(open_lists))
    _close_lists(open_lists, depth + 1, out)
    if len(open_lists) == depth + 1:
        if open_lists[-1] == tag:
            _close_item(out)
        else:
            _close_lists(open_lists, depth, out)
    if len(open_lists) == depth:
        open_lists.append(tag)
        out.append(f"<{tag}>")
    out.append(f"<li>{inline_html(item.text)}")


def _block_html(block: Block, anchors: AnchorAllocator) -> str:
    if isinstance(block, Heading):
        level = min(max(block.level, 1), 6)
        return f'<h{level} id="{anchors.anchor(block.text)}">{inline_html(block.text)}</h{level}>'
    if isinstance(block, Paragraph):
        return f"<p>{inline_html(block.text)}</p>"
    if isinstance(block, CodeFence):
        cls = f' class="language-{escape(block.language, quote=True)}"' if block.language else ""
        return f"<pre><code{cls}>{escape(block.text)}</code></pre>"
    if isinstance(block, Rule):
        return "<hr>"
    log.warning("Rendering unrecognized block %s as a literal paragraph", type(block).__name__)
    return f"<p>{escape(repr(block))}</p>"


def render_html(document: Document, full_page: bool = False) -> str:
    anchors = AnchorAllocator()
    out: list[str] = []
    open_lists: list[str] = []
    for block in document.body:
        if isinstance(block, ListItem):
            _list_lines(block, open_lists, out)
            continue
        _close_lists(open_lists, 0, out)
        out.append(_block_html(block, anchors))
    _close_lists(open_lists, 0, out)

    fragment = "\n".join(out)
    if not full_page:
        return fragment + "\n"
    return PAGE_TEMPLATE.format(
        title=escape(document.title),
        name=escape(document.name, quote=True),
        body=fragment,
    ) + "\n"
