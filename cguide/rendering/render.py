from __future__ import annotations

from cguide.markup.blocks import Document
from cguide.rendering.html_renderer import render_html
from cguide.rendering.markdown_renderer import render_markdown
from cguide.rendering.rich_renderer import render_rich
from cguide.rendering.text_renderer import DEFAULT_WIDTH, render_text

FORMATS = ["text", "html", "markdown", "rich"]
FILE_SUFFIXES = {
    "text": ".txt",
    "html": ".html",
    "markdown": ".md",
    "rich": ".txt",
}


def render(document: Document, fmt: str = "text", *, width: int = DEFAULT_WIDTH, full_page: bool = False) -> str:
    if fmt == "text":
        return render_text(document, width=width)
    if fmt == "html":
        return render_html(document, full_page=full_page)
    if fmt == "markdown":
        return render_markdown(document)
    if fmt == "rich":
        return render_rich(document, width=width)
    raise ValueError(f"Unsupported render format: {fmt}")
