from __future__ import annotations

import re
from dataclasses import dataclass

INLINE_RE = re.compile(
    r"(?P<code>`+)(?P<code_text>.+?)(?P=code)"
    r"|\[(?P<label>[^\]]+)\]\((?P<url>[^)\s]+)\)"
    r"|\*\*(?P<strong>[^*\s](?:[^*]*?[^*\s])?)\*\*"
    r"|__(?P<strong_u>[^_\s](?:[^_]*?[^_\s])?)__"
    r"|\*(?P<em>[^*\s](?:[^*]*?[^*\s])?)\*"
    r"|(?<!\w)_(?P<em_u>[^_\s](?:[^_]*?[^_\s])?)_(?!\w)"
)


@dataclass(frozen=True)
class Span:
    kind: str
    text: str
    url: str = ""


def tokenize_inline(text: str) -> list[Span]:
    spans: list[Span] = []
    pos = 0
    for m in INLINE_RE.finditer(text):
        if m.start() > pos:
            spans.append(Span("text", text[pos : m.start()]))
        if m.group("code") is not None:
            spans.append(Span("code", m.group("code_text").strip() or m.group("code_text")))
        elif m.group("label") is not None:
            spans.append(Span("link", m.group("label"), m.group("url")))
        elif m.group("strong") is not None or m.group("strong_u") is not None:
            spans.append(Span("strong", m.group("strong") or m.group("strong_u")))
        else:
            spans.append(Span("em", m.group("em") or m.group("em_u")))
        pos = m.end()
    if pos < len(text):
        spans.append(Span("text", text[pos:]))
    return spans


def plain_text(text: str) -> str:
    """Inline markup stripped; links keep their label followed by the URL."""
    out: list[str] = []
    for span in tokenize_inline(text):
        if span.kind == "link" and span.url != span.text:
            out.append(f"{span.text} <{span.url}>")
        else:
            out.append(span.text)
    return "".join(out)
