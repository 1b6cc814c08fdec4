from __future__ import annotations

import re

from cguide.markup.blocks import Block, CodeFence, Document, Heading, ListItem, Paragraph, Rule

HEADING_RE = re.compile(r"^ {0,3}(#{1,6})(?:[ \t]+(.*?))?(?:[ \t]+#+)?[ \t]*$")
FENCE_RE = re.compile(r"^( {0,3})(`{3,}|~{3,})[ \t]*([^`\s]*)[^`]*$")
RULE_RE = re.compile(r"^ {0,3}(?:(?:-[ \t]*){3,}|(?:\*[ \t]*){3,}|(?:_[ \t]*){3,})$")
LIST_RE = re.compile(r"^([ \t]*)(?:([-*+])|(\d{1,9})[.)])[ \t]+(.*)$")

MAX_LIST_DEPTH = 3


def _indent_width(prefix: str) -> int:
    return len(prefix.replace("\t", "    "))


def _is_fence_close(line: str, marker: str) -> bool:
    stripped = line.strip()
    return (
        len(stripped) >= len(marker)
        and stripped[0] == marker[0]
        and stripped == stripped[0] * len(stripped)
    )


def _starts_block(line: str) -> bool:
    return bool(
        HEADING_RE.match(line) or FENCE_RE.match(line) or RULE_RE.match(line) or LIST_RE.match(line)
    )


def parse_blocks(text: str) -> list[Block]:
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    blocks: list[Block] = []
    i = 0
    n = len(lines)
    while i < n:
        line = lines[i]
        if not line.strip():
            i += 1
            continue

        m = FENCE_RE.match(line)
        if m:
            indent = len(m.group(1))
            marker = m.group(2)
            language = m.group(3)
            body: list[str] = []
            i += 1
            while i < n and not _is_fence_close(lines[i], marker):
                # Strip at most the opening fence's indent from content lines.
                content = lines[i]
                strip = min(indent, len(content) - len(content.lstrip(" ")))
                body.append(content[strip:])
                i += 1
            i += 1
            blocks.append(CodeFence(language=language, text="\n".join(body)))
            continue

        # A rule must win over a "-" or "*" bullet.
        if RULE_RE.match(line):
            blocks.append(Rule())
            i += 1
            continue

        m = HEADING_RE.match(line)
        if m:
            blocks.append(Heading(level=len(m.group(1)), text=(m.group(2) or "").strip()))
            i += 1
            continue

        m = LIST_RE.match(line)
        if m:
            depth = min(_indent_width(m.group(1)) // 2, MAX_LIST_DEPTH)
            parts = [m.group(4).strip()]
            i += 1
            while i < n and lines[i].strip() and lines[i][:1] in {" ", "\t"} and not _starts_block(lines[i]):
                parts.append(lines[i].strip())
                i += 1
            blocks.append(ListItem(text=" ".join(p for p in parts if p), ordered=m.group(3) is not None, depth=depth))
            continue

        parts = [line.strip()]
        i += 1
        while i < n and lines[i].strip() and not _starts_block(lines[i]):
            parts.append(lines[i].strip())
            i += 1
        blocks.append(Paragraph(text=" ".join(parts)))

    return blocks


def document_title(name: str, blocks: list[Block] | tuple[Block, ...]) -> str:
    headings = [b for b in blocks if isinstance(b, Heading) and b.text]
    for h in headings:
        if h.level == 1:
            return h.text
    if headings:
        return headings[0].text
    return name


def parse_document(name: str, text: str) -> Document:
    blocks = parse_blocks(text)
    return Document(name=name, title=document_title(name, blocks), body=tuple(blocks))
