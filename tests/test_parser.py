from __future__ import annotations

from cguide.markup.blocks import CodeFence, Heading, ListItem, Paragraph, Rule
from cguide.markup.inline import Span, plain_text, tokenize_inline
from cguide.markup.parser import parse_blocks, parse_document


def test_parse_blocks_kinds_in_order():
    text = (
        "# Title\n"
        "\n"
        "Intro line one\n"
        "line two.\n"
        "\n"
        "## Section ###\n"
        "\n"
        "- first\n"
        "  continued\n"
        "- second\n"
        "1. one\n"
        "   - nested\n"
        "\n"
        "```c\n"
        "int main(void)\n"
        "{\n"
        "\n"
        "    return 0;\n"
        "}\n"
        "```\n"
        "\n"
        "---\n"
    )
    blocks = parse_blocks(text)

    assert blocks == [
        Heading(level=1, text="Title"),
        Paragraph(text="Intro line one line two."),
        Heading(level=2, text="Section"),
        ListItem(text="first continued"),
        ListItem(text="second"),
        ListItem(text="one", ordered=True),
        ListItem(text="nested", depth=1),
        CodeFence(language="c", text="int main(void)\n{\n\n    return 0;\n}"),
        Rule(),
    ]


def test_preprocessor_lines_outside_fences_are_not_headings():
    blocks = parse_blocks("#include <stdio.h>\n")
    assert blocks == [Paragraph(text="#include <stdio.h>")]


def test_unterminated_fence_runs_to_end_of_input():
    blocks = parse_blocks("```\ncode\nmore")
    assert blocks == [CodeFence(language="", text="code\nmore")]


def test_tilde_fence_keeps_backtick_lines_verbatim():
    blocks = parse_blocks("~~~python\n```\nx = 1\n~~~\n")
    assert blocks == [CodeFence(language="python", text="```\nx = 1")]


def test_spaced_rule_wins_over_bullet():
    assert parse_blocks("- - -\n") == [Rule()]
    assert parse_blocks("* * *\n") == [Rule()]


def test_crlf_input_is_normalized():
    blocks = parse_blocks("# A\r\n\r\npara\r\n")
    assert blocks == [Heading(level=1, text="A"), Paragraph(text="para")]


def test_document_title_prefers_first_level_one_heading():
    doc = parse_document("guide", "## Intro\n\n# Real Title\n")
    assert doc.name == "guide"
    assert doc.title == "Real Title"


def test_document_title_falls_back_to_any_heading_then_name():
    assert parse_document("guide", "### Only Minor\n").title == "Only Minor"
    assert parse_document("guide", "Just text.\n").title == "guide"


def test_document_body_is_immutable_tuple():
    doc = parse_document("guide", "# T\n\nBody.\n")
    assert isinstance(doc.body, tuple)
    assert len(doc.body) == 2


def test_tokenize_inline_spans():
    spans = tokenize_inline("Use `strcpy` with **care** and *thought*, see [docs](https://example.org).")
    assert spans == [
        Span("text", "Use "),
        Span("code", "strcpy"),
        Span("text", " with "),
        Span("strong", "care"),
        Span("text", " and "),
        Span("em", "thought"),
        Span("text", ", see "),
        Span("link", "docs", "https://example.org"),
        Span("text", "."),
    ]


def test_tokenize_inline_leaves_snake_case_alone():
    assert tokenize_inline("use lower_snake_case names") == [Span("text", "use lower_snake_case names")]


def test_plain_text_keeps_link_targets():
    assert plain_text("see [docs](https://example.org) and `x`") == "see docs <https://example.org> and x"


def test_tokenize_inline_leaves_c_pointer_prose_alone():
    text = "declare char *p and int *q here"
    assert tokenize_inline(text) == [Span("text", text)]
    assert tokenize_inline("2 * 3 * 4 and a ** b ** c") == [Span("text", "2 * 3 * 4 and a ** b ** c")]


def test_tokenize_inline_emphasis_needs_tight_closing_delimiter():
    assert tokenize_inline("*p and int *q* done") == [
        Span("text", "*p and int "),
        Span("em", "q"),
        Span("text", " done"),
    ]
    assert tokenize_inline("**a** and _b_") == [Span("strong", "a"), Span("text", " and "), Span("em", "b")]
