from __future__ import annotations

from pathlib import Path

import pytest

from cguide.markup.blocks import Document, Paragraph
from cguide.store.document_store import DocumentNotFound, DocumentStore, load_store


def test_bundled_documents_are_listed_in_order():
    store = load_store()
    assert store.list_documents() == ["security", "style"]


def test_get_document_returns_requested_name():
    store = load_store()
    for name in store.list_documents():
        assert store.get_document(name).name == name


def test_style_document_has_heading_title_and_body():
    doc = load_store().get_document("style")
    assert doc.title == "C Style"
    assert doc.body


def test_security_document_title():
    assert load_store().get_document("security").title == "C Security"


def test_unknown_document_raises_not_found():
    store = load_store()
    with pytest.raises(DocumentNotFound, match="Document not found: does-not-exist") as exc:
        store.get_document("does-not-exist")
    assert isinstance(exc.value, LookupError)
    assert exc.value.name == "does-not-exist"


def test_extra_directory_adds_documents(tmp_path: Path):
    (tmp_path / "Extra.md").write_text("# Extra Guide\n\nHello.\n", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("ignored\n", encoding="utf-8")
    store = load_store([tmp_path])

    assert store.list_documents() == ["extra", "security", "style"]
    assert store.get_document("extra").title == "Extra Guide"


def test_extra_directory_name_collision_is_rejected(tmp_path: Path):
    (tmp_path / "style.md").write_text("# Other Style\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Duplicate document name: style"):
        load_store([tmp_path])


def test_missing_extra_directory_is_rejected(tmp_path: Path):
    with pytest.raises(ValueError, match="Document directory does not exist"):
        load_store([tmp_path / "missing"])


def test_store_exposes_no_mutation():
    doc = Document(name="a", title="A", body=(Paragraph("x"),))
    store = DocumentStore([doc])
    assert not hasattr(store, "add_document")
    with pytest.raises(TypeError):
        store._by_name["b"] = doc  # type: ignore[index]


def test_search_finds_term_case_insensitively():
    store = load_store()
    hits = store.search("snprintf")

    assert hits
    assert {h.document for h in hits} == {"security"}
    assert all("snprintf" in h.text.lower() for h in hits)
    assert hits[0].heading == "Buffer overflows"


def test_search_block_indices_follow_document_order():
    hits = [h for h in load_store().search("goto") if h.document == "style"]
    indices = [h.block_index for h in hits]
    assert indices == sorted(indices)
    assert len(set(indices)) == len(indices)


def test_search_with_blank_or_unknown_term_returns_nothing():
    store = load_store()
    assert store.search("   ") == []
    assert store.search("no-such-term-anywhere") == []
