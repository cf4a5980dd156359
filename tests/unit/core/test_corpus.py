"""Unit tests for core/corpus.py"""

import datetime
import itertools

import pytest

from mdcorpus.core.corpus import Corpus, find_duplicate_slugs
from mdcorpus.core.errors import DiagnosticKind, DuplicateSlug
from mdcorpus.core.models import Document, SourceEntry


def _doc(slug, date="2023-01-01", path=None, index=0, cta="swift", cta_known=True):
    return Document(
        slug=slug,
        title=slug.title(),
        date=datetime.date.fromisoformat(date),
        spoiler="s",
        cta=cta,
        cta_known=cta_known,
        path=path or f"{slug}.md",
        index=index,
    )


def test_assemble_orders_by_date_descending():
    corpus = Corpus.assemble([_doc("old", "2022-05-01"), _doc("new", "2023-01-24"), _doc("mid", "2022-12-31")])
    assert corpus.slugs() == ["new", "mid", "old"]


def test_assemble_ties_broken_by_path():
    docs = [_doc("c", path="c.md"), _doc("a", path="a.md"), _doc("b", path="b.md")]
    assert Corpus.assemble(docs).slugs() == ["a", "b", "c"]


def test_assemble_ties_in_one_file_use_fragment_index():
    docs = [_doc("x--1", path="x.md", index=1), _doc("x", path="x.md", index=0)]
    assert Corpus.assemble(docs).slugs() == ["x", "x--1"]


def test_ordering_holds_for_every_pair():
    dates = ["2023-01-01", "2021-06-30", "2023-01-01", "2022-02-02"]
    docs = [_doc(f"d{i}", d, path=f"{chr(ord('z') - i)}.md") for i, d in enumerate(dates)]
    published = Corpus.assemble(docs).all()
    for a, b in itertools.combinations(published, 2):
        assert a.date >= b.date
        if a.date == b.date:
            assert a.path <= b.path


def test_ordering_independent_of_input_order():
    docs = [_doc("a", "2023-01-01"), _doc("b", "2023-01-02"), _doc("c", "2023-01-01")]
    assert Corpus.assemble(docs).slugs() == Corpus.assemble(reversed(docs)).slugs()


def test_assemble_rejects_duplicate_slug():
    with pytest.raises(DuplicateSlug) as exc:
        Corpus.assemble([_doc("same", path="a.md"), _doc("same", path="b.md"), _doc("other")])
    assert len(exc.value.diagnostics) == 1
    assert "a.md#0, b.md#0" in exc.value.diagnostics[0].message


def test_find_duplicate_slugs_reports_each_clash():
    docs = [_doc("x", path="1.md"), _doc("x", path="2.md"), _doc("y", path="3.md"), _doc("y", path="4.md")]
    diagnostics = find_duplicate_slugs(docs)
    assert [d.kind for d in diagnostics] == [DiagnosticKind.duplicate_slug] * 2
    assert all(d.is_error for d in diagnostics)


def test_queries():
    corpus = Corpus.assemble([
        _doc("a", cta="swift"),
        _doc("b", cta="software-design"),
        _doc("c", cta="podcast", cta_known=False),
    ])
    assert len(corpus) == 3
    assert corpus.get("b").cta == "software-design"
    assert corpus.get("missing") is None
    assert "a" in corpus
    assert [d.slug for d in corpus.by_cta("swift")] == ["a"]
    assert [d.slug for d in corpus.unknown_cta()] == ["c"]


def test_corpus_is_read_only():
    corpus = Corpus.assemble([_doc("a")])
    with pytest.raises(AttributeError):
        corpus.documents = ()
    with pytest.raises(TypeError):
        corpus._by_slug["b"] = _doc("b")
    corpus.all().clear()
    assert len(corpus) == 1


def test_sources_are_ordered():
    sources = [SourceEntry(path="b.js", index=0, text="x"), SourceEntry(path="a.js", index=1, text="y")]
    corpus = Corpus.assemble([], sources)
    assert [s.path for s in corpus.sources] == ["a.js", "b.js"]
    assert len(corpus) == 0


def test_corpus_coerces_lists_to_tuples():
    """Building a Corpus from lists still gives an unmodifiable snapshot."""
    docs = [_doc("a")]
    corpus = Corpus(documents=docs, sources=[SourceEntry(path="a.js", index=0, text="x")])
    assert isinstance(corpus.documents, tuple)
    assert isinstance(corpus.sources, tuple)
    docs.append(_doc("b"))
    assert corpus.slugs() == ["a"]
