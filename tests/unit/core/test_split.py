"""Unit tests for core/split.py"""

import pytest

from mdcorpus.core.errors import EmptyFragment
from mdcorpus.core.models import ContentKind, RawBlob
from mdcorpus.core.split import join_fragments, split_blob


SENTINEL = "@@SPLIT@@"


def test_split_no_sentinel_single_fragment():
    """Text without the sentinel is one fragment holding the whole (trimmed) text."""
    blob = RawBlob(path="a.md", text="\n  just one document \n")
    fragments = split_blob(blob, SENTINEL)
    assert len(fragments) == 1
    assert fragments[0].text == "just one document"
    assert fragments[0].index == 0
    assert fragments[0].path == "a.md"


@pytest.mark.parametrize("texts", [
    ["one"],
    ["one", "two"],
    ["first doc\nwith lines", "second", "third: with colon"],
])
def test_split_join_yields_n_fragments(texts):
    """N documents joined with the sentinel split back into exactly N equal fragments."""
    fragments = split_blob(RawBlob(path="a.md", text=join_fragments(texts, SENTINEL)), SENTINEL)
    assert [f.text for f in fragments] == texts
    assert [f.index for f in fragments] == list(range(len(texts)))


def test_split_is_case_sensitive():
    """Only the exact sentinel splits; a case variant is ordinary text."""
    blob = RawBlob(path="a.md", text=f"one {SENTINEL.lower()} two")
    assert len(split_blob(blob, SENTINEL)) == 1


def test_split_empty_fragment_raises():
    """A blank piece between sentinels is reported with its position."""
    blob = RawBlob(path="a.md", text=f"one\n{SENTINEL}\n   \n{SENTINEL}\nthree")
    with pytest.raises(EmptyFragment) as exc:
        split_blob(blob, SENTINEL)
    assert exc.value.path == "a.md"
    assert exc.value.index == 1


def test_split_trailing_sentinel_is_empty_fragment():
    """A sentinel at the very end leaves an empty last fragment."""
    with pytest.raises(EmptyFragment):
        split_blob(RawBlob(path="a.md", text=f"one\n{SENTINEL}\n"), SENTINEL)


def test_split_empty_blob_raises():
    with pytest.raises(EmptyFragment):
        split_blob(RawBlob(path="a.md", text=""), SENTINEL)


def test_split_rejects_empty_sentinel():
    with pytest.raises(ValueError):
        split_blob(RawBlob(path="a.md", text="x"), "")


def test_split_carries_content_kind():
    """Fragments inherit the blob's content kind."""
    blob = RawBlob(path="Bio.js", text=f"a\n{SENTINEL}\nb", kind=ContentKind.source)
    assert {f.kind for f in split_blob(blob, SENTINEL)} == {ContentKind.source}
