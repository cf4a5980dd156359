"""Sentinel splitting: one raw blob into ordered document fragments"""

from mdcorpus.core.errors import EmptyFragment
from mdcorpus.core.models import DocumentFragment, RawBlob


def split_blob(blob: RawBlob, sentinel: str) -> list[DocumentFragment]:
    """Split blob.text on the exact sentinel; raise EmptyFragment for blank pieces."""
    if not sentinel:
        raise ValueError("sentinel must be a non-empty string")

    fragments = []
    for index, piece in enumerate(blob.text.split(sentinel)):
        text = piece.strip()
        if not text:
            raise EmptyFragment("fragment is empty after trimming", blob.path, index)
        fragments.append(DocumentFragment(path=blob.path, index=index, text=text, kind=blob.kind))
    return fragments


def join_fragments(texts: list[str], sentinel: str) -> str:
    """Concatenate documents into one blob, the inverse of split_blob."""
    return f"\n{sentinel}\n".join(t.strip() for t in texts) + "\n"
