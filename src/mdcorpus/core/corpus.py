"""Corpus assembly: corpus-wide invariants and the read-only query surface"""

from collections import defaultdict
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional

from mdcorpus.core.errors import Diagnostic, DiagnosticKind, DuplicateSlug, Severity
from mdcorpus.core.models import Document, SourceEntry


def find_duplicate_slugs(documents: Iterable[Document]) -> list[Diagnostic]:
    """Return one error diagnostic per slug claimed by more than one document."""
    claims: dict[str, list[Document]] = defaultdict(list)
    for doc in documents:
        claims[doc.slug].append(doc)

    diagnostics = []
    for slug, docs in sorted(claims.items()):
        if len(docs) < 2:
            continue
        docs = sorted(docs, key=lambda d: (d.path, d.index))
        owners = ", ".join(f"{d.path}#{d.index}" for d in docs)
        diagnostics.append(Diagnostic(
            kind=DiagnosticKind.duplicate_slug,
            severity=Severity.error,
            message=f"slug {slug!r} produced by {owners}",
            path=docs[0].path,
            index=docs[0].index,
        ))
    return diagnostics


def order_documents(documents: Iterable[Document]) -> list[Document]:
    """Newest first; equal dates fall back to source path, then fragment index."""
    ordered = sorted(documents, key=lambda d: (d.path, d.index))
    # sort is stable, so the path order survives within each date
    ordered.sort(key=lambda d: d.date, reverse=True)
    return ordered


@dataclass(frozen=True)
class Corpus:
    """Immutable snapshot of every document produced by one build."""
    documents: tuple[Document, ...] = ()
    sources:   tuple[SourceEntry, ...] = ()
    _by_slug:  Mapping[str, Document] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'documents', tuple(self.documents))
        object.__setattr__(self, 'sources', tuple(self.sources))
        object.__setattr__(self, '_by_slug', MappingProxyType({d.slug: d for d in self.documents}))

    @classmethod
    def assemble(cls, documents: Iterable[Document], sources: Iterable[SourceEntry] = ()) -> "Corpus":
        """Check slug uniqueness and order documents; raise DuplicateSlug on any clash."""
        documents = list(documents)
        duplicates = find_duplicate_slugs(documents)
        if duplicates:
            raise DuplicateSlug(duplicates)
        ordered_sources = sorted(sources, key=lambda s: (s.path, s.index))
        return cls(documents=tuple(order_documents(documents)), sources=tuple(ordered_sources))

    def __iter__(self) -> Iterator[Document]:
        return iter(self.documents)

    def __len__(self) -> int:
        return len(self.documents)

    def __contains__(self, slug: object) -> bool:
        return slug in self._by_slug

    def all(self) -> list[Document]:
        return list(self.documents)

    def get(self, slug: str) -> Optional[Document]:
        return self._by_slug.get(slug)

    def by_cta(self, tag: str) -> list[Document]:
        return [d for d in self.documents if d.cta == tag]

    def unknown_cta(self) -> list[Document]:
        """Documents kept despite an unrecognized cta tag."""
        return [d for d in self.documents if not d.cta_known]

    def slugs(self) -> list[str]:
        return [d.slug for d in self.documents]
