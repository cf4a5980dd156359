"""Data models for the split, parse, normalize and assemble stages"""

import datetime
from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePosixPath
from typing import Optional

from pydantic import BaseModel


ARTICLE_SUFFIXES = {'.md', '.mdx', '.markdown'}

LANGUAGES = {
    '.js': 'javascript',
    '.jsx': 'jsx',
    '.ts': 'typescript',
    '.tsx': 'tsx',
}


class ContentKind(str, Enum):
    """What a blob (and every fragment cut from it) contains."""
    article = "article"
    source = "source"


@dataclass(frozen=True)
class RawBlob:
    """A source file read once at build start."""
    path: str                   # posix, relative to the build root
    text: str
    kind: ContentKind = ContentKind.article

    @property
    def suffix(self) -> str:
        return PurePosixPath(self.path).suffix.lower()


@dataclass(frozen=True)
class DocumentFragment:
    """One logical document cut out of a blob; text is already trimmed."""
    path:  str
    index: int
    text:  str
    kind:  ContentKind = ContentKind.article


@dataclass
class FrontmatterBlock:
    """Raw metadata (key order preserved, values untyped) plus the body after it."""
    fields: dict[str, str] = field(default_factory=dict)
    body:   str = ""


class Document(BaseModel):
    """A validated article record, immutable for the lifetime of one build."""
    model_config = {"frozen": True}

    slug:         str
    title:        str
    date:         datetime.date
    spoiler:      str
    cta:          str
    cta_known:    bool = True
    body:         str = ""
    time_to_read: int = 1
    path:         str
    index:        int = 0
    kind:         ContentKind = ContentKind.article
    extra:        tuple[tuple[str, str], ...] = ()    # non-required frontmatter, in source order

    def summary(self) -> dict:
        """Index entry for the published corpus (no body)."""
        return self.model_dump(mode="json", exclude={"body", "kind", "extra"})


class SourceEntry(BaseModel):
    """Embedded non-article content kept alongside the documents."""
    model_config = {"frozen": True}

    path:     str
    index:    int
    text:     str
    language: Optional[str] = None
