"""Validate frontmatter fields and build canonical Document records"""

import datetime
import logging
import re

from mdcorpus.config import Settings
from mdcorpus.core.errors import (
    Diagnostic,
    DiagnosticKind,
    InvalidDate,
    MissingField,
    Severity,
    warning,
)
from mdcorpus.core.models import Document, DocumentFragment, FrontmatterBlock
from mdcorpus.core.utils.slug import make_slug
from mdcorpus.core.utils.tokens import time_to_read


logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ('title', 'date', 'spoiler', 'cta')
DATE_RE = re.compile(r'^\d{4}-\d{2}-\d{2}$')


def parse_date(value: str, path: str = None, index: int = None) -> datetime.date:
    """Parse a strict YYYY-MM-DD calendar date."""
    value = value.strip()
    if not DATE_RE.match(value):
        raise InvalidDate(f"expected YYYY-MM-DD, got {value!r}", path, index)
    try:
        return datetime.date.fromisoformat(value)
    except ValueError as e:
        raise InvalidDate(f"{value!r} is not a calendar date: {e}", path, index) from e


def check_cta(cta: str, settings: Settings, path: str = None, index: int = None) -> Diagnostic | None:
    """Return an InvalidCta diagnostic when cta is not a recognized tag, else None."""
    if cta in settings.cta_tags:
        return None
    known = ", ".join(settings.cta_tags) or "<none>"
    return Diagnostic(
        kind=DiagnosticKind.invalid_cta,
        severity=Severity.error if settings.strict_cta else Severity.warning,
        message=f"unknown cta {cta!r} (known: {known})",
        path=path,
        index=index,
    )


def normalize(
    block: FrontmatterBlock,
    fragment: DocumentFragment,
    settings: Settings = None,
    ) -> tuple[Document, list[Diagnostic]]:
    """Map a parsed block to a Document plus any non-fatal diagnostics.

    Raises MissingField or InvalidDate. An unknown cta never raises: the
    document is kept with cta_known=False and the diagnostic is returned.
    """
    settings = settings or Settings()
    path, index = fragment.path, fragment.index
    values = {k: v.strip() for k, v in block.fields.items()}

    missing = [name for name in REQUIRED_FIELDS if not values.get(name)]
    if missing:
        raise MissingField(missing, path, index)

    published = parse_date(values['date'], path, index)

    diagnostics = []
    cta_diag = check_cta(values['cta'], settings, path, index)
    if cta_diag is not None:
        diagnostics.append(cta_diag)

    doc = Document(
        slug=make_slug(path, index),
        title=values['title'],
        date=published,
        spoiler=values['spoiler'],
        cta=values['cta'],
        cta_known=cta_diag is None,
        body=block.body,
        time_to_read=time_to_read(block.body),
        path=path,
        index=index,
        kind=fragment.kind,
        extra=tuple((k, v) for k, v in block.fields.items() if k not in REQUIRED_FIELDS),
    )
    logger.debug("normalized %s#%d -> %s", path, index, doc.slug)
    return doc, diagnostics


def duplicate_titles(documents: list[Document]) -> list[Diagnostic]:
    """Warn about documents in the same file sharing a title (draft pair or authoring slip)."""
    seen: dict[tuple[str, str], Document] = {}
    diagnostics = []
    for doc in sorted(documents, key=lambda d: (d.path, d.index)):
        key = (doc.path, doc.title.casefold())
        if key in seen:
            first = seen[key]
            diagnostics.append(warning(
                DiagnosticKind.duplicate_title,
                f"title {doc.title!r} also used by fragment {first.index} ({first.date} vs {doc.date})",
                doc.path,
                doc.index,
            ))
        else:
            seen[key] = doc
    return diagnostics
