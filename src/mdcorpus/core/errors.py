"""Ingestion error hierarchy and the diagnostic records collected during a build"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class DiagnosticKind(str, Enum):
    """Every problem the pipeline can report"""
    empty_fragment = "EmptyFragment"
    malformed_frontmatter = "MalformedFrontmatter"
    missing_field = "MissingField"
    invalid_date = "InvalidDate"
    invalid_cta = "InvalidCta"
    duplicate_slug = "DuplicateSlug"
    duplicate_title = "DuplicateTitle"
    unreadable_source = "UnreadableSource"


class Severity(str, Enum):
    error = "error"
    warning = "warning"


class Diagnostic(BaseModel):
    """A problem tagged with where it was found."""
    model_config = {"frozen": True}

    kind:     DiagnosticKind
    severity: Severity
    message:  str
    path:     Optional[str] = None
    index:    Optional[int] = None    # fragment position within path

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.error

    def sort_key(self) -> tuple:
        return (self.path or "", -1 if self.index is None else self.index, self.kind.value, self.message)

    def __str__(self) -> str:
        where = self.path or "<corpus>"
        if self.index is not None:
            where = f"{where}#{self.index}"
        return f"{where}: {self.severity.value}: {self.kind.value}: {self.message}"


class IngestError(Exception):
    """Base class for failures raised by the splitter, parser, normalizer and assembler."""
    kind: DiagnosticKind

    def __init__(self, message: str, path: str = None, index: int = None):
        super().__init__(message)
        self.message = message
        self.path = path
        self.index = index

    def to_diagnostic(self) -> Diagnostic:
        return Diagnostic(
            kind=self.kind,
            severity=Severity.error,
            message=self.message,
            path=self.path,
            index=self.index,
        )

    def __str__(self) -> str:
        return str(self.to_diagnostic())


class UnreadableSource(IngestError):
    kind = DiagnosticKind.unreadable_source


class EmptyFragment(IngestError):
    kind = DiagnosticKind.empty_fragment


class MalformedFrontmatter(IngestError):
    kind = DiagnosticKind.malformed_frontmatter


class MissingField(IngestError):
    kind = DiagnosticKind.missing_field

    def __init__(self, fields: list[str], path: str = None, index: int = None):
        super().__init__(f"missing required field(s): {', '.join(fields)}", path, index)
        self.fields = list(fields)


class InvalidDate(IngestError):
    kind = DiagnosticKind.invalid_date


class DuplicateSlug(IngestError):
    """Raised by the assembler; carries one diagnostic per clashing slug."""
    kind = DiagnosticKind.duplicate_slug

    def __init__(self, diagnostics: list[Diagnostic]):
        slugs = ", ".join(d.message for d in diagnostics)
        super().__init__(f"duplicate slugs: {slugs}")
        self.diagnostics = list(diagnostics)


class PublishError(Exception):
    """The output directory cannot be replaced safely."""


class BuildFailed(Exception):
    """The build produced at least one error diagnostic; nothing was published."""

    def __init__(self, diagnostics: list[Diagnostic]):
        self.diagnostics = sorted(diagnostics, key=Diagnostic.sort_key)
        errors = sum(1 for d in self.diagnostics if d.is_error)
        super().__init__(f"build failed with {errors} error(s)")

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.is_error]


def warning(kind: DiagnosticKind, message: str, path: str = None, index: int = None) -> Diagnostic:
    """Build a warning-level diagnostic."""
    return Diagnostic(kind=kind, severity=Severity.warning, message=message, path=path, index=index)
