"""Pipeline orchestration: discover and read blobs, process files in parallel, assemble the corpus"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from mdcorpus.config import Settings
from mdcorpus.core.corpus import Corpus, find_duplicate_slugs
from mdcorpus.core.errors import BuildFailed, Diagnostic, IngestError, UnreadableSource
from mdcorpus.core.frontmatter import parse_frontmatter
from mdcorpus.core.models import (
    ARTICLE_SUFFIXES,
    LANGUAGES,
    ContentKind,
    Document,
    DocumentFragment,
    RawBlob,
    SourceEntry,
)
from mdcorpus.core.normalize import duplicate_titles, normalize
from mdcorpus.core.split import split_blob


logger = logging.getLogger(__name__)


@dataclass
class FileResult:
    """Everything one per-file worker produced."""
    path:        str
    documents:   list[Document] = field(default_factory=list)
    sources:     list[SourceEntry] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)


@dataclass(frozen=True)
class BuildResult:
    """A published corpus plus the warnings raised while building it."""
    corpus:   Corpus
    warnings: tuple[Diagnostic, ...] = ()
    files:    int = 0


def content_kind(path: Path, settings: Settings) -> ContentKind | None:
    """Classify a file by suffix; None when it is not ingested at all."""
    suffix = path.suffix.lower()
    if suffix in ARTICLE_SUFFIXES:
        return ContentKind.article
    if suffix in settings.source_suffixes:
        return ContentKind.source
    return None


def discover_files(path: Path, settings: Settings = None) -> list[Path]:
    """Return sorted ingestible files under path, or [path] if a single ingestible file."""
    settings = settings or Settings()
    if path.is_file():
        return [path] if content_kind(path, settings) else []
    return sorted(p for p in path.rglob('*') if p.is_file() and content_kind(p, settings))


def read_blob(p: Path, root: Path, settings: Settings) -> RawBlob:
    """Read one file as UTF-8 (a leading BOM is dropped); undecodable bytes raise UnreadableSource."""
    rel = p.relative_to(root).as_posix()
    try:
        text = p.read_text(encoding='utf-8-sig')
    except UnicodeDecodeError as e:
        raise UnreadableSource(f"not valid UTF-8: {e.reason} at byte {e.start}", rel) from e
    return RawBlob(path=rel, text=text, kind=content_kind(p, settings))


def read_blobs(path: Path, settings: Settings = None) -> tuple[list[RawBlob], list[Diagnostic]]:
    """Read every ingestible file once; blob paths are posix and relative to path.

    Files that cannot be decoded are returned as diagnostics so the other files
    still get processed.
    """
    settings = settings or Settings()
    root = path if path.is_dir() else path.parent
    blobs, diagnostics = [], []
    for p in discover_files(path, settings):
        try:
            blobs.append(read_blob(p, root, settings))
        except UnreadableSource as e:
            diagnostics.append(e.to_diagnostic())
    return blobs, diagnostics


def process_fragment(fragment: DocumentFragment, settings: Settings) -> tuple[Document, list[Diagnostic]]:
    """Parse and normalize a single article fragment."""
    block = parse_frontmatter(fragment.text, settings.delimiter, fragment.path, fragment.index)
    return normalize(block, fragment, settings)


def process_blob(blob: RawBlob, settings: Settings = None) -> FileResult:
    """Split, parse and normalize one blob. Failures become diagnostics, never exceptions."""
    settings = settings or Settings()
    result = FileResult(path=blob.path)
    try:
        fragments = split_blob(blob, settings.sentinel)
    except IngestError as e:
        result.diagnostics.append(e.to_diagnostic())
        return result

    for fragment in fragments:
        if fragment.kind == ContentKind.source:
            result.sources.append(SourceEntry(
                path=fragment.path,
                index=fragment.index,
                text=fragment.text,
                language=LANGUAGES.get(blob.suffix),
            ))
            continue
        try:
            doc, diagnostics = process_fragment(fragment, settings)
        except IngestError as e:
            logger.debug("rejected %s#%d: %s", fragment.path, fragment.index, e.message)
            result.diagnostics.append(e.to_diagnostic())
            continue
        result.documents.append(doc)
        result.diagnostics.extend(diagnostics)

    result.diagnostics.extend(duplicate_titles(result.documents))
    logger.debug(
        "%s: %d fragment(s), %d document(s), %d diagnostic(s)",
        blob.path, len(fragments), len(result.documents), len(result.diagnostics),
    )
    return result


def process_blobs(blobs: list[RawBlob], settings: Settings = None) -> list[FileResult]:
    """Run process_blob for every blob concurrently; results keep input order."""
    settings = settings or Settings()
    if not blobs:
        return []
    with ThreadPoolExecutor(max_workers=settings.max_workers) as pool:
        return list(pool.map(lambda b: process_blob(b, settings), blobs))


def assemble(results: list[FileResult]) -> BuildResult:
    """Join point: check corpus-wide invariants over every file result and build the corpus.

    Raises BuildFailed with all diagnostics if any of them is an error.
    """
    documents = [d for r in results for d in r.documents]
    sources = [s for r in results for s in r.sources]
    diagnostics = [d for r in results for d in r.diagnostics]
    diagnostics.extend(find_duplicate_slugs(documents))

    if any(d.is_error for d in diagnostics):
        raise BuildFailed(diagnostics)

    corpus = Corpus.assemble(documents, sources)
    warnings = tuple(sorted(diagnostics, key=Diagnostic.sort_key))
    for w in warnings:
        logger.warning("%s", w)
    return BuildResult(corpus=corpus, warnings=warnings, files=len(results))


def run_build(path: Path, settings: Settings = None) -> BuildResult:
    """Read, process and assemble everything under path."""
    settings = settings or Settings()
    blobs, unreadable = read_blobs(Path(path), settings)
    logger.info("ingesting %d file(s) from %s", len(blobs) + len(unreadable), path)
    results = process_blobs(blobs, settings)
    results.extend(FileResult(path=d.path, diagnostics=[d]) for d in unreadable)
    result = assemble(results)
    logger.info(
        "assembled %d document(s), %d source fragment(s), %d warning(s)",
        len(result.corpus), len(result.corpus.sources), len(result.warnings),
    )
    return result
