"""Publishing: write the assembled corpus as markdown files plus a JSON index"""

import json
import shutil
import tempfile
from pathlib import Path

import yaml

from mdcorpus.core.corpus import Corpus
from mdcorpus.core.errors import PublishError
from mdcorpus.core.models import Document


INDEX_FILE = "corpus.json"


def build_markdown(doc: Document) -> str:
    """Return the body with a canonical YAML frontmatter block prepended."""
    fm = {
        'slug': doc.slug,
        'title': doc.title,
        'date': doc.date.isoformat(),
        'spoiler': doc.spoiler,
        'cta': doc.cta,
    }
    header = yaml.safe_dump(fm, default_flow_style=False, allow_unicode=True, sort_keys=False)
    return f"---\n{header}---\n\n{doc.body.strip()}\n"


def build_index(corpus: Corpus) -> dict:
    """Build the corpus index: ordered document summaries and embedded source locations."""
    return {
        "documents": [d.summary() for d in corpus],
        "sources": [
            {"path": s.path, "index": s.index, "language": s.language}
            for s in corpus.sources
        ],
    }


def check_replaceable(output_dir: Path) -> None:
    """Raise PublishError unless output_dir is absent, empty, or a previous build's output."""
    if not output_dir.exists():
        return
    if not output_dir.is_dir():
        raise PublishError(f"{output_dir} exists and is not a directory")
    if (output_dir / INDEX_FILE).is_file() or not any(output_dir.iterdir()):
        return
    raise PublishError(f"{output_dir} is not empty and holds no {INDEX_FILE}; refusing to replace it")


def check_disjoint(source: Path, output_dir: Path) -> None:
    """Raise PublishError if output_dir is, contains, or sits inside the ingested source."""
    source, output_dir = Path(source).resolve(), Path(output_dir).resolve()
    if output_dir == source or output_dir in source.parents or source in output_dir.parents:
        raise PublishError(f"output directory {output_dir} overlaps the source {source}")


def write_corpus(corpus: Corpus, output_dir: Path) -> list[Path]:
    """Publish every document and the index to output_dir. Returns written markdown paths.

    Files are staged in a sibling temp directory and swapped in at the end, so
    output_dir never holds a mix of two builds. Only an empty directory or the
    output of an earlier build is ever replaced.
    """
    given = Path(output_dir)
    output_dir = given.resolve()
    check_replaceable(output_dir)
    output_dir.parent.mkdir(parents=True, exist_ok=True)
    staging = Path(tempfile.mkdtemp(prefix=f".{output_dir.name}-", dir=output_dir.parent))
    try:
        for doc in corpus:
            (staging / f"{doc.slug}.md").write_text(build_markdown(doc), encoding='utf-8')
        (staging / INDEX_FILE).write_text(
            json.dumps(build_index(corpus), indent=2, ensure_ascii=False),
            encoding='utf-8',
        )
        if output_dir.exists():
            shutil.rmtree(output_dir)
        staging.rename(output_dir)
    except BaseException:
        shutil.rmtree(staging, ignore_errors=True)
        raise
    return [given / f"{doc.slug}.md" for doc in corpus]
