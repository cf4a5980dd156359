"""CLI command implementations"""

from pathlib import Path
from typing import Annotated, Optional

import typer

from mdcorpus.config import Settings, load_config
from mdcorpus.core.errors import BuildFailed, Diagnostic, PublishError
from mdcorpus.core.export import check_disjoint, write_corpus
from mdcorpus.core.pipeline import BuildResult, run_build
from mdcorpus.logging_setup import configure_logging


PathArg = Annotated[Path, typer.Argument(exists=True, readable=True, help="File or directory to ingest")]


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling, then set up logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    configure_logging(settings.log_level)
    return settings


def _echo_diagnostics(diagnostics: list[Diagnostic]) -> None:
    for d in diagnostics:
        typer.echo(f"  {d}", err=True)


def _build(path: Path, settings: Settings) -> BuildResult:
    """Run the pipeline, turning a failed build into a diagnostic listing and exit 1."""
    try:
        result = run_build(path, settings)
    except BuildFailed as e:
        typer.echo(f"Error: {e}", err=True)
        _echo_diagnostics(e.diagnostics)
        raise typer.Exit(1)
    except OSError as e:
        _fail(f"Could not read {path}", e)
    return result


def build_cmd(
    path: PathArg,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    sentinel: Annotated[Optional[str], typer.Option("--sentinel", help="Document boundary token")] = None,
    strict_cta: Annotated[Optional[bool], typer.Option("--strict-cta/--lenient-cta", help="Fail on unknown cta tags")] = None,
    workers: Annotated[Optional[int], typer.Option("--workers", help="Per-file worker threads")] = None,
    ):
    """Ingest, validate and publish the corpus."""
    settings = _settings(overrides={
        "output_dir": out, "sentinel": sentinel, "strict_cta": strict_cta, "max_workers": workers,
    })
    output_dir = Path(settings.output_dir)
    try:
        check_disjoint(path, output_dir)
    except PublishError as e:
        _fail(str(e))
    result = _build(path, settings)

    try:
        written = write_corpus(result.corpus, output_dir)
    except (OSError, PublishError) as e:
        _fail("Publish failed", e)
    for p in written:
        typer.echo(f"  {p}")
    typer.echo(
        f"Published {len(written)} document(s) from {result.files} file(s) to {output_dir}/ "
        f"({len(result.warnings)} warning(s))"
    )


def check_cmd(
    path: PathArg,
    sentinel: Annotated[Optional[str], typer.Option("--sentinel", help="Document boundary token")] = None,
    strict_cta: Annotated[Optional[bool], typer.Option("--strict-cta/--lenient-cta", help="Fail on unknown cta tags")] = None,
    ):
    """Validate sources without publishing anything."""
    settings = _settings(overrides={"sentinel": sentinel, "strict_cta": strict_cta})
    result = _build(path, settings)
    typer.echo(f"OK - {len(result.corpus)} document(s), {len(result.warnings)} warning(s)")


def list_cmd(
    path: PathArg,
    cta: Annotated[Optional[str], typer.Option("--cta", help="Only documents with this cta tag")] = None,
    ):
    """List documents in publish order (newest first)."""
    settings = _settings()
    result = _build(path, settings)
    docs = result.corpus.by_cta(cta) if cta else result.corpus.all()
    if not docs:
        typer.echo("No documents found.")
        raise typer.Exit(1)
    for d in docs:
        typer.echo(f"{d.date.isoformat()}  {d.slug}  {d.title}")
