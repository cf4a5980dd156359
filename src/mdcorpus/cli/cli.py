"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdcorpus.cli.commands import build_cmd, check_cmd, list_cmd


app = typer.Typer(name="mdcorpus", no_args_is_help=True, help="Markdown content ingestion: split, validate and assemble a corpus")

app.command(name="build")(build_cmd)
app.command(name="check")(check_cmd)
app.command(name="list")(list_cmd)
