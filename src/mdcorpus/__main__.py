from mdcorpus.cli.cli import app

app()
