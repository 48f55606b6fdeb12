"""CLI application for copying HBase table schema to Cloud Bigtable."""

import typer

from hbschema.cli.commands.show import show
from hbschema.cli.commands.translate import translate
from hbschema.cli.common.logs import configure_logging
from hbschema.cli.common.options import VerboseOpt

app = typer.Typer(
    help="hbschema - copy HBase table schema to Cloud Bigtable",
    no_args_is_help=True,
)


@app.callback()
def _init(verbose: int = VerboseOpt):
    """Configure logging before any command runs."""
    configure_logging(verbose)


app.command("translate")(translate)
app.command("show")(show)


if __name__ == "__main__":
    app()
