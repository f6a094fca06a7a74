"""CLI entrypoint: Typer app definition and command registration"""

from typing import Annotated

import typer

from mdpost.cli.commands import build_cmd, check_cmd, render_cmd, show_cmd
from mdpost.logging import configure_logging


app = typer.Typer(name="mdpost", no_args_is_help=True, help="Front matter + markdown post checker and renderer")


@app.callback()
def main(
    verbose: Annotated[int, typer.Option("--verbose", "-v", count=True, help="Increase log verbosity")] = 0,
    quiet: Annotated[int, typer.Option("--quiet", "-q", count=True, help="Decrease log verbosity")] = 0,
    ):
    """Check and render markdown posts for a static site generator."""
    configure_logging(verbose, quiet)


app.command(name="check")(check_cmd)
app.command(name="build")(build_cmd)
app.command(name="show")(show_cmd)
app.command(name="render")(render_cmd)
