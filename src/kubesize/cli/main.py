# src/kubesize/cli/main.py
"""
This module is the main entry point for the kubesize CLI.

It registers the capacity commands and their short aliases.
"""

import logging

import typer

from ..core.config import config
from . import capacity

# --- Setup Logger ---
logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


app = typer.Typer(
    name="kubesize",
    help="Get Kubernetes cluster size and capacity metrics.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool):
    """
    Prints the version of kubesize.
    """
    if value:
        from .. import __version__

        typer.echo(f"kubesize version: {__version__}")
        raise typer.Exit()


@app.command()
def version():
    """
    Show the version of kubesize.
    """
    from .. import __version__

    typer.echo(f"kubesize version: {__version__}")


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
):
    """
    kubesize CLI main entry point.
    """
    pass


# Register the capacity commands under their full names and aliases
app.command("cluster", help="Get cluster size and capacity (alias: c).")(capacity.cluster)
app.command("c", hidden=True)(capacity.cluster)
app.command("node-role", help="Get cluster capacity grouped by node role (alias: nr).")(capacity.node_role)
app.command("nr", hidden=True)(capacity.node_role)


if __name__ == "__main__":
    app()
