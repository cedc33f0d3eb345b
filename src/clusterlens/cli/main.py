# src/clusterlens/cli/main.py
"""
Entry point of the clusterlens CLI: global options, `version`, and the
node-usage, density and cost sub-apps.
"""

import logging
from typing import Optional

import typer
from typing_extensions import Annotated

from .. import __version__
from ..core.config import config
from . import cost, density, node_usage

# --- Setup Logger ---
logging.basicConfig(
    level=config.LOG_LEVEL.upper(),
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

app = typer.Typer(
    name="clusterlens",
    help="Point-in-time resource usage, pod density and cost views of a Kubernetes cluster.",
    add_completion=False,
)


def _echo_version():
    typer.echo(f"clusterlens version: {__version__}")


def version_callback(value: bool):
    if value:
        _echo_version()
        raise typer.Exit()


@app.command()
def version():
    """
    Show the version of clusterlens.
    """
    _echo_version()


@app.callback()
def main(
    context: Annotated[
        Optional[str], typer.Option("--context", help="Kubeconfig context to use. Overrides KUBE_CONTEXT.")
    ] = None,
    log_level: Annotated[
        Optional[str], typer.Option("--log-level", help="DEBUG, INFO, WARNING or ERROR. Overrides LOG_LEVEL.")
    ] = None,
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show the version and exit."),
    ] = None,
):
    """
    clusterlens CLI main entry point.
    """
    if context:
        config.KUBE_CONTEXT = context
        logger.debug("Using kubeconfig context '%s'.", context)
    if log_level:
        level = log_level.upper()
        if level not in LOG_LEVELS:
            raise typer.BadParameter(f"Invalid log level '{log_level}'. Must be one of: {', '.join(LOG_LEVELS)}.")
        config.LOG_LEVEL = level
        logging.getLogger().setLevel(level)


# Register command sub-apps
app.add_typer(node_usage.app, name="node-usage")
app.add_typer(density.app, name="density")
app.add_typer(cost.app, name="cost")


if __name__ == "__main__":
    app()
