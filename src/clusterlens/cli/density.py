# src/clusterlens/cli/density.py
"""
Implements the `density` command: which workloads occupy each node.
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from ..core.factory import get_processor
from ..exporters.rows import density_rows
from ..models.cli import OutputOptions, RefreshOptions
from ..reporters.console_reporter import ConsoleReporter
from .utils import handle_export, run_view

logger = logging.getLogger(__name__)

app = typer.Typer(help="Show pod density per node, grouped by owning workload.", add_completion=False)


@app.callback(invoke_without_command=True)
def density(
    ctx: typer.Context,
    namespace: Annotated[Optional[str], typer.Option(help="Only count pods in this namespace.")] = None,
    top: Annotated[Optional[int], typer.Option("--top", min=1, help="Show at most N owners per node.")] = None,
    output_format: Annotated[
        Optional[str],
        typer.Option("--output", help="Output format (csv/json). If set, writes to a file instead of the console."),
    ] = None,
    output_path: Annotated[
        Optional[Path],
        typer.Option("--output-path", help="Output file path. Default: './data/clusterlens-density.<format>'"),
    ] = None,
    watch: Annotated[bool, typer.Option("--watch", help="Refresh the view periodically.")] = False,
    interval: Annotated[
        Optional[str], typer.Option("--interval", help="Refresh interval for --watch (e.g. '30s', '5m').")
    ] = None,
):
    """
    Show, for every node, its owners (Deployments, DaemonSets, ...) ranked by pod count.
    """
    if ctx.invoked_subcommand is not None:
        return

    output = OutputOptions(output_format=output_format, output_path=output_path)
    refresh = RefreshOptions(watch=watch, interval=interval)

    async def _density():
        processor = get_processor()
        try:
            densities = await processor.pod_density(namespace=namespace)
        finally:
            await processor.close()

        if output.is_enabled:
            await handle_export(density_rows(densities), output, "density")
        else:
            ConsoleReporter().report_density(densities, top=top, namespace=namespace)

    run_view(_density, refresh)
