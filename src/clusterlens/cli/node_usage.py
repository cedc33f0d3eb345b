# src/clusterlens/cli/node_usage.py
"""
Implements the `node-usage` command: capacity, requests, limits and live
usage of every node.
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from ..core.factory import get_processor
from ..exporters.rows import node_usage_rows
from ..models.cli import OutputOptions, RefreshOptions, validate_sort
from ..reporters.console_reporter import ConsoleReporter
from .utils import handle_export, run_view

logger = logging.getLogger(__name__)

app = typer.Typer(help="Display CPU and memory usage of all nodes.", add_completion=False)


@app.callback(invoke_without_command=True)
def node_usage(
    ctx: typer.Context,
    sort_by: Annotated[str, typer.Option("--sort", help="Sort nodes by 'name', 'cpu' or 'memory'.")] = "name",
    output_format: Annotated[
        Optional[str],
        typer.Option("--output", help="Output format (csv/json). If set, writes to a file instead of the console."),
    ] = None,
    output_path: Annotated[
        Optional[Path],
        typer.Option("--output-path", help="Output file path. Default: './data/clusterlens-node-usage.<format>'"),
    ] = None,
    watch: Annotated[bool, typer.Option("--watch", help="Refresh the view periodically.")] = False,
    interval: Annotated[
        Optional[str], typer.Option("--interval", help="Refresh interval for --watch (e.g. '30s', '5m').")
    ] = None,
):
    """
    Display CPU and memory capacity, requests, limits and usage for all nodes.
    """
    if ctx.invoked_subcommand is not None:
        return

    sort_key = validate_sort(sort_by)
    output = OutputOptions(output_format=output_format, output_path=output_path)
    refresh = RefreshOptions(watch=watch, interval=interval)

    async def _node_usage():
        processor = get_processor()
        try:
            nodes = await processor.node_usage()
        finally:
            await processor.close()

        if output.is_enabled:
            await handle_export(node_usage_rows(nodes), output, "node-usage")
        else:
            ConsoleReporter().report_node_usage(nodes, sort_by=sort_key)

    run_view(_node_usage, refresh)
