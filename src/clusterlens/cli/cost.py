# src/clusterlens/cli/cost.py
"""
Implements the `cost` command: monthly cost projection of the cluster's
instances, volumes and load balancers.
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from ..core.factory import get_processor
from ..exporters.rows import cost_rows
from ..models.cli import OutputOptions, RefreshOptions
from ..reporters.console_reporter import ConsoleReporter
from .utils import handle_export, run_view

logger = logging.getLogger(__name__)

app = typer.Typer(help="Estimate the monthly cost of the cluster.", add_completion=False)


@app.callback(invoke_without_command=True)
def cost(
    ctx: typer.Context,
    output_format: Annotated[
        Optional[str],
        typer.Option("--output", help="Output format (csv/json). If set, writes to a file instead of the console."),
    ] = None,
    output_path: Annotated[
        Optional[Path],
        typer.Option("--output-path", help="Output file path. Default: './data/clusterlens-cost.<format>'"),
    ] = None,
):
    """
    Estimate monthly EC2, EBS and load balancer cost from the cluster inventory.
    """
    if ctx.invoked_subcommand is not None:
        return

    output = OutputOptions(output_format=output_format, output_path=output_path)

    async def _cost():
        processor = get_processor()
        try:
            summary = await processor.cost_estimate()
        finally:
            await processor.close()

        if output.is_enabled:
            await handle_export(cost_rows(summary), output, "cost")
        else:
            ConsoleReporter().report_cost(summary)

    run_view(_cost, RefreshOptions())
