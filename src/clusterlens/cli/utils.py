import asyncio
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Coroutine, Dict, List

import typer

from ..core.config import config
from ..core.exceptions import ClusterLensError
from ..core.scheduler import Scheduler
from ..exporters import get_exporter
from ..models.cli import OutputOptions, RefreshOptions

logger = logging.getLogger(__name__)


async def handle_export(rows: List[Dict[str, Any]], output_options: OutputOptions, view: str) -> str:
    """Writes the flattened view rows to a file and returns the path written."""
    exporter = get_exporter(output_options.format)

    if output_options.output_path:
        output_path = Path(output_options.output_path)
    else:
        output_path = Path.cwd() / "data" / exporter.default_filename(view)

    try:
        written_path = await exporter.export(rows, str(output_path))
    except OSError as e:
        logger.error(f"Failed to export report to {output_path}: {e}")
        raise typer.Exit(code=1)

    logger.info(f"Successfully exported {len(rows)} row(s) to {written_path}")
    print(f"Report exported to: {written_path}", file=sys.stderr)
    return written_path


async def _watch(job: Callable[[], Coroutine], interval: str):
    """
    Re-runs `job` every interval until interrupted. A tick that exits the
    CLI (e.g. an export that cannot be written) stops the watch with that exit.
    """
    scheduler = Scheduler()
    stopped = asyncio.Event()
    exits: List[typer.Exit] = []

    async def _tick():
        try:
            await job()
        except typer.Exit as e:
            exits.append(e)
            stopped.set()

    _tick.__name__ = getattr(job, "__name__", "view")
    scheduler.add_job_from_string(_tick, interval)
    try:
        await stopped.wait()
    finally:
        await scheduler.stop()
    raise exits[0]


def run_view(job: Callable[[], Coroutine], refresh: RefreshOptions) -> None:
    """
    Runs a view job once, or every refresh interval when watching.
    Core errors are logged and turned into exit code 1.
    """
    try:
        if refresh.watch:
            asyncio.run(_watch(job, refresh.interval or config.REFRESH_INTERVAL))
        else:
            asyncio.run(job())
    except typer.Exit:
        raise
    except KeyboardInterrupt:
        logger.info("Interrupted; stopping.")
    except ClusterLensError as e:
        logger.error("%s", e)
        raise typer.Exit(code=1)
