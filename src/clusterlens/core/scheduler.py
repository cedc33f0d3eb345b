import asyncio
import logging
import re
from typing import Callable, Coroutine, List

logger = logging.getLogger(__name__)

_MULTIPLIERS = {"s": 1, "m": 60, "h": 3600}


def parse_interval(interval_str: str) -> int:
    """Parses a duration string like '30s', '5m' or '1h' into seconds."""
    match = re.match(r"^(\d+)([smh])$", interval_str.strip().lower())
    if not match:
        raise ValueError(f"Invalid interval format: '{interval_str}'. Use 's', 'm', or 'h'.")
    value, unit = int(match.group(1)), match.group(2)
    if value <= 0:
        raise ValueError(f"Interval must be positive: '{interval_str}'.")
    return value * _MULTIPLIERS[unit]


class Scheduler:
    """
    Re-runs async jobs on a fixed interval. Each tick awaits the whole job
    before sleeping, so runs of the same job never overlap.
    """

    def __init__(self):
        self.tasks: List[asyncio.Task] = []

    async def _run_periodically(self, interval_seconds: int, job_func: Callable[[], Coroutine]):
        """Internal loop to run a job periodically."""
        try:
            while True:
                try:
                    await job_func()
                except Exception as e:
                    logger.error(f"Error in scheduled job '{job_func.__name__}': {e}")

                await asyncio.sleep(interval_seconds)
        except asyncio.CancelledError:
            logger.debug(f"Job '{job_func.__name__}' cancelled.")
            raise

    def add_job(self, job_func: Callable[[], Coroutine], interval_seconds: int) -> asyncio.Task:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive.")
        task = asyncio.create_task(self._run_periodically(interval_seconds, job_func))
        self.tasks.append(task)
        logger.info(f"Scheduled job '{job_func.__name__}' to run every {interval_seconds}s.")
        return task

    def add_job_from_string(self, job_func: Callable[[], Coroutine], interval_str: str) -> asyncio.Task:
        """
        Adds a job based on a duration string like '30s', '5m' or '1h'.
        """
        return self.add_job(job_func, parse_interval(interval_str))

    async def stop(self):
        """Cancels all scheduled tasks."""
        logger.debug("Stopping scheduler...")
        for task in self.tasks:
            task.cancel()
        if self.tasks:
            await asyncio.gather(*self.tasks, return_exceptions=True)
        self.tasks.clear()
