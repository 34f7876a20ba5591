"""
Live job list.

A JobSubscription is a lazy, unbounded, restartable sequence of job-list
snapshots. Each `async for` over it starts a fresh poll loop: the first
snapshot is delivered immediately, later ones only when the list changed.
Iteration ends once the subscriber detaches via close(), or when the
optional `is_detached` check reports the consumer gone. That check runs
before every poll.
"""

import asyncio
import logging
from typing import AsyncIterator, Awaitable, Callable, List, Optional

from app.schemas.schemas import Job, JobSort
from app.services.job_service import JobService

logger = logging.getLogger(__name__)


def snapshot_key(jobs: List[Job]) -> list:
    return [job.model_dump() for job in jobs]


class JobSubscription:

    def __init__(
        self,
        jobs: JobService,
        interval: float = 2.0,
        search: Optional[str] = None,
        sort: JobSort = JobSort.newest,
        is_detached: Optional[Callable[[], Awaitable[bool]]] = None,
    ):
        self.jobs = jobs
        self.interval = interval
        self.search = search
        self.sort = sort
        self.is_detached = is_detached
        self.active = True

    def close(self):
        """Detach. Snapshots fetched after this point are dropped."""
        self.active = False

    def __aiter__(self) -> AsyncIterator[List[Job]]:
        self.active = True
        return self._snapshots()

    async def _snapshots(self) -> AsyncIterator[List[Job]]:
        last = None
        while self.active:
            if self.is_detached is not None and await self.is_detached():
                logger.debug("Job subscriber went away, stopping poll")
                self.close()
                break
            jobs = self.jobs.list_jobs(search=self.search, sort=self.sort)
            if not self.active:
                logger.debug("Dropping job snapshot for detached subscriber")
                break
            key = snapshot_key(jobs)
            if key != last:
                last = key
                yield jobs
            await asyncio.sleep(self.interval)
