
# SiteMonitor: the sweep loop.

# Responsibilities:
#   - make sure the result table exists (once per run)
#   - open one aiohttp session for the lifetime of the run
#   - probe every configured host in order, one at a time
#   - log each result and append it to the store before moving on
#   - pause between hosts and between sweeps, aborting either pause on stop()
#
# Concurrency model:
#   A single coroutine. Sweep N+1 never starts before sweep N has persisted
#   every host and its interval wait has elapsed. stop() is observed at the
#   two pauses only; a probe already in flight runs to completion.
#
# Store and log failures are not caught here: they end run() unchanged.

import asyncio
import json
import logging
import os
from datetime import datetime

import aiohttp

from site_monitor.config import (
    JOB_NAME,
    PACING_DELAY_SECONDS,
    REQUEST_TIMEOUT_SECONDS,
    RUNTIME_VERSION,
    MonitorSettings,
)
from site_monitor.handlers import LogResultHandler
from site_monitor.models import LogEntity, ResultRecord, format_timestamp
from site_monitor.probe import HostProbe
from site_monitor.store import ResultStore

log = logging.getLogger(__name__)


class SiteMonitor:

    def __init__(
        self,
        hosts: list[str],
        store: ResultStore,
        *,
        interval_seconds: float,
        origin: str,
        pacing_delay_seconds: float = PACING_DELAY_SECONDS,
        request_timeout_seconds: float = REQUEST_TIMEOUT_SECONDS,
        job_name: str = JOB_NAME,
        runtime_version: str = RUNTIME_VERSION,
        handler: LogResultHandler | None = None,
    ) -> None:
        self._hosts = list(hosts)
        self._store = store
        self._interval = interval_seconds
        self._origin = origin
        self._pacing_delay = pacing_delay_seconds
        self._request_timeout = request_timeout_seconds
        self._job_name = job_name
        self._runtime_version = runtime_version
        self._handler = handler or LogResultHandler()
        self._stopping = asyncio.Event()
        self.sweeps = 0

    @classmethod
    def from_settings(cls, settings: MonitorSettings, store: ResultStore) -> "SiteMonitor":
        return cls(
            settings.hosts,
            store,
            interval_seconds=settings.interval_seconds,
            origin=settings.origin,
            pacing_delay_seconds=settings.pacing_delay_seconds,
            request_timeout_seconds=settings.request_timeout_seconds,
            job_name=settings.job_name,
            runtime_version=settings.runtime_version,
        )

    @property
    def stopped(self) -> bool:
        return self._stopping.is_set()

    def stop(self) -> None:
        """Request a stop. Takes effect at the next pause; cannot be undone."""
        self._stopping.set()

    async def run(self, probe: HostProbe | None = None) -> None:
        if await self._store.ensure_table():
            log.info("Created log table %s", self._store.table_name)

        if not self._hosts:
            log.warning("No hosts configured, sweeps will be empty.")

        if probe is not None:
            await self._loop(probe)
            return

        # force_close: no keep-alive, each probe's connection is released with it
        connector = aiohttp.TCPConnector(force_close=True)
        async with aiohttp.ClientSession(connector=connector) as session:
            await self._loop(HostProbe(session, self._request_timeout))

    async def _loop(self, probe: HostProbe) -> None:
        log.info(
            "SiteMonitor running, checking %d host(s) every %.3gs.",
            len(self._hosts), self._interval,
        )
        while not self.stopped:
            if not await self.sweep(probe):
                break
            self.sweeps += 1
            if await self._pause(self._interval):
                break
        log.info("SiteMonitor stopped after %d sweep(s).", self.sweeps)

    async def sweep(self, probe: HostProbe) -> bool:
        """
        Probe, log and persist every host once, in configured order.

        Returns False if a stop was observed during a pacing pause, in which
        case the remaining hosts are skipped.
        """
        log.info("Process Id: %d - sweep starting at: %s", os.getpid(), datetime.now().astimezone().isoformat())

        for host in self._hosts:
            log.info("Checking availability of host %s", host)

            # probe time is when the request starts, not when it returns
            probed_at = format_timestamp()
            outcome = await probe.probe(host)
            record = ResultRecord.from_outcome(outcome, host, self._runtime_version, timestamp=probed_at)

            await self._handler.handle(record)

            ack = await self._store.append(LogEntity.from_record(record, self._job_name, self._origin))
            log.info("%s", json.dumps(ack, default=str))

            if await self._pause(self._pacing_delay):
                return False
        return True

    async def _pause(self, seconds: float) -> bool:
        """Sleep up to `seconds`; return True if a stop was requested."""
        if self.stopped:
            return True
        try:
            await asyncio.wait_for(self._stopping.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            return False
        return True
