
# Single-shot HTTP availability probe.

# contract:
#   Exactly one unauthenticated GET per call, no retries.
#   Only an exact 200 counts as success; any other completed response is
#   reported with its reason phrase as the error detail.
#   Transport failures (refused, DNS, timeout, TLS, bad URL) are folded into
#   an "Exception" outcome. Nothing but cancellation escapes probe().

import asyncio
import logging

import aiohttp

from site_monitor.config import REQUEST_TIMEOUT_SECONDS
from site_monitor.models import EXCEPTION_STATUS, ProbeOutcome

log = logging.getLogger(__name__)


def _describe(exc: BaseException) -> str:
    # asyncio.TimeoutError and friends stringify to ""
    return str(exc) or type(exc).__name__


class HostProbe:
    """
    Wraps an aiohttp.ClientSession for availability checks.

    The session is owned by the caller, so one probe can be reused across
    hosts and sweeps. The automatic Accept header is suppressed: the request
    carries no content-negotiation preference.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        timeout_seconds: float = REQUEST_TIMEOUT_SECONDS,
    ) -> None:
        self._session = session
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    async def probe(self, host: str) -> ProbeOutcome:
        try:
            async with self._session.get(
                host,
                timeout=self._timeout,
                skip_auto_headers=("Accept",),
            ) as resp:
                reason = resp.reason or ""
                status = f"{resp.status} {reason}"
                if resp.status != 200:
                    return ProbeOutcome(status=status, error_detail=reason)
                return ProbeOutcome(status=status)

        except asyncio.CancelledError:
            raise

        except Exception as exc:
            log.debug("Transport failure probing %s: %r", host, exc)
            return ProbeOutcome(status=EXCEPTION_STATUS, error_detail=_describe(exc))
