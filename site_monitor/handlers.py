
# result handlers: the log output of the pipeline.

# each handler receives a ResultRecord after the probe and before the row is
# written to the store. The record itself carries no display logic; the level
# decision lives here.

# to add a new output target, implement a class with:
#     async def handle(self, record: ResultRecord) -> None: ...
# and pass it into SiteMonitor.

import logging

from site_monitor.models import ResultRecord

log = logging.getLogger(__name__)


class LogResultHandler:
    """
    Emits the record JSON as one log line.

    Successful probes go out at INFO, failed ones at ERROR. The message text
    is the same JSON that is persisted, so a log line and its table row can be
    matched byte for byte.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._log = logger or log

    async def handle(self, record: ResultRecord) -> None:
        level = logging.INFO if record.is_success else logging.ERROR
        self._log.log(level, "%s", record.to_json())
