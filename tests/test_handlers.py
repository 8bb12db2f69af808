from __future__ import annotations

import logging

import pytest

from site_monitor.handlers import LogResultHandler
from site_monitor.models import ResultRecord


@pytest.mark.asyncio
async def test_success_logged_at_info(caplog: pytest.LogCaptureFixture) -> None:
    record = ResultRecord("rt", "2026-10-17 10:00:00", "http://ok.test", "200 OK")
    with caplog.at_level(logging.INFO, logger="site_monitor.handlers"):
        await LogResultHandler().handle(record)
    assert [(r.levelno, r.getMessage()) for r in caplog.records] == [(logging.INFO, record.to_json())]


@pytest.mark.asyncio
async def test_failure_logged_at_error_with_same_payload(caplog: pytest.LogCaptureFixture) -> None:
    record = ResultRecord("rt", "2026-10-17 10:00:00", "http://ok.test", "Exception", "refused")
    with caplog.at_level(logging.INFO, logger="site_monitor.handlers"):
        await LogResultHandler().handle(record)
    assert [(r.levelno, r.getMessage()) for r in caplog.records] == [(logging.ERROR, record.to_json())]
