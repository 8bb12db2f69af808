import json
from dataclasses import dataclass
from datetime import datetime

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

EXCEPTION_STATUS = "Exception"


def format_timestamp(dt: datetime | None = None) -> str:
    """Local wall-clock time at second resolution, e.g. 2026-10-17 14:32:00"""
    return (dt or datetime.now()).strftime(TIMESTAMP_FORMAT)


@dataclass(frozen=True)
class ProbeOutcome:
    """What a single GET produced, before it is stamped with time and host."""
    status: str                    # "<code> <reason>" or "Exception"
    error_detail: str | None = None


@dataclass(frozen=True)
class ResultRecord:
    """
    Outcome of ONE probe against ONE host.

    error_detail is set if and only if the probe did not get an exact 200.
    When absent it is left out of the JSON entirely, never written as null.
    """
    runtime_version: str
    timestamp: str                 # TIMESTAMP_FORMAT, local clock
    host: str                      # verbatim from configuration
    status: str
    error_detail: str | None = None

    @classmethod
    def from_outcome(
        cls,
        outcome: ProbeOutcome,
        host: str,
        runtime_version: str,
        timestamp: str | None = None,
    ) -> "ResultRecord":
        return cls(
            runtime_version=runtime_version,
            timestamp=timestamp or format_timestamp(),
            host=host,
            status=outcome.status,
            error_detail=outcome.error_detail,
        )

    @property
    def is_success(self) -> bool:
        return self.error_detail is None

    def to_dict(self) -> dict[str, str]:
        data = {
            "Framework": self.runtime_version,
            "Horario": self.timestamp,
            "Host": self.host,
            "Status": self.status,
        }
        if self.error_detail is not None:
            data["Exception"] = self.error_detail
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))


@dataclass(frozen=True)
class LogEntity:
    """One table row per probe: (job name, timestamp) plus where it ran and the record JSON."""
    partition_key: str
    row_key: str
    origin: str
    payload: str

    @classmethod
    def from_record(cls, record: ResultRecord, job_name: str, origin: str) -> "LogEntity":
        return cls(
            partition_key=job_name,
            row_key=record.timestamp,
            origin=origin,
            payload=record.to_json(),
        )

    def to_entity(self) -> dict[str, str]:
        return {
            "PartitionKey": self.partition_key,
            "RowKey": self.row_key,
            "origin": self.origin,
            "payload": self.payload,
        }
