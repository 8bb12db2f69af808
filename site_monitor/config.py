import platform
from typing import Literal

from pydantic import Field, PositiveFloat, PositiveInt, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from site_monitor import __version__
from site_monitor.errors import ConfigurationError

PACING_DELAY_SECONDS: float = 3      # pause after each host, throttles requests and log volume
REQUEST_TIMEOUT_SECONDS: float = 100
TABLE_NAME: str = "Monitoramento"
JOB_NAME: str = "JobMonitoramentoSites"  # partition key for every row this monitor writes
RUNTIME_VERSION: str = f"site-monitor {__version__}"

ENV_FILE_PATH = ".env"


class MonitorSettings(BaseSettings):
    """
    Everything the monitor reads at startup. Loaded once, never mutated.

    Values come from MONITOR_* environment variables or a .env file, e.g.

        MONITOR_HOSTS='["https://example.com", "https://example.org"]'
        MONITOR_INTERVAL_MS=60000
        MONITOR_STORE_CONNECTION_STRING="DefaultEndpointsProtocol=https;AccountName=...;AccountKey=..."
    """

    model_config = SettingsConfigDict(
        env_prefix="MONITOR_",
        env_file=ENV_FILE_PATH,
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    hosts: list[str] = Field(default_factory=list)
    interval_ms: PositiveInt
    store_connection_string: SecretStr

    table_name: str = TABLE_NAME
    job_name: str = JOB_NAME
    origin: str = Field(default_factory=platform.node)
    runtime_version: str = RUNTIME_VERSION

    pacing_delay_seconds: float = Field(default=PACING_DELAY_SECONDS, ge=0)
    request_timeout_seconds: PositiveFloat = REQUEST_TIMEOUT_SECONDS
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @field_validator("store_connection_string")
    @classmethod
    def connection_string_not_blank(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value().strip():
            raise ValueError("the store connection string is blank")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v

    @field_validator("hosts")
    @classmethod
    def strip_hosts(cls, v: list[str]) -> list[str]:
        # order and duplicates are kept, blank entries are configuration noise
        return [h.strip() for h in v if h.strip()]

    @property
    def interval_seconds(self) -> float:
        return self.interval_ms / 1000


def load_settings(**overrides) -> MonitorSettings:
    """Build MonitorSettings, turning validation failures into ConfigurationError."""
    try:
        return MonitorSettings(**overrides)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid monitor configuration: {exc}") from exc
