"""Failure log settings."""

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class FailureLogSettings(InfrastructureSettings):
    """Bounded delivery failure log configuration.

    Environment Variables:
        FAILURE_LOG_MAX_RECORDS: Maximum retained entries (default: 100)
        FAILURE_LOG_DEFAULT_LIMIT: Entries returned when no limit is given (default: 50)
        FAILURE_LOG_KEY: Store key holding the log (default: failure_logs)
    """

    max_records: int = Field(default=100, alias="FAILURE_LOG_MAX_RECORDS", ge=1)
    default_limit: int = Field(default=50, alias="FAILURE_LOG_DEFAULT_LIMIT", ge=1)
    key: str = Field(default="failure_logs", alias="FAILURE_LOG_KEY")
