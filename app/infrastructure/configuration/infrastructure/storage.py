"""Durable key-value store settings."""

from pydantic import Field, field_validator

from infrastructure.configuration.base import InfrastructureSettings


class StorageSettings(InfrastructureSettings):
    """Durable store backend selection.

    Environment Variables:
        STORAGE_BACKEND: "memory" (single process, tests) or "redis"
    """

    backend: str = Field(
        default="memory",
        alias="STORAGE_BACKEND",
        description="Key-value store backend: 'memory' or 'redis'",
    )

    @field_validator("backend", mode="before")
    @classmethod
    def normalize_backend(cls, v):
        """Lower-case the backend name and reject unknown values."""
        value = str(v or "memory").strip().lower()
        if value not in ("memory", "redis"):
            raise ValueError(f"Unsupported storage backend: {v}")
        return value
