"""HTTP server settings."""

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class ServerSettings(InfrastructureSettings):
    """HTTP server configuration.

    Environment Variables:
        SERVER_HOST: Bind address (default: 0.0.0.0)
        SERVER_PORT: Bind port (default: 8000)
        ALLOWED_ORIGINS: CORS origins separated by "|" (default: none)
        FORWARDED_ALLOW_IPS: Proxy addresses trusted to set X-Forwarded-For
            (default: 127.0.0.1)
    """

    HOST: str = Field(default="0.0.0.0", alias="SERVER_HOST")
    PORT: int = Field(default=8000, alias="SERVER_PORT")
    ALLOWED_ORIGINS: str = Field(default="", alias="ALLOWED_ORIGINS")
    FORWARDED_ALLOW_IPS: str = Field(
        default="127.0.0.1", alias="FORWARDED_ALLOW_IPS"
    )
