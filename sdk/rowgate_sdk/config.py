"""
Configuration for the Rowgate SDK.

Uses pydantic-settings for environment variable loading.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class ClientSettings(BaseSettings):
    """Data client configuration loaded from environment."""

    gateway_url: str = Field(
        default="http://localhost:8081/data",
        description="Full URL of the gateway's GET /data route",
    )
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Total time budget per fetch, in seconds",
    )

    model_config = {"env_prefix": "ROWGATE_"}
