"""Configuration schema using Pydantic.

Persisted to ~/.avaxapi/config.json; environment variables prefixed with
``AVAXAPI_`` (``__`` for nesting, e.g. ``AVAXAPI_NODE__URI``) take precedence.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class NodeConfig(BaseModel):
    """Node endpoint the clients talk to."""
    uri: str = "http://127.0.0.1:9650"
    request_timeout: float = Field(10.0, gt=0)  # seconds, per call


class AVMConfig(BaseModel):
    """AVM chain selection."""
    chain: str = "X"  # alias or blockchain ID


class HealthConfig(BaseModel):
    """Defaults for `avaxapi health await`."""
    checks: int = Field(30, ge=0)
    interval: float = Field(1.0, ge=0)  # seconds between checks


class LoggingConfig(BaseModel):
    level: str = "INFO"
    file_enabled: bool = False


class Config(BaseSettings):
    """Root configuration for avaxapi."""
    node: NodeConfig = Field(default_factory=NodeConfig)
    avm: AVMConfig = Field(default_factory=AVMConfig)
    health: HealthConfig = Field(default_factory=HealthConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_prefix="AVAXAPI_",
        env_nested_delimiter="__",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # Environment overrides values read from config.json.
        return env_settings, init_settings, dotenv_settings, file_secret_settings
