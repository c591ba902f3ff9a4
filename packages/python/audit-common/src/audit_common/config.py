"""Central configuration for auditable hosts."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from audit_common.constants import (
    DEFAULT_PUBLISH_TIMEOUT,
    DEFAULT_SINK,
    DESTINATION_SUFFIX,
    EVENTS_DIR,
    UNKNOWN_SERVICE,
)


class AuditConfig(BaseSettings):
    """Runtime configuration resolved once at startup (``AUDIT_*`` env vars)."""

    service_name: str = UNKNOWN_SERVICE
    sink: Literal["jsonl", "http", "logging", "memory"] = DEFAULT_SINK
    events_dir: Path = Field(default=EVENTS_DIR)
    http_url: str = ""
    http_token: str = ""
    publish_timeout: float = Field(default=DEFAULT_PUBLISH_TIMEOUT, gt=0)
    background_publish: bool = False
    actor_provider: str = ""  # "package.module:attribute"
    destination_suffix: str = DESTINATION_SUFFIX

    model_config = SettingsConfigDict(env_prefix="AUDIT_")
