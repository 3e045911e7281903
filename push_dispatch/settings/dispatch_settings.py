from __future__ import annotations

from functools import lru_cache

from pydantic import Field

from push_dispatch.settings.base import PushDispatchBaseSettings


class DispatchSettings(PushDispatchBaseSettings):
    """
    Dispatch layer settings.
    Loaded from the environment / .env file with exact variable name matching.
    """

    log_level: str = Field(default="INFO", alias="PUSH_DISPATCH_LOG_LEVEL")
    max_concurrent_sends: int = Field(
        default=0, ge=0, alias="PUSH_DISPATCH_MAX_CONCURRENT_SENDS"
    )

    webhook_enabled: bool = Field(default=False, alias="PUSH_DISPATCH_WEBHOOK_ENABLED")
    webhook_identifier: str = Field(
        default="webhook", min_length=1, alias="PUSH_DISPATCH_WEBHOOK_IDENTIFIER"
    )
    webhook_url: str = Field(default="", alias="PUSH_DISPATCH_WEBHOOK_URL")
    webhook_timeout_seconds: float = Field(
        default=10.0, gt=0, alias="PUSH_DISPATCH_WEBHOOK_TIMEOUT"
    )
    webhook_auth_token: str = Field(default="", alias="PUSH_DISPATCH_WEBHOOK_TOKEN")


@lru_cache()
def get_settings() -> DispatchSettings:
    """Return cached settings for the dispatch layer."""
    return DispatchSettings()
