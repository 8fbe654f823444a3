"""Application configuration — loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file).

    Every helper setting is optional here: ``None`` means "keep the declared
    default".  Variables are prefixed, e.g. ``CHATGPT_HELPER_TOKEN``.
    """

    model_config = SettingsConfigDict(
        env_prefix="CHATGPT_HELPER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    token: SecretStr | None = None
    model: str | None = None

    temperature: float | None = None
    max_completion_tokens: int | None = None
    frequency_penalty: float | None = None
    function_call: str | None = None
    logit_bias: str | None = None
    logprobs: bool | None = None
    n: int | None = None
    parallel_tool_calls: bool | None = None
    presence_penalty: float | None = None
    response_format: str | None = None
    seed: int | None = None
    stop: str | None = None
    store: bool | None = None
    tool_choice: str | None = None
    top_logprobs: int | None = None
    top_p: float | None = None

    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    def helper_overrides(self) -> dict[str, Any]:
        """Return the helper settings that were explicitly configured."""
        values = self.model_dump(
            exclude={"log_level", "host", "port"}, exclude_none=True
        )
        if self.token is not None:
            values["token"] = self.token.get_secret_value()
        return values


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()
