"""Port: settings store — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from chatgpt_helper.domain.entities import GenerationDefaults


class SettingsStore(Protocol):
    """Source of the administrator-configured helper settings."""

    async def get_settings(self) -> GenerationDefaults:
        """Return a snapshot of the current settings, keyed by label."""
        ...
