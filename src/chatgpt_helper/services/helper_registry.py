"""Registry of LLM helper plugins, looked up by their fixed name."""

from __future__ import annotations

import logging

from chatgpt_helper.domain.ports.llm_helper import LlmHelper

logger = logging.getLogger(__name__)


class HelperRegistry:
    """Maps helper names (e.g. ``chatgpt-helper``) to helper instances."""

    def __init__(self) -> None:
        self._helpers: dict[str, LlmHelper] = {}

    def register(self, helper: LlmHelper) -> None:
        """Register a helper under its ``name``; a later one replaces it."""
        name = helper.name.strip().lower()
        if not name:
            raise ValueError("Helper name cannot be empty")
        self._helpers[name] = helper
        logger.info("Registered LLM helper %s (%s)", name, helper.get_path())

    def get(self, name: str) -> LlmHelper:
        helper = self._helpers.get(name.strip().lower())
        if helper is None:
            available = ", ".join(sorted(self._helpers)) or "<none>"
            raise ValueError(f"Unknown helper: {name}. Registered helpers: {available}")
        return helper

    def unregister(self, name: str) -> None:
        self._helpers.pop(name.strip().lower(), None)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.strip().lower() in self._helpers
