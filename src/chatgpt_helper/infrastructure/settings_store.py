"""In-memory settings store — implements the SettingsStore port."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from chatgpt_helper.domain.entities import GenerationDefaults
from chatgpt_helper.domain.exceptions import UnknownSettingError
from chatgpt_helper.domain.settings_schema import SETTINGS_BY_LABEL, default_values
from chatgpt_helper.infrastructure.config import Settings

logger = logging.getLogger(__name__)

SettingListener = Callable[[Any], None]


class InMemorySettingsStore:
    """Holds the ``chatgpt_helper`` settings group and notifies on change.

    Listeners subscribed to a label are called with the new value after
    :meth:`set` stores it, which is how ``hook:chatgpt_helper:<label>``
    events reach the helper.  A listener that raises rejects the value: the
    previous one is restored before the error propagates.
    """

    def __init__(self, overrides: Mapping[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = default_values()
        self._listeners: dict[str, list[SettingListener]] = {}
        for label, value in (overrides or {}).items():
            self._check_label(label)
            self._values[label] = value

    @classmethod
    def from_settings(cls, settings: Settings) -> InMemorySettingsStore:
        """Seed the store with declared defaults overlaid by env configuration."""
        return cls(settings.helper_overrides())

    async def get_settings(self) -> GenerationDefaults:
        return dict(self._values)

    def set(self, label: str, value: Any) -> None:
        """Store a new value and fire the label's hook."""
        self._check_label(label)
        previous = self._values[label]
        self._values[label] = value
        event = SETTINGS_BY_LABEL[label].event_name
        listeners = self._listeners.get(label, [])
        logger.debug("Setting %s updated, emitting %s to %d listener(s)", label, event, len(listeners))
        try:
            for listener in listeners:
                listener(value)
        except Exception:
            self._values[label] = previous
            logger.warning("Setting %s rejected by a listener, previous value kept", label)
            raise

    def subscribe(self, label: str, listener: SettingListener) -> None:
        self._check_label(label)
        self._listeners.setdefault(label, []).append(listener)

    @staticmethod
    def _check_label(label: str) -> None:
        if label not in SETTINGS_BY_LABEL:
            raise UnknownSettingError(f"Unknown setting: '{label}'.")
