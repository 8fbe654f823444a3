"""Domain exception hierarchy.

Each exception maps to a specific HTTP status code at the interface layer.
Inner layers raise these; the outermost error-handler translates them.
"""

from __future__ import annotations


class ChatGptHelperError(Exception):
    """Base exception for the entire helper."""


# ── Lifecycle ───────────────────────────────────────────────────────────────


class HelperNotInitializedError(ChatGptHelperError):
    """A generator was called before the helper built its client."""


class InvalidCredentialError(ChatGptHelperError):
    """A credential rotation delivered an empty or non-string token."""


# ── Settings ────────────────────────────────────────────────────────────────


class UnknownSettingError(ChatGptHelperError):
    """The settings group does not declare the requested label."""


# ── Decoding ────────────────────────────────────────────────────────────────


class DecodeError(ChatGptHelperError, ValueError):
    """A JSON payload could not be decoded into the expected shape."""


class ConfigurationDecodeError(DecodeError):
    """A configuration value (e.g. ``logit_bias``) holds malformed JSON."""


class ResponseDecodeError(DecodeError):
    """A structured completion is not valid JSON or lacks its ``result``."""


# ── LLM errors ──────────────────────────────────────────────────────────────


class NoResponseGeneratedError(ChatGptHelperError):
    """The provider returned a completion without any message content."""

    def __init__(self, method: str) -> None:
        super().__init__(f"No response was generated by {method}().")
        self.method = method


class ProviderError(ChatGptHelperError):
    """Any error originating from the OpenAI provider or its transport."""
