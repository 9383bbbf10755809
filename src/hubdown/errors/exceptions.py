"""Custom exception hierarchy for hubdown."""

from __future__ import annotations

from typing import Any


class HubdownError(Exception):
    """Base exception for all hubdown errors."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message


class StageError(HubdownError):
    """A built-in stage could not transform the document.

    Examples: unknown highlight language, serializing without an output tree.
    """

    def __init__(self, message: str = "", stage: str = "") -> None:
        super().__init__(message)
        self.stage = stage


class PipelineError(HubdownError):
    """Structural pipeline problem: duplicate stage names or no output."""


class FrontmatterError(HubdownError):
    """Leading YAML metadata block is malformed or not a mapping."""

    def __init__(self, message: str = "", original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


class KeyNotFoundError(HubdownError):
    """Raised by stores that signal a cache miss with an exception."""

    def __init__(self, message: str = "", key: str = "") -> None:
        super().__init__(message or f"Key not found: {key}")
        self.key = key


class ConfigError(HubdownError):
    """Invalid configuration value."""
