# lookout/errors.py
"""Custom exceptions for lookout."""

from __future__ import annotations

from typing import Any


class LookoutError(Exception):
    """Base exception for everything raised by lookout."""

    def __init__(self, message: str, data: Any | None = None):
        super().__init__(message)
        self.message = message
        self.data = data


class ConfigurationError(LookoutError):
    """Invalid environment, policy or settings value (raised at startup, never per entry)."""
    pass
