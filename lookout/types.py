# lookout/types.py
from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from lookout.errors import ConfigurationError


class EntryType(str, Enum):
    """Entry types emitted by the instrumentation probes we know about."""

    batch = "batch"
    cache = "cache"
    client_request = "client_request"
    command = "command"
    dump = "dump"
    event = "event"
    exception = "exception"
    gate = "gate"
    job = "job"
    log = "log"
    mail = "mail"
    model = "model"
    notification = "notification"
    query = "query"
    redis = "redis"
    request = "request"
    scheduled_task = "scheduled_task"
    view = "view"


LOCAL = "local"
STAGING = "staging"
PRODUCTION = "production"
TESTING = "testing"


class Environment(BaseModel):
    """
    Deployment context the collector runs in.

    Set once at startup and passed explicitly to the filter and the redactor.
    Only `local` is trusted: it keeps every entry and skips redaction.
    """

    model_config = ConfigDict(frozen=True)

    name: str

    @field_validator("name")
    @classmethod
    def _normalize(cls, v: str) -> str:
        v = v.strip().lower()
        if not v:
            raise ValueError("environment name must not be blank")
        return v

    @property
    def is_local(self) -> bool:
        return self.name == LOCAL

    @classmethod
    def of(cls, value: Any) -> "Environment":
        """Coerce a name (or an Environment) into an Environment."""
        if isinstance(value, Environment):
            return value
        if isinstance(value, Enum):
            value = value.value
        if not isinstance(value, str):
            raise ConfigurationError(f"Environment must be a string, got {type(value).__name__}")
        try:
            return cls(name=value)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid environment {value!r}", data=exc.errors()) from exc

    @classmethod
    def local(cls) -> "Environment":
        return cls(name=LOCAL)

    @classmethod
    def production(cls) -> "Environment":
        return cls(name=PRODUCTION)

    def __str__(self) -> str:
        return self.name
