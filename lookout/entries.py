# lookout/entries.py
from __future__ import annotations

from collections.abc import Collection, Mapping
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal, Union
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

from lookout.types import EntryType


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _new_uuid() -> str:
    return uuid4().hex


def _as_int(value: Any) -> int | None:
    """Best-effort integer view of a content value; None when it is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        # JSON decoders may hand back 500.0
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


class EntryBase(BaseModel):
    """
    One observed telemetry event.

    Frozen once built; the redactor hands back a copy instead of touching it.
    Every predicate is total: content missing a key (or holding the wrong
    kind of value) answers False instead of raising.
    """

    # Be liberal in what we accept: tolerate unknown fields from older/newer probes.
    model_config = ConfigDict(frozen=True, extra="ignore")

    type: str
    content: dict[str, Any] = Field(default_factory=dict)
    tags: frozenset[str] = Field(default_factory=frozenset)
    uuid: str = Field(default_factory=_new_uuid)
    recorded_at: datetime = Field(default_factory=_now_utc)
    # groups entries recorded during one request/job/command
    batch_id: str | None = None

    def is_request(self) -> bool:
        return False

    def is_failed_request(self) -> bool:
        return False

    def is_failed_job(self) -> bool:
        return False

    def is_scheduled_task(self) -> bool:
        return False

    def is_exception(self) -> bool:
        return False

    def is_reportable_exception(self) -> bool:
        return False

    def is_slow_query(self) -> bool:
        return False

    def has_monitored_tag(self, monitored: Collection[str]) -> bool:
        if not self.tags or not monitored:
            return False
        return any(tag in monitored for tag in self.tags)


# -------- REQUEST --------
class RequestEntry(EntryBase):
    type: Literal["request"] = "request"

    def is_request(self) -> bool:
        return True

    def is_failed_request(self) -> bool:
        status = _as_int(self.content.get("response_status"))
        return status is not None and status >= 500


# -------- QUERY --------
class QueryEntry(EntryBase):
    type: Literal["query"] = "query"

    def is_slow_query(self) -> bool:
        return self.content.get("slow") is True


# -------- JOB --------
class JobEntry(EntryBase):
    type: Literal["job"] = "job"

    def is_failed_job(self) -> bool:
        return self.content.get("status") == "failed"


# -------- EXCEPTION --------
class ExceptionEntry(EntryBase):
    type: Literal["exception"] = "exception"

    def is_exception(self) -> bool:
        return True

    def is_reportable_exception(self) -> bool:
        # handlers report everything unless the probe says otherwise
        return self.content.get("reportable", True) is not False


# -------- SCHEDULED TASK --------
class ScheduledTaskEntry(EntryBase):
    type: Literal["scheduled_task"] = "scheduled_task"

    def is_scheduled_task(self) -> bool:
        return True


# Dedicated variant per type that carries its own predicates.
_VARIANTS: dict[str, type[EntryBase]] = {
    EntryType.request.value: RequestEntry,
    EntryType.query.value: QueryEntry,
    EntryType.job.value: JobEntry,
    EntryType.exception.value: ExceptionEntry,
    EntryType.scheduled_task.value: ScheduledTaskEntry,
}


class GenericEntry(EntryBase):
    """Any other type (known or not). All type-specific predicates stay False."""

    @model_validator(mode="after")
    def _no_dedicated_variant(self) -> "GenericEntry":
        if self.type in _VARIANTS:
            raise ValueError(
                f"Entry type '{self.type}' has a dedicated variant: use {_VARIANTS[self.type].__name__}"
            )
        return self


Entry = Union[
    RequestEntry,
    QueryEntry,
    JobEntry,
    ExceptionEntry,
    ScheduledTaskEntry,
    GenericEntry,
]


def parse_entry(data: EntryBase | Mapping[str, Any]) -> EntryBase:
    """
    Build the matching Entry variant from a plain mapping.

    Variants pass through untouched; a bare EntryBase is rebuilt as the variant
    its type calls for so its predicates answer correctly.
    """
    if isinstance(data, EntryBase):
        if type(data) is not EntryBase:
            return data
        data = data.model_dump()
    raw = dict(data)
    kind = raw.get("type")
    if isinstance(kind, Enum):
        kind = kind.value
        raw["type"] = kind
    cls = _VARIANTS.get(kind, GenericEntry) if isinstance(kind, str) else GenericEntry
    return cls.model_validate(raw)
