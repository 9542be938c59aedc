# lookout/pipeline.py
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any
from uuid import uuid4

import anyio
from mcp.server.fastmcp.utilities.logging import get_logger
from pydantic import ValidationError

from lookout.admission.filter import is_ignored_request, should_keep, should_keep_batch
from lookout.entries import EntryBase, parse_entry
from lookout.privacy.policy import RedactionPolicy
from lookout.privacy.redaction import redact
from lookout.types import PRODUCTION, Environment

if TYPE_CHECKING:
    from lookout.settings import LookoutSettings

logger = get_logger(__name__)


class EntrySink(ABC):
    """Where retained, redacted entries go (storage, dashboard, exporter...)."""

    @abstractmethod
    async def write(self, entry: EntryBase) -> bool: ...


class InMemorySink(EntrySink):
    """Non-durable sink; keeps written entries in arrival order."""

    def __init__(self):
        self.entries: list[EntryBase] = []

    async def write(self, entry: EntryBase) -> bool:
        self.entries.append(entry)
        return True


class EntryPipeline:
    """
    Scrub, admit and hand off entries produced by the instrumentation probes.

    Environment and policy are fixed at construction; the pipeline holds no
    other state, so one instance can serve any number of concurrent callers.
    """

    def __init__(
        self,
        sink: EntrySink,
        *,
        environment: Environment | str = PRODUCTION,
        policy: RedactionPolicy | None = None,
    ):
        self._sink = sink
        self._environment = Environment.of(environment)
        self._policy = policy or RedactionPolicy.defaults()

    @classmethod
    def from_settings(cls, settings: "LookoutSettings", sink: EntrySink) -> "EntryPipeline":
        return cls(sink, environment=settings.to_environment(), policy=settings.to_policy())

    @property
    def environment(self) -> Environment:
        return self._environment

    @property
    def policy(self) -> RedactionPolicy:
        return self._policy

    def _parse(self, entry: EntryBase | Mapping[str, Any]) -> EntryBase | None:
        try:
            return parse_entry(entry)
        except ValidationError as exc:
            logger.warning("Dropping malformed entry: %s", exc)
            return None

    def prepare(self, entry: EntryBase | Mapping[str, Any]) -> EntryBase | None:
        """
        Redact then admit a single entry. Returns the entry to store, or None when
        dropped (including payloads that do not form a valid entry).
        """
        parsed = self._parse(entry)
        if parsed is None:
            return None
        redacted = redact(parsed, self._environment, self._policy)
        if not should_keep(redacted, self._environment, self._policy):
            logger.debug("Dropping %s entry %s", redacted.type, redacted.uuid)
            return None
        return redacted

    async def process(self, entry: EntryBase | Mapping[str, Any]) -> bool:
        """Returns True iff the entry was admitted and the sink accepted it."""
        prepared = self.prepare(entry)
        if prepared is None:
            return False
        return await self._write(prepared)

    async def process_many(self, entries: Iterable[EntryBase | Mapping[str, Any]]) -> int:
        """Process independent entries concurrently. Returns the number the sink accepted."""
        results: list[bool] = []

        async def _one(item: EntryBase | Mapping[str, Any]) -> None:
            results.append(await self.process(item))

        async with anyio.create_task_group() as tg:
            for item in entries:
                tg.start_soon(_one, item)
        return sum(results)

    async def process_batch(self, entries: Iterable[EntryBase | Mapping[str, Any]]) -> int:
        """
        Handle every entry recorded during one unit of work (request, job, command).

        The batch is kept whole when any entry in it would be kept on its own,
        so the queries and logs around a failure stay with it. Ignored request
        URIs and malformed payloads are still dropped. Every stored entry carries
        the same fresh batch id. Returns the number of entries the sink accepted.
        """
        batch_id = uuid4().hex
        redacted = []
        for item in entries:
            parsed = self._parse(item)
            if parsed is None:
                continue
            entry = redact(parsed, self._environment, self._policy)
            redacted.append(entry.model_copy(update={"batch_id": batch_id}))

        if not should_keep_batch(redacted, self._environment, self._policy):
            logger.debug("Dropping batch of %d entries", len(redacted))
            return 0

        written = 0
        for entry in redacted:
            if is_ignored_request(entry, self._policy):
                continue
            if await self._write(entry):
                written += 1
        return written

    async def _write(self, entry: EntryBase) -> bool:
        # sink errors stop here
        try:
            accepted = await self._sink.write(entry)
        except Exception:
            logger.exception("Sink failed to write %s entry %s", entry.type, entry.uuid)
            return False
        if not accepted:
            logger.warning("Sink rejected %s entry %s", entry.type, entry.uuid)
        return bool(accepted)
