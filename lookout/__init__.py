# lookout/__init__.py
from .admission import should_keep, should_keep_batch
from .entries import (
    Entry,
    EntryBase,
    ExceptionEntry,
    GenericEntry,
    JobEntry,
    QueryEntry,
    RequestEntry,
    ScheduledTaskEntry,
    parse_entry,
)
from .errors import ConfigurationError, LookoutError
from .pipeline import EntryPipeline, EntrySink, InMemorySink
from .privacy import PLACEHOLDER, RedactionPolicy, presets as privacy_presets, redact
from .settings import LookoutSettings, configure
from .types import Environment, EntryType

__all__ = [
    # entries
    "Entry",
    "EntryBase",
    "EntryType",
    "ExceptionEntry",
    "GenericEntry",
    "JobEntry",
    "QueryEntry",
    "RequestEntry",
    "ScheduledTaskEntry",
    "parse_entry",
    # environment / config
    "Environment",
    "LookoutSettings",
    "configure",
    # admission
    "should_keep",
    "should_keep_batch",
    # privacy
    "RedactionPolicy",
    "PLACEHOLDER",
    "redact",
    "privacy_presets",
    # pipeline
    "EntryPipeline",
    "EntrySink",
    "InMemorySink",
    # errors
    "LookoutError",
    "ConfigurationError",
]
