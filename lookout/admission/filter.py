# lookout/admission/filter.py
from __future__ import annotations

from typing import Iterable

from lookout.entries import EntryBase, parse_entry
from lookout.privacy.policy import RedactionPolicy
from lookout.types import Environment

_DEFAULT_POLICY = RedactionPolicy.defaults()


def is_ignored_request(entry: EntryBase, policy: RedactionPolicy) -> bool:
    """True for requests whose URI is on the policy's ignore list (e.g. 'sw.js')."""
    if entry.type != "request":
        return False
    uri = entry.content.get("uri")
    return isinstance(uri, str) and uri in policy.ignored_uris


def should_keep(entry: EntryBase, env: Environment | str, policy: RedactionPolicy | None = None) -> bool:
    """
    Decide whether `entry` goes on to the sink. First match wins:

    1. ignored request URIs are dropped in every environment
    2. local keeps everything else
    3. elsewhere only entries worth looking at later survive: reportable
       exceptions, failed requests, failed jobs, scheduled tasks and
       anything carrying a monitored tag
    """
    policy = policy or _DEFAULT_POLICY
    entry = parse_entry(entry)
    if is_ignored_request(entry, policy):
        return False
    if Environment.of(env).is_local:
        return True
    return (
        entry.is_reportable_exception()
        or entry.is_failed_request()
        or entry.is_failed_job()
        or entry.is_scheduled_task()
        or entry.has_monitored_tag(policy.monitored_tags)
    )


def should_keep_batch(
    entries: Iterable[EntryBase],
    env: Environment | str,
    policy: RedactionPolicy | None = None,
) -> bool:
    """A batch is kept whole when any of its entries would be kept on its own."""
    environment = Environment.of(env)
    return any(should_keep(entry, environment, policy) for entry in entries)
