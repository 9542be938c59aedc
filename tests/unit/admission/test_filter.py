# tests/unit/admission/test_filter.py
import pytest

from lookout.admission import is_ignored_request, should_keep, should_keep_batch
from lookout.entries import EntryBase, parse_entry
from lookout.errors import ConfigurationError
from lookout.privacy.policy import RedactionPolicy
from lookout.types import Environment

ENVIRONMENTS = ["local", "staging", "production", "testing"]

# one entry per rule, plus some that match nothing
IMPORTANT = [
    {"type": "exception", "content": {}},
    {"type": "request", "content": {"uri": "/checkout", "response_status": 500}},
    {"type": "job", "content": {"status": "failed"}},
    {"type": "scheduled_task", "content": {"command": "backup:run"}},
]
NOISE = [
    {"type": "request", "content": {"uri": "/", "response_status": 200}},
    {"type": "query", "content": {"sql": "select 1", "slow": True}},
    {"type": "job", "content": {"status": "processed"}},
    {"type": "exception", "content": {"reportable": False}},
    {"type": "log", "content": {"level": "info"}},
    {"type": "something_new", "content": {"status": "failed"}},
]


@pytest.mark.parametrize("env", ENVIRONMENTS)
def test_service_worker_request_dropped_everywhere(env):
    """Scenario 1 (and its local counterpart): sw.js is noise in every environment."""
    entry = parse_entry({"type": "request", "content": {"uri": "sw.js"}})
    assert should_keep(entry, env) is False


def test_service_worker_rule_only_applies_to_requests():
    entry = parse_entry({"type": "exception", "content": {"uri": "sw.js"}})
    assert should_keep(entry, "production") is True
    assert is_ignored_request(entry, RedactionPolicy.defaults()) is False


@pytest.mark.parametrize("data", IMPORTANT + NOISE)
def test_local_keeps_everything(data):
    assert should_keep(parse_entry(data), "local") is True
    assert should_keep(parse_entry(data), Environment.local()) is True


@pytest.mark.parametrize("data", IMPORTANT)
def test_production_keeps_important_entries(data):
    assert should_keep(parse_entry(data), "production") is True


@pytest.mark.parametrize("data", NOISE)
def test_production_drops_noise(data):
    assert should_keep(parse_entry(data), "production") is False


@pytest.mark.parametrize("data", IMPORTANT + NOISE)
@pytest.mark.parametrize("env", ["staging", "production"])
def test_non_local_matches_predicate_disjunction(data, env):
    entry = parse_entry(data)
    expected = (
        entry.is_reportable_exception()
        or entry.is_failed_request()
        or entry.is_failed_job()
        or entry.is_scheduled_task()
        or entry.has_monitored_tag(frozenset())
    )
    assert should_keep(entry, env) is expected


def test_plain_login_request_dropped_in_production():
    """Scenario 2: a successful login is not worth keeping outside local."""
    entry = parse_entry(
        {"type": "request", "content": {"uri": "/login", "parameters": {"password": "secret"}}}
    )
    assert should_keep(entry, "production") is False


def test_monitored_tags_keep_entries():
    policy = RedactionPolicy.defaults().with_overrides(monitored_tags={"Auth:42"})
    entry = parse_entry({"type": "query", "content": {"sql": "select 1"}, "tags": ["Auth:42"]})
    assert should_keep(entry, "production", policy) is True
    assert should_keep(entry, "production") is False


def test_ignored_uris_are_configurable():
    policy = RedactionPolicy.defaults().with_overrides(ignored_uris={"health"})
    health = parse_entry({"type": "request", "content": {"uri": "health", "response_status": 500}})
    assert should_keep(health, "production", policy) is False
    assert should_keep(health, "production") is True


def test_environment_names_are_normalised():
    entry = parse_entry({"type": "log", "content": {}})
    assert should_keep(entry, " LOCAL ") is True


def test_blank_environment_is_a_configuration_error():
    entry = parse_entry({"type": "log", "content": {}})
    with pytest.raises(ConfigurationError):
        should_keep(entry, "   ")


def test_batch_kept_when_any_entry_kept():
    noise = [parse_entry(d) for d in NOISE]
    assert should_keep_batch(noise, "production") is False
    assert should_keep_batch(noise + [parse_entry(IMPORTANT[0])], "production") is True
    assert should_keep_batch(noise, "local") is True
    assert should_keep_batch([], "local") is False


def test_bare_base_entries_are_judged_by_their_type():
    """An exception built as a plain EntryBase is still a reportable exception."""
    assert should_keep(EntryBase(type="exception", content={}), "production") is True
    assert should_keep(EntryBase(type="request", content={"response_status": 502}), "production") is True
    assert should_keep(EntryBase(type="request", content={"uri": "sw.js"}), "local") is False


@pytest.mark.parametrize("status", ["²", "5OO", "", 1e400, [500]])
def test_odd_status_values_never_raise(status):
    entry = parse_entry({"type": "request", "content": {"response_status": status}})
    assert should_keep(entry, "production") is False
