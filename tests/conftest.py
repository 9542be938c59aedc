# tests/conftest.py
import logging
import pytest

from lookout.entries import parse_entry
from lookout.pipeline import EntryPipeline, InMemorySink
from lookout.privacy.policy import RedactionPolicy

# ------------------------------------------------------------------------------
# 1. Global Configuration
# ------------------------------------------------------------------------------

@pytest.fixture(scope="session")
def anyio_backend():
    """
    Tells pytest to use 'asyncio' as the backend for anyio tests.
    The pipeline is written against anyio, so either backend works; asyncio is enough here.
    """
    return "asyncio"


@pytest.fixture(autouse=True)
def setup_test_logging(caplog):
    """
    Automatically captures logging at DEBUG level for every test.
    If a test fails, pytest will show the logs (dropped entries are logged at DEBUG).
    """
    caplog.set_level(logging.DEBUG)


# ------------------------------------------------------------------------------
# 2. Shared Entry / Pipeline Fixtures
# ------------------------------------------------------------------------------

@pytest.fixture
def policy():
    """The framework default policy (passwords, tokens, cookies, Authorization hidden)."""
    return RedactionPolicy.defaults()


@pytest.fixture
def login_request():
    """
    A request carrying both sensitive and harmless parameters/headers.
    Mirrors what the HTTP probe records for a form login.
    """
    return parse_entry(
        {
            "type": "request",
            "content": {
                "uri": "/login",
                "method": "POST",
                "response_status": 200,
                "parameters": {"password": "abc", "username": "bob"},
                "headers": {"Authorization": "Bearer xyz", "X-Custom": "v"},
            },
        }
    )


@pytest.fixture
def sink():
    return InMemorySink()


@pytest.fixture
def production_pipeline(sink, policy):
    return EntryPipeline(sink, environment="production", policy=policy)


@pytest.fixture
def clean_lookout_env(monkeypatch):
    """Keep a developer's LOOKOUT_* variables out of settings-driven tests."""
    for name in (
        "LOOKOUT_ENVIRONMENT",
        "LOOKOUT_LOG_LEVEL",
        "LOOKOUT_HIDDEN_PARAMETERS",
        "LOOKOUT_HIDDEN_HEADERS",
        "LOOKOUT_HIDDEN_RESPONSE_PARAMETERS",
        "LOOKOUT_MONITORED_TAGS",
        "LOOKOUT_IGNORED_URIS",
        "LOOKOUT_PLACEHOLDER",
    ):
        monkeypatch.delenv(name, raising=False)
