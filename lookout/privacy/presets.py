# lookout/privacy/presets.py
from __future__ import annotations

from typing import Iterable

from .policy import RedactionPolicy

# Opinionated presets. Call, then tweak with .with_overrides()


def default_policy() -> RedactionPolicy:
    """
    Framework defaults: hide CSRF tokens, passwords, cookies and the
    Authorization header; drop service worker requests.
    """
    return RedactionPolicy.defaults()


def strict_policy() -> RedactionPolicy:
    """
    **Strict preset (best-effort, no guarantees).**
    Adds the secret-looking names APIs commonly use on top of the defaults.
    Validate against your own traffic; names you do not list are not hidden.
    """
    return RedactionPolicy.defaults().with_overrides(
        hidden_parameters=[
            "api_key", "apikey", "access_token", "refresh_token", "token",
            "secret", "client_secret", "current_password", "new_password",
        ],
        hidden_headers=[
            "set-cookie", "proxy-authorization", "x-api-key", "x-auth-token",
        ],
        hidden_response_parameters=["access_token", "refresh_token", "token"],
    )


def with_monitored_tags(policy: RedactionPolicy, tags: Iterable[str]) -> RedactionPolicy:
    """Keep entries carrying any of `tags` outside local, in addition to the built-in rules."""
    return policy.with_overrides(monitored_tags=tags)
