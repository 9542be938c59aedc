# lookout/privacy/redaction.py
from __future__ import annotations

from collections.abc import Mapping
from copy import deepcopy
from typing import Any, Iterable, TypeVar

from lookout.entries import EntryBase
from lookout.types import Environment

from .policy import RedactionPolicy

E = TypeVar("E", bound=EntryBase)

_DEFAULT_POLICY = RedactionPolicy.defaults()


# --- dot-path helpers ("user.password" addresses {"user": {"password": ...}}) ---


def _mask_path(obj: Any, path: list[str], placeholder: str) -> bool:
    """Mask obj[path...] in place if the full path exists. Return True when masked."""
    if not path or not isinstance(obj, dict):
        return False
    seg, *rest = path
    if seg not in obj:
        return False
    if not rest:
        obj[seg] = placeholder
        return True
    return _mask_path(obj[seg], rest, placeholder)


def hide_parameters(data: Mapping[str, Any], names: Iterable[str], placeholder: str) -> dict[str, Any]:
    """
    Return a copy of `data` with each named parameter masked.
    Names match case-sensitively; a literal key wins over a dotted path.
    """
    out = deepcopy(dict(data))
    for name in names:
        if name in out:
            out[name] = placeholder
        elif "." in name:
            _mask_path(out, name.split("."), placeholder)
    return out


def hide_headers(headers: Mapping[Any, Any], names: frozenset[str], placeholder: str) -> dict[Any, Any]:
    """Return a copy of `headers` with every listed header masked (names compared lower-cased)."""
    out: dict[Any, Any] = {}
    for key, value in headers.items():
        if isinstance(key, str) and key.lower() in names:
            out[key] = placeholder
        else:
            out[key] = deepcopy(value)
    return out


def redact(entry: E, env: Environment | str, policy: RedactionPolicy | None = None) -> E:
    """
    Return `entry` with sensitive request details masked.

    Local environments get the very same entry back. Elsewhere the
    `parameters`, `headers` and `response` maps of the content are scrubbed
    and a new entry is returned; keys are never added or removed, and the
    input entry is left untouched.
    """
    if Environment.of(env).is_local:
        return entry
    policy = policy or _DEFAULT_POLICY

    content = entry.content
    updates: dict[str, Any] = {}

    parameters = content.get("parameters")
    if isinstance(parameters, Mapping) and policy.hidden_parameters:
        updates["parameters"] = hide_parameters(parameters, policy.hidden_parameters, policy.placeholder)

    headers = content.get("headers")
    if isinstance(headers, Mapping) and policy.hidden_headers:
        updates["headers"] = hide_headers(headers, policy.hidden_headers, policy.placeholder)

    response = content.get("response")
    if isinstance(response, Mapping) and policy.hidden_response_parameters:
        updates["response"] = hide_parameters(response, policy.hidden_response_parameters, policy.placeholder)

    if not updates:
        return entry

    new_content = {k: (updates[k] if k in updates else deepcopy(v)) for k, v in content.items()}
    return entry.model_copy(update={"content": new_content})
