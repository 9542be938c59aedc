# lookout/privacy/policy.py
from __future__ import annotations

from typing import Iterable

from pydantic import BaseModel, ConfigDict, field_validator

PLACEHOLDER = "********"

DEFAULT_HIDDEN_PARAMETERS = frozenset({"_token", "password", "password_confirmation"})
DEFAULT_HIDDEN_HEADERS = frozenset({"cookie", "x-csrf-token", "x-xsrf-token", "authorization"})
# service worker polling is noise in every environment
DEFAULT_IGNORED_URIS = frozenset({"sw.js"})


class RedactionPolicy(BaseModel):
    """
    Names to scrub from entries and the admission knobs that go with them.

    Built once at startup and shared read-only; every helper returns a new policy.

    - hidden_parameters: request parameter names (case-sensitive, dots address nested keys)
    - hidden_headers: request header names (case-insensitive, stored lower-cased)
    - hidden_response_parameters: keys of a JSON response body, same matching as parameters
    - monitored_tags: tags that make an entry worth keeping outside local
    - ignored_uris: request URIs dropped in every environment
    - placeholder: value written in place of a hidden one
    """

    model_config = ConfigDict(frozen=True)

    hidden_parameters: frozenset[str] = DEFAULT_HIDDEN_PARAMETERS
    hidden_headers: frozenset[str] = DEFAULT_HIDDEN_HEADERS
    hidden_response_parameters: frozenset[str] = frozenset()
    monitored_tags: frozenset[str] = frozenset()
    ignored_uris: frozenset[str] = DEFAULT_IGNORED_URIS
    placeholder: str = PLACEHOLDER

    @field_validator("hidden_headers")
    @classmethod
    def _lower_headers(cls, v: frozenset[str]) -> frozenset[str]:
        return frozenset(name.strip().lower() for name in v if name.strip())

    @field_validator("hidden_parameters", "hidden_response_parameters", "monitored_tags", "ignored_uris")
    @classmethod
    def _drop_blank(cls, v: frozenset[str]) -> frozenset[str]:
        return frozenset(name for name in v if name.strip())

    @field_validator("placeholder")
    @classmethod
    def _non_empty_placeholder(cls, v: str) -> str:
        if not v:
            raise ValueError("placeholder must not be empty")
        return v

    @classmethod
    def defaults(cls) -> "RedactionPolicy":
        return cls()

    def with_overrides(
        self,
        *,
        hidden_parameters: Iterable[str] | None = None,
        hidden_headers: Iterable[str] | None = None,
        hidden_response_parameters: Iterable[str] | None = None,
        monitored_tags: Iterable[str] | None = None,
        ignored_uris: Iterable[str] | None = None,
        placeholder: str | None = None,
        replace: bool = False,
    ) -> "RedactionPolicy":
        """
        Return a copy with extra names merged in (or swapped in when `replace=True`).
        Sets left as None keep their current value either way.
        """
        data = self.model_dump()
        given = {
            "hidden_parameters": hidden_parameters,
            "hidden_headers": hidden_headers,
            "hidden_response_parameters": hidden_response_parameters,
            "monitored_tags": monitored_tags,
            "ignored_uris": ignored_uris,
        }
        for key, names in given.items():
            if names is None:
                continue
            names = frozenset(names)
            data[key] = names if replace else frozenset(data[key]) | names
        if placeholder is not None:
            data["placeholder"] = placeholder
        # re-validate so header names get normalised
        return type(self).model_validate(data)

    def hides_header(self, name: str) -> bool:
        return name.lower() in self.hidden_headers

    def hides_parameter(self, name: str) -> bool:
        return name in self.hidden_parameters
