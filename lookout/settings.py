# lookout/settings.py
from __future__ import annotations

from typing import Literal

from mcp.server.fastmcp.utilities.logging import configure_logging, get_logger
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict, SettingsError

from lookout.errors import ConfigurationError
from lookout.privacy.policy import PLACEHOLDER, RedactionPolicy
from lookout.types import PRODUCTION, Environment

logger = get_logger(__name__)


class LookoutSettings(BaseSettings):
    """Lookout settings.

    All settings can be configured via environment variables with the prefix LOOKOUT_.
    For example, LOOKOUT_ENVIRONMENT=local turns off redaction and keeps every entry.
    Name lists are JSON arrays (LOOKOUT_HIDDEN_HEADERS='["cookie","x-api-key"]') and
    replace the defaults when set.
    """

    model_config = SettingsConfigDict(
        env_prefix="LOOKOUT_",
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Unset means production: scrub and filter unless told otherwise.
    environment: str = PRODUCTION
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # Policy overrides
    hidden_parameters: list[str] | None = None
    hidden_headers: list[str] | None = None
    hidden_response_parameters: list[str] | None = None
    monitored_tags: list[str] | None = None
    ignored_uris: list[str] | None = None
    placeholder: str = PLACEHOLDER

    def to_environment(self) -> Environment:
        return Environment.of(self.environment)

    def to_policy(self) -> RedactionPolicy:
        overrides = {
            name: frozenset(value)
            for name, value in (
                ("hidden_parameters", self.hidden_parameters),
                ("hidden_headers", self.hidden_headers),
                ("hidden_response_parameters", self.hidden_response_parameters),
                ("monitored_tags", self.monitored_tags),
                ("ignored_uris", self.ignored_uris),
            )
            if value is not None
        }
        try:
            return RedactionPolicy(placeholder=self.placeholder, **overrides)
        except ValidationError as exc:
            raise ConfigurationError("Invalid redaction policy settings", data=exc.errors()) from exc


def configure(settings: LookoutSettings | None = None) -> tuple[Environment, RedactionPolicy]:
    """
    Load settings once at process start, set up logging and build the
    read-only environment/policy pair handed to the filter and redactor.
    """
    if settings is None:
        try:
            settings = LookoutSettings()
        except ValidationError as exc:
            raise ConfigurationError("Invalid LOOKOUT_* settings", data=exc.errors()) from exc
        except SettingsError as exc:
            # undecodable JSON in a list variable
            raise ConfigurationError(f"Invalid LOOKOUT_* settings: {exc}") from exc
    configure_logging(settings.log_level)

    environment = settings.to_environment()
    policy = settings.to_policy()

    if not environment.is_local:
        if not policy.hidden_parameters:
            logger.warning("No hidden request parameters configured for '%s'; parameters are stored as-is", environment)
        if not policy.hidden_headers:
            logger.warning("No hidden request headers configured for '%s'; headers are stored as-is", environment)

    logger.info("Lookout configured for environment '%s'", environment)
    return environment, policy
