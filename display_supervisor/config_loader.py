"""Configuration loader for supervisor settings."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Mapping

import voluptuous as vol
import yaml

from .const import (
    DEFAULT_BASE_INTERVAL,
    DEFAULT_DISCOVERY_ATTEMPTS,
    DEFAULT_DISCOVERY_POLL_DELAY,
    DEFAULT_MAX_INTERVAL,
    DEFAULT_MAX_RECONNECT_ATTEMPTS,
    DEFAULT_MODIFIER_RESET_DELAY,
    DEFAULT_SETTLE_DELAY,
    DEFAULT_STALE_TEARDOWN_DELAY,
)

_LOGGER = logging.getLogger(__name__)

CONF_MAX_ATTEMPTS = "max_attempts"
CONF_BASE_INTERVAL = "base_interval"
CONF_MAX_INTERVAL = "max_interval"
CONF_SETTLE_DELAY = "settle_delay"
CONF_DISCOVERY_ATTEMPTS = "discovery_attempts"
CONF_DISCOVERY_POLL_DELAY = "discovery_poll_delay"
CONF_STALE_TEARDOWN_DELAY = "stale_teardown_delay"
CONF_MODIFIER_RESET_DELAY = "modifier_reset_delay"

_POSITIVE_SECONDS = vol.All(vol.Coerce(float), vol.Range(min=0, min_included=False))
_SECONDS = vol.All(vol.Coerce(float), vol.Range(min=0))


def _interval_order(config: dict[str, Any]) -> dict[str, Any]:
    if config[CONF_MAX_INTERVAL] < config[CONF_BASE_INTERVAL]:
        raise vol.Invalid(
            f"{CONF_MAX_INTERVAL} ({config[CONF_MAX_INTERVAL]}) must not be "
            f"below {CONF_BASE_INTERVAL} ({config[CONF_BASE_INTERVAL]})"
        )
    return config


SETTINGS_SCHEMA = vol.All(
    vol.Schema(
        {
            vol.Optional(
                CONF_MAX_ATTEMPTS, default=DEFAULT_MAX_RECONNECT_ATTEMPTS
            ): vol.All(vol.Coerce(int), vol.Range(min=1)),
            vol.Optional(
                CONF_BASE_INTERVAL, default=DEFAULT_BASE_INTERVAL
            ): _POSITIVE_SECONDS,
            vol.Optional(
                CONF_MAX_INTERVAL, default=DEFAULT_MAX_INTERVAL
            ): _POSITIVE_SECONDS,
            vol.Optional(CONF_SETTLE_DELAY, default=DEFAULT_SETTLE_DELAY): _SECONDS,
            vol.Optional(
                CONF_DISCOVERY_ATTEMPTS, default=DEFAULT_DISCOVERY_ATTEMPTS
            ): vol.All(vol.Coerce(int), vol.Range(min=0)),
            vol.Optional(
                CONF_DISCOVERY_POLL_DELAY, default=DEFAULT_DISCOVERY_POLL_DELAY
            ): _SECONDS,
            vol.Optional(
                CONF_STALE_TEARDOWN_DELAY, default=DEFAULT_STALE_TEARDOWN_DELAY
            ): _SECONDS,
            vol.Optional(
                CONF_MODIFIER_RESET_DELAY, default=DEFAULT_MODIFIER_RESET_DELAY
            ): _SECONDS,
        }
    ),
    _interval_order,
)


@dataclass(frozen=True)
class SupervisorSettings:
    """Timing and retry settings for the connection supervisor.

    All durations are in seconds.
    """

    max_attempts: int = DEFAULT_MAX_RECONNECT_ATTEMPTS
    base_interval: float = DEFAULT_BASE_INTERVAL
    max_interval: float = DEFAULT_MAX_INTERVAL
    settle_delay: float = DEFAULT_SETTLE_DELAY
    discovery_attempts: int = DEFAULT_DISCOVERY_ATTEMPTS
    discovery_poll_delay: float = DEFAULT_DISCOVERY_POLL_DELAY
    stale_teardown_delay: float = DEFAULT_STALE_TEARDOWN_DELAY
    modifier_reset_delay: float = DEFAULT_MODIFIER_RESET_DELAY

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


def load_settings(data: Mapping[str, Any] | None = None) -> SupervisorSettings:
    """Validate a settings mapping and apply defaults.

    Args:
        data: Raw settings, e.g. parsed from YAML. Missing keys take their
            defaults from const.py.

    Returns:
        Validated SupervisorSettings

    Raises:
        ValueError: If a setting is unknown or out of range
    """
    try:
        validated = SETTINGS_SCHEMA(dict(data or {}))
    except vol.Invalid as err:
        raise ValueError(f"Invalid supervisor settings: {err}") from err

    settings = SupervisorSettings(**validated)
    _LOGGER.debug("Loaded supervisor settings: %s", settings)
    return settings


def load_settings_file(path: str | Path) -> SupervisorSettings:
    """Load settings from a YAML file.

    The file may hold the settings at top level or under a
    ``supervisor:`` key. An empty file yields the defaults.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the YAML or a setting is invalid
    """
    config_file = Path(path)
    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_file}")

    try:
        config = yaml.safe_load(config_file.read_text(encoding="utf-8"))
    except yaml.YAMLError as err:
        raise ValueError(f"Invalid YAML: {err}") from err

    if isinstance(config, dict) and "supervisor" in config:
        config = config["supervisor"]
    if config is None:
        config = {}
    if not isinstance(config, dict):
        raise ValueError("Configuration must be a mapping")

    _LOGGER.info("Loading supervisor settings from %s", config_file)
    return load_settings(config)
