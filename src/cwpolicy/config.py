"""Loads the ``custom.cloudwatchPolicy`` configuration section."""

import logging
from collections.abc import Mapping
from typing import Any

from cwpolicy.errors import ConfigError
from cwpolicy.models import PolicyConfig

logger = logging.getLogger(__name__)

CONFIG_KEY = "cloudwatchPolicy"
KNOWN_OPTIONS = {"retainLogs"}


def load_config(custom: Mapping[str, Any] | None) -> PolicyConfig:
    """Build a PolicyConfig from a service's ``custom`` section.

    A missing section yields the defaults. ``retainLogs`` must be a boolean;
    unknown options are logged and ignored.
    """
    section = (custom or {}).get(CONFIG_KEY) or {}
    if not isinstance(section, Mapping):
        raise ConfigError(f"custom.{CONFIG_KEY} must be a mapping, got {type(section).__name__}")

    for key in sorted(set(section) - KNOWN_OPTIONS):
        logger.warning("Ignoring unknown custom.%s option %r", CONFIG_KEY, key)

    retain_logs = section.get("retainLogs", False)
    if not isinstance(retain_logs, bool):
        raise ConfigError(
            f"custom.{CONFIG_KEY}.retainLogs must be true or false, got {retain_logs!r}"
        )

    return PolicyConfig(retain_logs=retain_logs)
