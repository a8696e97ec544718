"""Configuration loading from environment variables."""

from __future__ import annotations

import os
import re

from helmgen.models.config import (
    DEFAULT_LABEL_KEYS,
    DEFAULT_WORKLOAD_KINDS,
    GroupingConfig,
    HelmGenConfig,
    LogConfig,
    UmbrellaConfig,
)

# DNS-1123 label, the constraint Helm places on chart names.
_RE_CHART_NAME = re.compile(r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$")


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"HELMGEN_{key}", default)


def _env_list(key: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = _env(key, "")
    if not raw.strip():
        return default
    items = tuple(item.strip() for item in raw.split(",") if item.strip())
    if not items:
        raise ValueError(f"HELMGEN_{key} must contain at least one entry")
    return items


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def _validate_log_format(value: str) -> str:
    valid = {"json", "console"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log format: {value}. Must be one of {valid}")
    return value.lower()


def _validate_chart_name(value: str) -> str:
    if not _RE_CHART_NAME.match(value):
        raise ValueError(f"Invalid chart name: {value!r}")
    return value


def load_config() -> HelmGenConfig:
    """Load configuration from HELMGEN_* environment variables."""
    return HelmGenConfig(
        grouping=GroupingConfig(
            label_keys=_env_list("GROUPING_LABEL_KEYS", DEFAULT_LABEL_KEYS),
            workload_kinds=_env_list("GROUPING_WORKLOAD_KINDS", DEFAULT_WORKLOAD_KINDS),
        ),
        umbrella=UmbrellaConfig(
            chart_name=_validate_chart_name(_env("UMBRELLA_CHART_NAME", "umbrella")),
        ),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "info")),
            format=_validate_log_format(_env("LOG_FORMAT", "json")),
        ),
    )
