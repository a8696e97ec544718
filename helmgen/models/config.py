"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_LABEL_KEYS: tuple[str, ...] = (
    "app.kubernetes.io/name",
    "app.kubernetes.io/instance",
    "app",
    "name",
)

DEFAULT_WORKLOAD_KINDS: tuple[str, ...] = ("Deployment", "StatefulSet", "DaemonSet")


@dataclass(frozen=True)
class GroupingConfig:
    """Grouping engine configuration.

    ``label_keys`` is checked in order; the first non-empty value names the group.
    """

    label_keys: tuple[str, ...] = DEFAULT_LABEL_KEYS
    workload_kinds: tuple[str, ...] = DEFAULT_WORKLOAD_KINDS


@dataclass
class UmbrellaConfig:
    """Parent chart configuration."""

    chart_name: str = "umbrella"


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"
    format: str = "json"


@dataclass
class HelmGenConfig:
    """Top-level helmgen configuration."""

    grouping: GroupingConfig = field(default_factory=GroupingConfig)
    umbrella: UmbrellaConfig = field(default_factory=UmbrellaConfig)
    log: LogConfig = field(default_factory=LogConfig)
