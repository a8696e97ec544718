"""Core data structures for helmgen."""

from helmgen.models.config import GroupingConfig, HelmGenConfig, LogConfig, UmbrellaConfig

__all__ = [
    "GroupingConfig",
    "HelmGenConfig",
    "LogConfig",
    "UmbrellaConfig",
]
