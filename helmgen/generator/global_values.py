"""Global values -- configuration shared by several service groups.

Values that recur identically across groups are hoisted into the parent
chart's ``global:`` section instead of being repeated in every subchart.

Thresholds differ per value:

    imageRegistry  every group must use the same registry
    env            a NAME=value pair must occur in at least two groups
    labels         a key=value pair must occur in at least two groups

Each group contributes one sample per value: its first registry, and its
``env`` / ``commonLabels`` mappings merged across members (last member wins
inside a group). When one name qualifies under two different values the
value tallied first is kept; groups are tallied in order and names sorted
within a group, so the choice is stable but otherwise arbitrary.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from typing import Any

from helmgen.generator.grouping import ServiceGroup
from helmgen.graph.models import ProcessedResource
from helmgen.observability.logging import get_logger

_logger = get_logger("generator.global_values")

_MIN_SHARED_GROUPS = 2


def extract_global_values(groups: Sequence[ServiceGroup]) -> dict[str, Any]:
    """Return the values common to *groups*, keyed by ``imageRegistry``, ``env`` and ``labels``.

    Keys are present only when something was promoted. Fewer than two groups
    always yield an empty mapping.
    """
    global_values: dict[str, Any] = {}
    if len(groups) < _MIN_SHARED_GROUPS:
        return global_values

    registry = _common_image_registry(groups)
    if registry:
        global_values["imageRegistry"] = registry

    env = _common_string_values(groups, "env")
    if env:
        global_values["env"] = env

    labels = _common_string_values(groups, "commonLabels")
    if labels:
        global_values["labels"] = labels

    _logger.debug("global_values_extracted", groups=len(groups), promoted=sorted(global_values))
    return global_values


def build_global_section(global_values: dict[str, Any]) -> dict[str, Any]:
    """Parent ``global:`` section; an empty registry placeholder when nothing is shared."""
    if global_values:
        return dict(global_values)
    return {"imageRegistry": ""}


def image_registry(resource: ProcessedResource) -> str:
    image = resource.values.get("image")
    if not isinstance(image, dict):
        return ""
    registry = image.get("registry")
    return registry if isinstance(registry, str) else ""


def _common_image_registry(groups: Sequence[ServiceGroup]) -> str:
    tally: Counter[str] = Counter()
    for group in groups:
        for resource in group.resources:
            registry = image_registry(resource)
            if registry:
                tally[registry] += 1
                break

    unanimous = [registry for registry, count in tally.items() if count == len(groups)]
    if len(unanimous) == 1:
        return unanimous[0]
    return ""


def _group_snapshot(group: ServiceGroup, value_key: str) -> dict[str, str]:
    """Merge the string entries of ``values[value_key]`` across the group's members."""
    snapshot: dict[str, str] = {}
    for resource in group.resources:
        mapping = resource.values.get(value_key)
        if not isinstance(mapping, dict):
            continue
        for name, value in mapping.items():
            if isinstance(name, str) and isinstance(value, str):
                snapshot[name] = value
    return snapshot


def _common_string_values(groups: Sequence[ServiceGroup], value_key: str) -> dict[str, str]:
    tally: Counter[tuple[str, str]] = Counter()
    for group in groups:
        snapshot = _group_snapshot(group, value_key)
        for name in sorted(snapshot):
            tally[(name, snapshot[name])] += 1

    promoted: dict[str, str] = {}
    for (name, value), count in tally.items():
        if count < _MIN_SHARED_GROUPS or name in promoted:
            continue
        promoted[name] = value
    return promoted
