"""Umbrella chart planning.

Combines grouping and global value extraction into the plan a chart writer
needs: one subchart per service group, each toggled by ``<name>.enabled``,
and a parent values mapping holding the ``global:`` section.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from helmgen.generator.global_values import build_global_section, extract_global_values
from helmgen.generator.grouping import ServiceGroup, group_resources
from helmgen.graph.models import ResourceGraph
from helmgen.models.config import HelmGenConfig
from helmgen.observability.logging import get_logger

_logger = get_logger("generator.umbrella")

# Helm reserves the top-level "global" key in values.yaml.
_RESERVED_VALUES_KEYS = frozenset({"global"})


@dataclass
class UmbrellaPlan:
    """Parent chart layout derived from a resource graph."""

    chart_name: str
    groups: list[ServiceGroup] = field(default_factory=list)
    global_values: dict[str, Any] = field(default_factory=dict)

    def dependencies(self) -> list[tuple[str, str]]:
        """(subchart name, condition) pairs for the parent Chart.yaml."""
        return [(group.name, f"{group.name}.enabled") for group in self.groups]

    def parent_values(self) -> dict[str, Any]:
        values: dict[str, Any] = {"global": build_global_section(self.global_values)}
        for group in self.groups:
            if group.name in _RESERVED_VALUES_KEYS:
                _logger.warning("subchart_name_reserved", group=group.name)
                continue
            values[group.name] = {"enabled": True}
        return values


def plan_umbrella(graph: ResourceGraph, config: HelmGenConfig | None = None) -> UmbrellaPlan:
    """Group *graph* and extract the values its groups share.

    Raises:
        InvalidGraphError: propagated from grouping.
    """
    cfg = config or HelmGenConfig()
    grouping = group_resources(graph, cfg.grouping)
    global_values = extract_global_values(grouping.groups)

    plan = UmbrellaPlan(
        chart_name=cfg.umbrella.chart_name,
        groups=grouping.groups,
        global_values=global_values,
    )
    _logger.info(
        "umbrella_planned",
        chart=plan.chart_name,
        subcharts=len(plan.groups),
        global_keys=sorted(global_values),
    )
    return plan
