"""Service grouping -- partitions a resource graph into chart-sized groups.

Three passes, each claiming only resources the earlier passes left alone:

    label         first non-empty value among the configured label keys
    relationship  connected components of the relationship graph (edges are
                  treated as undirected); a component touching a label group
                  is merged into that group instead of forming its own
    namespace     leftovers bucketed by namespace; leftovers without a
                  namespace become one ``individual`` group each

Every resource lands in exactly one group. All iteration happens over sorted
resource keys and sorted adjacency lists, so a given graph always yields the
same groups in the same order.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import StrEnum

from helmgen.graph.models import ProcessedResource, ResourceGraph, ResourceKey
from helmgen.models.config import GroupingConfig
from helmgen.observability.logging import get_logger

_logger = get_logger("generator.grouping")

_UNNAMED = "unnamed"


class GroupingStrategy(StrEnum):
    """Which pass produced a service group. Diagnostic only."""

    LABEL = "label"
    RELATIONSHIP = "relationship"
    NAMESPACE = "namespace"
    INDIVIDUAL = "individual"


class InvalidGraphError(ValueError):
    """Raised when the grouping input is not a resource graph."""


@dataclass
class ServiceGroup:
    """A logical group of resources that becomes one chart."""

    name: str
    resources: list[ProcessedResource] = field(default_factory=list)
    namespace: str = ""
    strategy: GroupingStrategy = GroupingStrategy.INDIVIDUAL

    def keys(self) -> list[ResourceKey]:
        return [r.key for r in self.resources]

    def __len__(self) -> int:
        return len(self.resources)


@dataclass
class GroupingResult:
    """Groups in creation order: label, relationship, namespace, individual."""

    groups: list[ServiceGroup] = field(default_factory=list)

    def find(self, name: str) -> ServiceGroup | None:
        for group in self.groups:
            if group.name == name:
                return group
        return None

    def strategy_counts(self) -> dict[str, int]:
        counts = {strategy.value: 0 for strategy in GroupingStrategy}
        for group in self.groups:
            counts[group.strategy.value] += 1
        return counts

    def __len__(self) -> int:
        return len(self.groups)

    def __iter__(self) -> Iterator[ServiceGroup]:
        return iter(self.groups)


class _GroupIndex:
    """Groups by name plus the reverse index resource key -> owning group."""

    def __init__(self) -> None:
        self._by_name: dict[str, ServiceGroup] = {}
        self._owner: dict[ResourceKey, ServiceGroup] = {}

    def owner(self, key: ResourceKey) -> ServiceGroup | None:
        return self._owner.get(key)

    def is_claimed(self, key: ResourceKey) -> bool:
        return key in self._owner

    def claim(
        self,
        key: ResourceKey,
        resource: ProcessedResource,
        name: str,
        namespace: str,
        strategy: GroupingStrategy,
    ) -> ServiceGroup:
        """Put *resource* into the group called *name*, creating it if needed.

        A name that already exists (possibly from an earlier pass) absorbs the
        resource; the existing group keeps its namespace and strategy.
        """
        group = self._by_name.get(name)
        if group is None:
            group = ServiceGroup(name=name, namespace=namespace, strategy=strategy)
            self._by_name[name] = group
        elif group.strategy != strategy:
            _logger.debug(
                "group_name_collision",
                group=name,
                existing_strategy=group.strategy.value,
                incoming_strategy=strategy.value,
            )
        self.join(group, key, resource)
        return group

    def join(self, group: ServiceGroup, key: ResourceKey, resource: ProcessedResource) -> None:
        if key in self._owner:
            return
        group.resources.append(resource)
        self._owner[key] = group

    def groups(self) -> list[ServiceGroup]:
        return list(self._by_name.values())


def group_resources(graph: ResourceGraph, config: GroupingConfig | None = None) -> GroupingResult:
    """Group the resources of *graph* into service groups.

    Strategy priority: label > relationship > namespace > individual.

    Raises:
        InvalidGraphError: *graph* is None or not a ResourceGraph.
    """
    if not isinstance(graph, ResourceGraph):
        raise InvalidGraphError(f"expected a ResourceGraph, got {type(graph).__name__}")
    cfg = config or GroupingConfig()

    if not graph.resources:
        return GroupingResult(groups=[])

    keys = graph.sorted_keys()
    index = _GroupIndex()

    _group_by_label(graph, keys, index, cfg)
    _group_by_relationship(graph, keys, index, cfg)
    _group_by_namespace(graph, keys, index)

    result = GroupingResult(groups=index.groups())
    _logger.info(
        "resources_grouped",
        resources=len(graph),
        groups=len(result),
        **result.strategy_counts(),
    )
    return result


# ---------------------------------------------------------------------------
# Pass 1: labels
# ---------------------------------------------------------------------------


def app_label(resource: ProcessedResource, label_keys: tuple[str, ...]) -> str:
    """Return the first non-empty label value among *label_keys*, or ''."""
    labels = resource.labels
    for label_key in label_keys:
        value = labels.get(label_key)
        if isinstance(value, str) and value:
            return value
    return ""


def _group_by_label(
    graph: ResourceGraph,
    keys: list[ResourceKey],
    index: _GroupIndex,
    cfg: GroupingConfig,
) -> None:
    for key in keys:
        resource = graph.resources[key]
        app_name = app_label(resource, cfg.label_keys)
        if not app_name:
            continue
        index.claim(key, resource, app_name, resource.namespace, GroupingStrategy.LABEL)


# ---------------------------------------------------------------------------
# Pass 2: relationships
# ---------------------------------------------------------------------------


def _build_adjacency(graph: ResourceGraph) -> dict[ResourceKey, list[ResourceKey]]:
    """Undirected adjacency over every edge whose endpoints are both in *graph*."""
    neighbours: dict[ResourceKey, set[ResourceKey]] = {}
    for rel in graph.relationships:
        if rel.source not in graph or rel.target not in graph:
            _logger.debug("dangling_relationship_skipped", source=str(rel.source), target=str(rel.target))
            continue
        neighbours.setdefault(rel.source, set()).add(rel.target)
        neighbours.setdefault(rel.target, set()).add(rel.source)
    return {key: sorted(adjacent) for key, adjacent in neighbours.items()}


def _connected_component(start: ResourceKey, adjacency: dict[ResourceKey, list[ResourceKey]]) -> list[ResourceKey]:
    """Breadth-first traversal from *start*; returns keys in visit order."""
    visited = {start}
    order: list[ResourceKey] = []
    queue = deque([start])
    while queue:
        current = queue.popleft()
        order.append(current)
        for neighbour in adjacency.get(current, ()):
            if neighbour not in visited:
                visited.add(neighbour)
                queue.append(neighbour)
    return order


def name_for_component(resources: list[ProcessedResource], workload_kinds: tuple[str, ...]) -> str:
    """Name a component after its first workload, else its first resource."""
    for resource in resources:
        if resource.kind in workload_kinds and resource.name:
            return resource.name
    if resources and resources[0].name:
        return resources[0].name
    return _UNNAMED


def _group_by_relationship(
    graph: ResourceGraph,
    keys: list[ResourceKey],
    index: _GroupIndex,
    cfg: GroupingConfig,
) -> None:
    if not graph.relationships:
        return
    adjacency = _build_adjacency(graph)

    for key in keys:
        if index.is_claimed(key) or key not in adjacency:
            continue

        component = _connected_component(key, adjacency)
        unclaimed = [k for k in component if not index.is_claimed(k)]

        existing: ServiceGroup | None = None
        for member in component:
            existing = index.owner(member)
            if existing is not None:
                break

        if existing is not None:
            for member in unclaimed:
                index.join(existing, member, graph.resources[member])
            _logger.debug("component_merged", group=existing.name, added=len(unclaimed))
            continue

        members = [graph.resources[k] for k in unclaimed]
        name = name_for_component(members, cfg.workload_kinds)
        namespace = members[0].namespace
        for member_key, member in zip(unclaimed, members, strict=True):
            index.claim(member_key, member, name, namespace, GroupingStrategy.RELATIONSHIP)
        _logger.debug("component_grouped", group=name, size=len(members))


# ---------------------------------------------------------------------------
# Pass 3: namespace / individual
# ---------------------------------------------------------------------------


def _group_by_namespace(graph: ResourceGraph, keys: list[ResourceKey], index: _GroupIndex) -> None:
    by_namespace: dict[str, list[ResourceKey]] = {}
    for key in keys:
        if index.is_claimed(key):
            continue
        namespace = graph.resources[key].namespace
        by_namespace.setdefault(namespace, []).append(key)

    for namespace in sorted(by_namespace):
        if not namespace:
            continue
        for key in by_namespace[namespace]:
            index.claim(key, graph.resources[key], namespace, namespace, GroupingStrategy.NAMESPACE)

    # Resources without a namespace each get a group of their own.
    for key in by_namespace.get("", []):
        resource = graph.resources[key]
        index.claim(key, resource, resource.name or str(key), "", GroupingStrategy.INDIVIDUAL)
