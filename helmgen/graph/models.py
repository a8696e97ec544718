"""Data structures for the resource graph consumed by the chart generator."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class RelationshipType(StrEnum):
    """Types of relationships detected between Kubernetes resources."""

    LABEL_SELECTOR = "label_selector"
    NAME_REFERENCE = "name_reference"
    VOLUME_MOUNT = "volume_mount"
    ENV_FROM = "env_from"
    ENV_VALUE_FROM = "env_value_from"
    ANNOTATION = "annotation"
    SERVICE_ACCOUNT = "service_account"
    OWNER_REFERENCE = "owner_reference"
    IMAGE_PULL_SECRET = "image_pull_secret"
    CLUSTER_ROLE_BINDING = "cluster_role_binding"
    ROLE_BINDING = "role_binding"
    PVC = "pvc"
    INGRESS_CLASS = "ingress_class"
    SERVICE_MONITOR = "service_monitor"
    DECKHOUSE = "deckhouse"
    GATEWAY_ROUTE = "gateway_route"
    SCALE_TARGET = "scale_target"
    STORAGE_CLASS = "storage_class"
    CUSTOM_DEPENDENCY = "custom_dependency"


@dataclass(frozen=True, order=True)
class ResourceKey:
    """Uniquely identifies a Kubernetes resource.

    Ordering is by (kind, namespace, name); sorted keys are the canonical
    iteration order for every aggregation over a graph.
    """

    kind: str
    namespace: str
    name: str

    def __str__(self) -> str:
        if not self.namespace:
            return f"{self.kind}/{self.name}"
        return f"{self.kind}/{self.namespace}/{self.name}"


@dataclass(frozen=True)
class ProcessedResource:
    """A manifest together with the values extracted from it upstream.

    ``values`` maps semantic keys (``image``, ``env``, ``commonLabels``, ...)
    to arbitrary nested structures. Neither the manifest nor the values are
    mutated by the grouping or extraction stages.
    """

    manifest: dict[str, Any]
    values: dict[str, Any] = field(default_factory=dict)
    service_name: str = ""

    @property
    def metadata(self) -> dict[str, Any]:
        meta = self.manifest.get("metadata")
        return meta if isinstance(meta, dict) else {}

    @property
    def kind(self) -> str:
        return str(self.manifest.get("kind") or "")

    @property
    def name(self) -> str:
        return str(self.metadata.get("name") or "")

    @property
    def namespace(self) -> str:
        return str(self.metadata.get("namespace") or "")

    @property
    def labels(self) -> dict[str, str]:
        labels = self.metadata.get("labels")
        return labels if isinstance(labels, dict) else {}

    @property
    def key(self) -> ResourceKey:
        return ResourceKey(kind=self.kind, namespace=self.namespace, name=self.name)


@dataclass(frozen=True)
class Relationship:
    """A directed edge: ``source`` depends on or addresses ``target``."""

    source: ResourceKey
    target: ResourceKey
    type: RelationshipType = RelationshipType.NAME_REFERENCE
    source_field: str = ""  # path of the field in the source that creates the edge
    details: dict[str, str] = field(default_factory=dict, compare=False, hash=False)


@dataclass
class ResourceGraph:
    """Resources keyed by ResourceKey plus the relationships between them."""

    resources: dict[ResourceKey, ProcessedResource] = field(default_factory=dict)
    relationships: list[Relationship] = field(default_factory=list)

    def add_resource(self, resource: ProcessedResource) -> None:
        self.resources[resource.key] = resource

    def add_relationship(self, relationship: Relationship) -> None:
        self.relationships.append(relationship)

    def get(self, key: ResourceKey) -> ProcessedResource | None:
        return self.resources.get(key)

    def relationships_from(self, key: ResourceKey) -> list[Relationship]:
        """Return all relationships whose source is *key*."""
        return [rel for rel in self.relationships if rel.source == key]

    def relationships_to(self, key: ResourceKey) -> list[Relationship]:
        """Return all relationships whose target is *key*."""
        return [rel for rel in self.relationships if rel.target == key]

    def resources_by_kind(self, kind: str) -> list[ProcessedResource]:
        return [self.resources[key] for key in self.sorted_keys() if key.kind == kind]

    def sorted_keys(self) -> list[ResourceKey]:
        return sorted(self.resources)

    def __len__(self) -> int:
        return len(self.resources)

    def __contains__(self, key: object) -> bool:
        return key in self.resources

    def __iter__(self) -> Iterator[ProcessedResource]:
        for key in self.sorted_keys():
            yield self.resources[key]
