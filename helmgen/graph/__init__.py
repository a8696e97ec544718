"""Resource graph consumed by the chart generator.

Nodes are processed manifests keyed by (kind, namespace, name); edges are the
relationships inferred upstream (owner references, selectors, volume mounts,
name references, ...).
"""

from helmgen.graph.models import (
    ProcessedResource,
    Relationship,
    RelationshipType,
    ResourceGraph,
    ResourceKey,
)

__all__ = [
    "ProcessedResource",
    "Relationship",
    "RelationshipType",
    "ResourceGraph",
    "ResourceKey",
]
