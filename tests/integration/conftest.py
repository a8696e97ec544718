"""Shared fixtures for helmgen integration tests.

Provides resource graphs shaped like real application bundles (labelled
workloads, unlabelled Services/ConfigMaps wired by relationships, stray
namespace-level objects, cluster-scoped RBAC) so integration tests can run
grouping, extraction and planning end to end.
"""

from __future__ import annotations

import pytest
import structlog

from helmgen.graph.models import (
    ProcessedResource,
    Relationship,
    RelationshipType,
    ResourceGraph,
    ResourceKey,
)
from helmgen.models.config import HelmGenConfig

# ---------------------------------------------------------------------------
# Resource factory helpers
# ---------------------------------------------------------------------------

_API_VERSIONS = {
    "Deployment": "apps/v1",
    "StatefulSet": "apps/v1",
    "DaemonSet": "apps/v1",
    "Ingress": "networking.k8s.io/v1",
    "ClusterRole": "rbac.authorization.k8s.io/v1",
}


def make_resource(
    kind: str = "Deployment",
    name: str = "my-app",
    namespace: str = "default",
    labels: dict[str, str] | None = None,
    values: dict | None = None,
) -> ProcessedResource:
    """Create a ProcessedResource with sensible defaults for testing."""
    metadata: dict = {"name": name}
    if namespace:
        metadata["namespace"] = namespace
    if labels:
        metadata["labels"] = dict(labels)
    return ProcessedResource(
        manifest={
            "apiVersion": _API_VERSIONS.get(kind, "v1"),
            "kind": kind,
            "metadata": metadata,
        },
        values=values or {},
    )


def make_workload_values(
    registry: str = "",
    env: dict[str, str] | None = None,
    common_labels: dict[str, str] | None = None,
) -> dict:
    """Values as the upstream processors emit them for a workload."""
    values: dict = {"replicas": 1}
    if registry:
        values["image"] = {"registry": registry, "repository": "app", "tag": "1.0.0"}
    if env:
        values["env"] = dict(env)
    if common_labels:
        values["commonLabels"] = dict(common_labels)
    return values


def link(
    graph: ResourceGraph,
    source: ProcessedResource,
    target: ProcessedResource | ResourceKey,
    rel_type: RelationshipType = RelationshipType.NAME_REFERENCE,
) -> None:
    """Add a relationship from *source* to *target* (a resource or a bare key)."""
    target_key = target if isinstance(target, ResourceKey) else target.key
    graph.add_relationship(Relationship(source=source.key, target=target_key, type=rel_type))


def build_graph(*resources: ProcessedResource) -> ResourceGraph:
    graph = ResourceGraph()
    for r in resources:
        graph.add_resource(r)
    return graph


# ---------------------------------------------------------------------------
# Graph fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def shop_graph() -> ResourceGraph:
    """A three-service shop plus leftovers.

    frontend  -- labelled Deployment + Service
    backend   -- labelled Deployment; unlabelled Service and ConfigMap attached by edges
    postgres  -- unlabelled StatefulSet, Secret and PVC wired together
    leftovers -- ConfigMap with no labels or edges (namespace group "shop"),
                 ClusterRole without namespace (individual group)
    """
    registry = "registry.example.com"
    frontend_dep = make_resource(
        "Deployment",
        "frontend",
        "shop",
        {"app.kubernetes.io/name": "frontend"},
        make_workload_values(registry, {"LOG_LEVEL": "info"}, {"team": "shop"}),
    )
    frontend_svc = make_resource("Service", "frontend", "shop", {"app.kubernetes.io/name": "frontend"})
    backend_dep = make_resource(
        "Deployment",
        "backend",
        "shop",
        {"app": "backend"},
        make_workload_values(registry, {"LOG_LEVEL": "info", "DB_HOST": "postgres"}),
    )
    backend_svc = make_resource("Service", "backend", "shop")
    backend_cm = make_resource("ConfigMap", "backend-config", "shop", values={"data": {"mode": "prod"}})
    postgres = make_resource(
        "StatefulSet",
        "postgres",
        "shop",
        values=make_workload_values(registry, {"PGDATA": "/var/lib/postgresql"}, {"team": "shop"}),
    )
    postgres_secret = make_resource("Secret", "postgres-credentials", "shop")
    postgres_pvc = make_resource("PersistentVolumeClaim", "data-postgres", "shop")
    flags = make_resource("ConfigMap", "feature-flags", "shop")
    reader = make_resource("ClusterRole", "shop-reader", "")

    graph = build_graph(
        frontend_dep,
        frontend_svc,
        backend_dep,
        backend_svc,
        backend_cm,
        postgres,
        postgres_secret,
        postgres_pvc,
        flags,
        reader,
    )
    link(graph, frontend_svc, frontend_dep, RelationshipType.LABEL_SELECTOR)
    link(graph, backend_svc, backend_dep, RelationshipType.LABEL_SELECTOR)
    link(graph, backend_dep, backend_cm, RelationshipType.ENV_FROM)
    link(graph, postgres, postgres_secret, RelationshipType.ENV_VALUE_FROM)
    link(graph, postgres, postgres_pvc, RelationshipType.PVC)
    # points at an object that was never extracted
    link(graph, flags, ResourceKey("Secret", "shop", "deleted"), RelationshipType.ANNOTATION)
    return graph


@pytest.fixture()
def uniform_registry_graph() -> ResourceGraph:
    """Two labelled services pulling from the same registry with the same env."""
    values = make_workload_values("ghcr.io/acme", {"LOG_LEVEL": "warn"}, {"owner": "acme"})
    return build_graph(
        make_resource("Deployment", "api", "acme", {"app": "api"}, values),
        make_resource("Deployment", "worker", "acme", {"app": "worker"}, values),
    )


@pytest.fixture()
def helmgen_config() -> HelmGenConfig:
    """Default HelmGenConfig for integration tests."""
    return HelmGenConfig()


@pytest.fixture()
def reset_logging():
    yield
    structlog.reset_defaults()
