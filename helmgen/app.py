"""Application entry for helmgen.

Order: config -> logging -> grouping -> global values. The caller supplies
the resource graph; parsing manifests into one happens upstream.
"""

from __future__ import annotations

from helmgen.config import load_config
from helmgen.generator.umbrella import UmbrellaPlan, plan_umbrella
from helmgen.graph.models import ResourceGraph
from helmgen.observability.logging import get_logger, setup_logging


def run(graph: ResourceGraph) -> UmbrellaPlan:
    """Plan an umbrella chart for *graph* using HELMGEN_* configuration.

    Raises ValueError on invalid configuration and InvalidGraphError when
    *graph* is not a ResourceGraph.
    """
    config = load_config()
    setup_logging(config.log.level, config.log.format)
    log = get_logger("app")
    log.info("helmgen starting", version=_helmgen_version(), resources=len(graph) if graph is not None else 0)
    return plan_umbrella(graph, config)


def _helmgen_version() -> str:
    from helmgen import __version__

    return __version__
