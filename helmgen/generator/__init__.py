"""Chart generator core -- service grouping and global value extraction.

Submodules:
    grouping       -- label > relationship > namespace partitioning of a resource graph.
    global_values  -- values shared across groups, hoisted to the parent ``global:`` section.
    umbrella       -- parent chart plan built from the two stages above.
"""

from helmgen.generator.global_values import build_global_section, extract_global_values
from helmgen.generator.grouping import (
    GroupingResult,
    GroupingStrategy,
    InvalidGraphError,
    ServiceGroup,
    group_resources,
)
from helmgen.generator.umbrella import UmbrellaPlan, plan_umbrella

__all__ = [
    "GroupingResult",
    "GroupingStrategy",
    "InvalidGraphError",
    "ServiceGroup",
    "UmbrellaPlan",
    "build_global_section",
    "extract_global_values",
    "group_resources",
    "plan_umbrella",
]
