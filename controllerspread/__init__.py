"""Controller spread scheduler filter.

Keeps the pods of a ReplicaSet, StatefulSet, Job or CronJob spread across a
minimum number of distinct nodes.
"""

from controllerspread.predicate import (
    NAME,
    PLUGIN_REGISTRY,
    ControllerKind,
    ControllerReference,
    ControllerSpreadFilter,
    StatusCode,
    Verdict,
    new,
)
from controllerspread.context import SchedulingContext
from controllerspread.config.loader import SpreadFilterArgs

__version__ = "0.1.0"

__all__ = [
    "NAME",
    "PLUGIN_REGISTRY",
    "ControllerKind",
    "ControllerReference",
    "ControllerSpreadFilter",
    "SchedulingContext",
    "SpreadFilterArgs",
    "StatusCode",
    "Verdict",
    "new",
]
