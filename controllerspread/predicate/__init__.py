"""Controller spread admission predicate.

Resolves a pod to its owning controller, works out how many distinct nodes
that controller's pods must span, and admits or rejects a candidate node.
"""

from controllerspread.predicate.owners import ControllerKind, ControllerReference, resolve_controller
from controllerspread.predicate.decision import StatusCode, Verdict, decide
from controllerspread.predicate.plugin import NAME, PLUGIN_REGISTRY, ControllerSpreadFilter, new

__all__ = [
    "ControllerKind",
    "ControllerReference",
    "resolve_controller",
    "StatusCode",
    "Verdict",
    "decide",
    "NAME",
    "PLUGIN_REGISTRY",
    "ControllerSpreadFilter",
    "new",
]
