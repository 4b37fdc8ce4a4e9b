"""Placement census of a controller's active pods."""

from dataclasses import dataclass, field
from typing import FrozenSet, Optional

from controllerspread.context import SchedulingContext
from controllerspread.predicate.owners import ControllerReference, is_owned_by
from controllerspread.stores.base import PodRepository

# Phases in which a pod occupies (or is about to occupy) a node.
ACTIVE_PHASES = frozenset({"Pending", "Running"})


@dataclass(frozen=True)
class PlacementSnapshot:
    """Active siblings of a controller and the distinct nodes hosting them."""

    sibling_count: int = 0
    nodes: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def spread(self) -> int:
        return len(self.nodes)


def _phase(pod) -> Optional[str]:
    status = getattr(pod, "status", None)
    return getattr(status, "phase", None)


def _node_name(pod) -> Optional[str]:
    spec = getattr(pod, "spec", None)
    return getattr(spec, "node_name", None)


class PlacementCensus:
    """Counts where a controller's Pending and Running pods are placed."""

    def __init__(self, pods: PodRepository):
        self.pods = pods

    def compute(
        self,
        namespace: str,
        ref: ControllerReference,
        ctx: Optional[SchedulingContext] = None,
    ) -> PlacementSnapshot:
        """Take a snapshot of ``ref``'s active pods in ``namespace``.

        Unscheduled siblings count towards ``sibling_count`` but add no node.

        Raises:
            PodListError: If the pod store cannot be listed.
            SchedulingCancelled: If ``ctx`` is already done.
        """
        if ctx is not None:
            ctx.check()
        siblings = [
            pod
            for pod in self.pods.list(namespace)
            if is_owned_by(pod, ref) and _phase(pod) in ACTIVE_PHASES
        ]
        nodes = frozenset(name for name in map(_node_name, siblings) if name)
        return PlacementSnapshot(sibling_count=len(siblings), nodes=nodes)
