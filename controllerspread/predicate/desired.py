"""Desired replica/parallelism count resolution."""

from dataclasses import dataclass, field
from typing import Dict, Optional

from controllerspread.context import SchedulingContext
from controllerspread.predicate.owners import ControllerReference
from controllerspread.stores.base import ControllerRepository


@dataclass(frozen=True)
class ControllerObject:
    """Snapshot of the fields of a controller object the filter reads."""

    reference: ControllerReference
    desired_count: int = 1
    annotations: Dict[str, str] = field(default_factory=dict)


class DesiredCountResolver:
    """Fetches a controller object and extracts its desired count."""

    def __init__(self, controllers: ControllerRepository):
        self.controllers = controllers

    def resolve(
        self,
        ref: ControllerReference,
        namespace: str,
        ctx: Optional[SchedulingContext] = None,
    ) -> ControllerObject:
        """Look up the controller named by ``ref`` in ``namespace``.

        Raises:
            ControllerLookupError: If the controller cannot be read.
            SchedulingCancelled: If ``ctx`` is already done.
        """
        if ctx is not None:
            ctx.check()
        obj = self.controllers.get(ref.kind, namespace, ref.name)
        metadata = getattr(obj, "metadata", None)
        return ControllerObject(
            reference=ref,
            desired_count=ref.kind.desired_count(obj),
            annotations=dict(getattr(metadata, "annotations", None) or {}),
        )
