"""Controller kinds and owner-reference resolution.

A pod is governed by this filter only when one of its owner references points
at a ReplicaSet, StatefulSet, Job or CronJob. Each kind knows where its
desired replica/parallelism count lives on the controller object.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ControllerKind(str, Enum):
    """Workload controller kinds recognised in pod owner references."""

    REPLICA_SET = "ReplicaSet"
    STATEFUL_SET = "StatefulSet"
    JOB = "Job"
    CRON_JOB = "CronJob"

    def desired_count(self, obj: Any) -> int:
        """Extract the desired replica/parallelism count from a controller object.

        ReplicaSet and StatefulSet use ``spec.replicas``, Job uses
        ``spec.parallelism`` and CronJob uses the parallelism of its job
        template. An unset field means a single replica.
        """
        spec = getattr(obj, "spec", None)
        if self in (ControllerKind.REPLICA_SET, ControllerKind.STATEFUL_SET):
            value = getattr(spec, "replicas", None)
        elif self == ControllerKind.JOB:
            value = getattr(spec, "parallelism", None)
        else:
            job_template = getattr(spec, "job_template", None)
            value = getattr(getattr(job_template, "spec", None), "parallelism", None)
        return 1 if value is None else value

    @classmethod
    def from_owner_kind(cls, kind: Optional[str]) -> Optional["ControllerKind"]:
        """Map an owner reference ``kind`` to a ControllerKind, or None."""
        try:
            return cls(kind)
        except ValueError:
            return None


@dataclass(frozen=True)
class ControllerReference:
    """Identifies the controller object that owns a pod."""

    kind: ControllerKind
    uid: str
    name: str

    def __str__(self) -> str:
        return f"{self.kind.value}/{self.name}"


def resolve_controller(pod: Any) -> Optional[ControllerReference]:
    """Return the pod's owning controller, or None if it has no eligible owner.

    Owner references are scanned in list order and the first one of a
    recognised kind with a non-empty uid and name wins.
    """
    metadata = getattr(pod, "metadata", None)
    for owner in getattr(metadata, "owner_references", None) or []:
        if not owner.uid or not owner.name:
            continue
        kind = ControllerKind.from_owner_kind(owner.kind)
        if kind is None:
            continue
        return ControllerReference(kind=kind, uid=str(owner.uid), name=owner.name)
    return None


def is_owned_by(pod: Any, ref: ControllerReference) -> bool:
    """Check whether any owner reference of ``pod`` matches ``ref``.

    Only kind and uid are compared, so a renamed controller still matches.
    """
    metadata = getattr(pod, "metadata", None)
    for owner in getattr(metadata, "owner_references", None) or []:
        if owner.kind == ref.kind.value and str(owner.uid) == ref.uid:
            return True
    return False
