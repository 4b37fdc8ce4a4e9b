"""Admission verdicts and the spread comparison."""

from dataclasses import dataclass
from enum import Enum
from typing import AbstractSet, Any, Dict, Optional


class StatusCode(str, Enum):
    """Outcome reported back to the scheduling framework."""

    SUCCESS = "Success"
    UNSCHEDULABLE = "Unschedulable"
    ERROR = "Error"


@dataclass(frozen=True)
class Verdict:
    """Result of evaluating one pod against one candidate node."""

    code: StatusCode
    reason: str = ""
    required_hosts: Optional[int] = None
    observed_spread: Optional[int] = None

    @classmethod
    def admit(cls) -> "Verdict":
        return cls(code=StatusCode.SUCCESS)

    @classmethod
    def reject(cls, required_hosts: int, observed_spread: int) -> "Verdict":
        return cls(
            code=StatusCode.UNSCHEDULABLE,
            reason=f"must schedule across at least {required_hosts} distinct nodes",
            required_hosts=required_hosts,
            observed_spread=observed_spread,
        )

    @classmethod
    def error(cls, cause: str) -> "Verdict":
        return cls(code=StatusCode.ERROR, reason=cause)

    @property
    def is_success(self) -> bool:
        return self.code == StatusCode.SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        """Serialise to a dictionary."""
        return {
            "code": self.code.value,
            "reason": self.reason,
            "requiredHosts": self.required_hosts,
            "observedSpread": self.observed_spread,
        }


def effective_spread(nodes: AbstractSet[str], candidate_node: str) -> int:
    """Distinct node count after tentatively placing a pod on ``candidate_node``."""
    return len(nodes) + (0 if candidate_node in nodes else 1)


def decide(required_hosts: int, nodes: AbstractSet[str], candidate_node: str) -> Verdict:
    """Admit unless placing on ``candidate_node`` leaves too few distinct nodes."""
    spread = effective_spread(nodes, candidate_node)
    if spread < required_hosts:
        return Verdict.reject(required_hosts, spread)
    return Verdict.admit()
