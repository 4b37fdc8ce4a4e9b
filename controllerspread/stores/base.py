"""Read-only repository interfaces used by the filter.

Implementations return point-in-time snapshots that may already be stale
relative to the API server; callers never assume read-your-writes.
"""

from abc import ABC, abstractmethod
from typing import Any, List

from controllerspread.predicate.owners import ControllerKind


class ControllerRepository(ABC):
    """Namespaced lookup of workload controller objects."""

    @abstractmethod
    def get(self, kind: ControllerKind, namespace: str, name: str) -> Any:
        """Return the controller object of ``kind`` named ``name``.

        Raises:
            ControllerLookupError: If the object does not exist or the
                store could not be read.
        """


class PodRepository(ABC):
    """Namespace-scoped listing of pods."""

    @abstractmethod
    def list(self, namespace: str) -> List[Any]:
        """Return all pods in ``namespace``.

        Raises:
            PodListError: If the store could not be read.
        """
