"""In-memory snapshot stores.

These play the role of informer-backed listers: something else keeps them
fed with objects, and the filter only reads from them.
"""

import threading
from typing import Any, Dict, Iterable, List, Tuple

from controllerspread.errors import ControllerLookupError
from controllerspread.predicate.owners import ControllerKind
from controllerspread.stores.base import ControllerRepository, PodRepository


def _object_key(obj: Any) -> Tuple[str, str]:
    metadata = obj.metadata
    return (metadata.namespace or "default", metadata.name)


class InMemoryControllerRepository(ControllerRepository):
    """Controller objects indexed by (kind, namespace, name)."""

    def __init__(self):
        self._lock = threading.Lock()
        self._objects: Dict[Tuple[ControllerKind, str, str], Any] = {}

    def add(self, kind: ControllerKind, obj: Any) -> None:
        """Insert or replace a controller object."""
        namespace, name = _object_key(obj)
        with self._lock:
            self._objects[(ControllerKind(kind), namespace, name)] = obj

    def delete(self, kind: ControllerKind, namespace: str, name: str) -> None:
        with self._lock:
            self._objects.pop((ControllerKind(kind), namespace, name), None)

    def get(self, kind: ControllerKind, namespace: str, name: str) -> Any:
        with self._lock:
            obj = self._objects.get((ControllerKind(kind), namespace, name))
        if obj is None:
            raise ControllerLookupError(ControllerKind(kind).value, namespace, name)
        return obj


class InMemoryPodRepository(PodRepository):
    """Pods indexed by namespace, then name."""

    def __init__(self, pods: Iterable[Any] = ()):
        self._lock = threading.Lock()
        self._pods: Dict[str, Dict[str, Any]] = {}
        for pod in pods:
            self.add(pod)

    def add(self, pod: Any) -> None:
        """Insert or replace a pod."""
        namespace, name = _object_key(pod)
        with self._lock:
            self._pods.setdefault(namespace, {})[name] = pod

    def delete(self, namespace: str, name: str) -> None:
        with self._lock:
            self._pods.get(namespace, {}).pop(name, None)

    def list(self, namespace: str) -> List[Any]:
        with self._lock:
            return list(self._pods.get(namespace, {}).values())
