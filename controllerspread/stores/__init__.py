"""Read-only object stores consulted by the controller spread filter."""

from controllerspread.stores.base import ControllerRepository, PodRepository
from controllerspread.stores.memory import InMemoryControllerRepository, InMemoryPodRepository

__all__ = [
    "ControllerRepository",
    "PodRepository",
    "InMemoryControllerRepository",
    "InMemoryPodRepository",
]
