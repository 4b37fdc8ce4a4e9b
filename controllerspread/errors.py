"""Exception types raised by the controller spread filter."""

from typing import List, Optional


class SpreadFilterError(Exception):
    """Base class for all controller spread filter errors."""


class ControllerLookupError(SpreadFilterError):
    """Raised when the owning controller cannot be read from its store.

    Covers both a controller that no longer exists (or is not yet visible in
    the cache) and any other store failure.
    """

    def __init__(self, kind: str, namespace: str, name: str, cause: str = "not found"):
        super().__init__(f"could not retrieve {kind} {namespace}/{name}: {cause}")
        self.kind = kind
        self.namespace = namespace
        self.name = name
        self.cause = cause


class PodListError(SpreadFilterError):
    """Raised when pods of a namespace cannot be listed."""

    def __init__(self, namespace: str, cause: str):
        super().__init__(f"error listing pods in namespace {namespace}: {cause}")
        self.namespace = namespace
        self.cause = cause


class SchedulingCancelled(SpreadFilterError):
    """Raised when the scheduling context was cancelled or its deadline passed."""


class ConfigValidationError(SpreadFilterError):
    """Raised when plugin arguments fail validation."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or []
