"""Per-invocation scheduling context.

The host framework bounds every scheduling cycle with a deadline and may
abandon a cycle early. A ``SchedulingContext`` carries both signals into the
filter, which checks it before each store read.
"""

import threading
import time
from typing import Optional

from controllerspread.errors import SchedulingCancelled


class SchedulingContext:
    """Cancellation flag plus an optional monotonic deadline."""

    def __init__(self, timeout: Optional[float] = None):
        """Create a context.

        Args:
            timeout: Seconds from now after which the context expires.
                     ``None`` means no deadline.
        """
        self._cancelled = threading.Event()
        self._deadline = time.monotonic() + timeout if timeout is not None else None

    def cancel(self) -> None:
        """Mark the context as cancelled."""
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    def err(self) -> Optional[str]:
        """Return why the context is done, or None while it is still live."""
        if self.cancelled:
            return "context canceled"
        if self.expired:
            return "context deadline exceeded"
        return None

    def check(self) -> None:
        """Raise SchedulingCancelled if the context is done."""
        reason = self.err()
        if reason:
            raise SchedulingCancelled(reason)


def background() -> SchedulingContext:
    """A context that is never cancelled and has no deadline."""
    return SchedulingContext()
