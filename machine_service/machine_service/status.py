"""Single-slot record of the machine's last completed order."""

import threading
from datetime import datetime, timezone

from .schemas import MachineStatus, OrderOutcome


class StatusTracker:
    """Holds the most recently completed order.

    The slot is an immutable ``MachineStatus`` that is replaced, never
    mutated: the consumer swaps in a new value under the lock and readers
    take the current reference, so a snapshot is never half written.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._status = MachineStatus()

    def record(self, order_id: str, drink_type: str, completed_at: datetime | None = None) -> MachineStatus:
        """Overwrite the slot with a finished order."""
        status = MachineStatus(
            ready=True,
            last_order_id=order_id,
            last_drink_type=drink_type,
            last_outcome=OrderOutcome.DONE,
            completed_at=completed_at or datetime.now(timezone.utc),
        )
        with self._lock:
            self._status = status
        return status

    def snapshot(self) -> MachineStatus:
        """Return the current status."""
        with self._lock:
            return self._status
