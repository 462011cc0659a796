"""History Manager: linear undo/redo over the trackable part of the Store.

The history is a list of snapshots with a cursor. Edits are captured on a
debounce timer so a burst of changes becomes one step. While a snapshot is
being written back into the Store the manager is in ``RESTORING`` mode and
ignores the change notifications that write produces.
"""

import copy
from enum import Enum

from lovabolt.config import get_config
from lovabolt.state import TRACKABLE_FIELDS
from lovabolt.store import SelectionStore
from lovabolt.utils.scheduling import Debouncer


class HistoryMode(Enum):
    EDITING = "editing"
    RESTORING = "restoring"


class HistoryManager:
    def __init__(self, store: SelectionStore, scheduler, debounce_ms: int | None = None):
        if debounce_ms is None:
            debounce_ms = get_config().get("history_debounce_ms", 500)
        self._store = store
        self._snapshots: list[dict] = [store.trackable_state()]
        self._cursor = 0
        self.mode = HistoryMode.EDITING
        self._debouncer = Debouncer(debounce_ms, self.capture, scheduler)
        self._unsubscribe = store.subscribe(self._on_change)

    # --- Introspection ---

    @property
    def cursor(self) -> int:
        return self._cursor

    def __len__(self) -> int:
        return len(self._snapshots)

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._snapshots) - 1

    @property
    def pending(self) -> bool:
        return self._debouncer.pending

    def snapshot_at(self, index: int) -> dict:
        return copy.deepcopy(self._snapshots[index])

    # --- Capture ---

    def _on_change(self, field: str) -> None:
        if field not in TRACKABLE_FIELDS:
            return
        if self.mode is HistoryMode.RESTORING:
            return
        self._debouncer.trigger()

    def capture(self) -> bool:
        """Push the current trackable state if it differs from the cursor snapshot.

        Redo entries beyond the cursor are discarded. Returns True if a
        snapshot was pushed.
        """
        if self.mode is HistoryMode.RESTORING:
            return False
        current = self._store.trackable_state()
        if current == self._snapshots[self._cursor]:
            return False
        del self._snapshots[self._cursor + 1:]
        self._snapshots.append(current)
        self._cursor += 1
        return True

    # --- Navigation ---

    def undo(self) -> bool:
        """Step back one snapshot. No-op at the start of history."""
        self._debouncer.flush()
        if not self.can_undo:
            return False
        self._cursor -= 1
        self._restore(self._snapshots[self._cursor])
        return True

    def redo(self) -> bool:
        """Step forward one snapshot. No-op at the end of history."""
        self._debouncer.flush()
        if not self.can_redo:
            return False
        self._cursor += 1
        self._restore(self._snapshots[self._cursor])
        return True

    def _restore(self, snapshot: dict) -> None:
        self.mode = HistoryMode.RESTORING
        try:
            for field in TRACKABLE_FIELDS:
                self._store.set(field, copy.deepcopy(snapshot[field]))
        finally:
            self.mode = HistoryMode.EDITING

    def reset(self) -> None:
        """Drop all history and make the current Store state the new baseline."""
        self._debouncer.cancel()
        self._snapshots = [self._store.trackable_state()]
        self._cursor = 0

    def close(self) -> None:
        """Cancel any pending capture and stop observing the Store."""
        self._debouncer.cancel()
        self._unsubscribe()
