"""Persistence Layer: autosave, restore and reset of the durable project slot.

Storage failures never reach the caller: they are reported on stderr and the
in-memory Store stays the record of truth. A corrupt slot is deleted and the
session continues from defaults.
"""

import sys
from datetime import datetime, timezone
from typing import Callable

from lovabolt.config import get_config
from lovabolt.state import GRAPH_FIELDS
from lovabolt.store import SelectionStore
from lovabolt.utils.parsing import ProjectRecordError, decode_record, encode_record, validate_record
from lovabolt.utils.scheduling import Debouncer
from lovabolt.utils.storage import StorageError

__all__ = ["PersistenceLayer", "ProjectRecordError"]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _timestamp(moment: datetime) -> str:
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class PersistenceLayer:
    def __init__(
        self,
        store: SelectionStore,
        storage,
        scheduler,
        key: str | None = None,
        debounce_ms: int | None = None,
        now: Callable[[], datetime] = _utc_now,
    ):
        config = get_config()
        self._store = store
        self._storage = storage
        self.key = key or config.get("storage_key", "lovabolt-project")
        if debounce_ms is None:
            debounce_ms = config.get("autosave_debounce_ms", 1000)
        self._now = now
        self._debouncer = Debouncer(debounce_ms, self.save_project, scheduler)
        self._unsubscribe = store.subscribe(self._on_change)

    @property
    def pending(self) -> bool:
        return self._debouncer.pending

    def _on_change(self, field: str) -> None:
        self._debouncer.trigger()

    def save_project(self) -> bool:
        """Overwrite the durable slot with the full graph. Returns False on failure."""
        try:
            text = encode_record(
                self._store.graph(), self._store.current_step, _timestamp(self._now())
            )
            self._storage.set(self.key, text)
        except (StorageError, TypeError, ValueError) as exc:
            print(f"[LovaBolt] Failed to save project: {exc!r}", file=sys.stderr)
            return False
        return True

    def load_project(self, record: dict) -> None:
        """Apply every present field of a record to the Store.

        Absent or null fields keep their current value. The whole record is
        checked before anything is applied, so a bad record changes nothing.
        Raises ProjectRecordError on a schema violation.
        """
        data = validate_record(record)
        for field in GRAPH_FIELDS:
            if data.get(field) is not None:
                self._store.set(field, data[field])
        if data.get("current_step"):
            self._store.set("current_step", data["current_step"])

    def restore(self) -> bool:
        """Read the durable slot once and load it. Returns True if a project was restored."""
        try:
            text = self._storage.get(self.key)
        except StorageError as exc:
            print(f"[LovaBolt] Failed to read saved project: {exc!r}", file=sys.stderr)
            return False
        if text is None:
            return False

        try:
            self.load_project(decode_record(text))
        except ProjectRecordError as exc:
            print(f"[LovaBolt] Failed to load saved project: {exc}", file=sys.stderr)
            self._discard()
            return False

        print("[LovaBolt] Project loaded from storage.", file=sys.stderr)
        return True

    def _discard(self) -> None:
        try:
            self._storage.remove(self.key)
        except StorageError as exc:
            print(f"[LovaBolt] Failed to clear corrupted project data: {exc!r}", file=sys.stderr)
            return
        print("[LovaBolt] Corrupted project data cleared.", file=sys.stderr)

    def clear_project(self) -> None:
        """Reset the Store to defaults and delete the durable slot."""
        self._store.reset()
        try:
            self._storage.remove(self.key)
        except StorageError as exc:
            print(f"[LovaBolt] Failed to remove saved project: {exc!r}", file=sys.stderr)
        # The reset above restarted the autosave timer; the slot stays empty until the next edit.
        self._debouncer.cancel()

    def close(self) -> None:
        """Cancel any pending autosave and stop observing the Store."""
        self._debouncer.cancel()
        self._unsubscribe()
