"""Selection State Store: the single owner of the live Selection Graph.

Every field is read as an attribute and written either by assignment or by
``set(field, value)``. A value may be given as a reducer ``fn(previous) -> new``
instead of a replacement; this is how multi-select toggles are expressed.

The Store validates nothing against catalogs and touches no storage. Other
components observe it with ``subscribe()`` and receive the name of every field
whose value actually changed.
"""

import copy
from typing import Callable

from lovabolt.state import (
    FIRST_STEP,
    GRAPH_FIELDS,
    LIST_FIELDS,
    STEPS,
    TRACKABLE_FIELDS,
    SelectionGraph,
    default_graph,
    default_project_info,
    default_typography,
)

Listener = Callable[[str], None]

# Fields counted by the completion ratio, in display order.
PROGRESS_FIELDS: tuple = (
    "project_info",
    "selected_layout",
    "selected_design_style",
    "selected_color_theme",
    "selected_typography",
    "selected_visuals",
    "selected_background",
    "selected_components",
    "selected_functionality",
    "selected_animations",
)


def item_key(item):
    """Identity of a catalog item inside a multi-select list."""
    if isinstance(item, dict) and item.get("id") is not None:
        return item["id"]
    return repr(item)


def toggle(items: list, item) -> list:
    """Return a new list with ``item`` removed if its id is present, else appended."""
    key = item_key(item)
    if any(item_key(existing) == key for existing in items):
        return [existing for existing in items if item_key(existing) != key]
    return [*items, item]


def dedupe(items) -> list:
    """Drop later entries whose id was already seen, keeping insertion order."""
    seen = set()
    result = []
    for item in items or []:
        key = item_key(item)
        if key in seen:
            continue
        seen.add(key)
        result.append(item)
    return result


def is_filled(field: str, value) -> bool:
    """Whether a graph field counts toward the completion ratio."""
    if field == "project_info":
        value = value or {}
        return bool(value.get("name") and value.get("description") and value.get("purpose"))
    if field == "selected_typography":
        return bool((value or {}).get("font_family"))
    if field in LIST_FIELDS:
        return len(value or []) > 0
    return value is not None


def compute_progress(graph: dict) -> int:
    """Completion ratio over the ten designated fields, as a whole percentage."""
    completed = sum(1 for field in PROGRESS_FIELDS if is_filled(field, graph.get(field)))
    return round(completed / len(PROGRESS_FIELDS) * 100)


class _Field:
    """Attribute access for one graph field; assignment goes through Store.set()."""

    def __set_name__(self, owner, name):
        self.name = name

    def __get__(self, store, owner=None):
        if store is None:
            return self
        return store._values[self.name]

    def __set__(self, store, value):
        store.set(self.name, value)


class SelectionStore:
    project_info = _Field()
    selected_layout = _Field()
    selected_special_layouts = _Field()
    selected_design_style = _Field()
    selected_color_theme = _Field()
    selected_typography = _Field()
    selected_functionality = _Field()
    selected_visuals = _Field()
    selected_background = _Field()
    background_selection = _Field()
    selected_components = _Field()
    selected_animations = _Field()
    current_step = _Field()

    def __init__(self):
        self._values: dict = {**default_graph(), "current_step": FIRST_STEP}
        self._listeners: list[Listener] = []

    # --- Observation ---

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener. Returns a callable that unsubscribes it."""
        self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, field: str) -> None:
        for listener in list(self._listeners):
            listener(field)

    # --- Reads ---

    def get(self, field: str):
        if field not in self._values:
            raise KeyError(f"Unknown selection field: {field}")
        return self._values[field]

    def snapshot(self, fields=GRAPH_FIELDS) -> dict:
        """Deep copy of the requested fields. Never aliases the live graph."""
        return {field: copy.deepcopy(self._values[field]) for field in fields}

    def trackable_state(self) -> dict:
        return self.snapshot(TRACKABLE_FIELDS)

    def graph(self) -> SelectionGraph:
        return self.snapshot(GRAPH_FIELDS)

    @property
    def progress(self) -> int:
        return compute_progress(self._values)

    # --- Writes ---

    def set(self, field: str, value) -> None:
        """Replace a field, or reduce it when ``value`` is callable.

        Listeners are notified only when the stored value changes.
        """
        previous = self.get(field)
        if callable(value):
            value = value(previous)
        value = self._normalize(field, value)
        if value == previous:
            return
        self._values[field] = value
        self._notify(field)

    def toggle(self, field: str, item) -> None:
        """Add ``item`` to a multi-select field if absent, otherwise remove it."""
        if field not in LIST_FIELDS:
            raise KeyError(f"{field} is not a multi-select field")
        self.set(field, lambda previous: toggle(previous, item))

    def reset(self) -> None:
        """Return every field, including the step pointer, to its default."""
        for field, value in default_graph().items():
            self.set(field, value)
        self.set("current_step", FIRST_STEP)

    @staticmethod
    def _normalize(field: str, value):
        if field in LIST_FIELDS:
            return dedupe(value)
        if field == "selected_typography":
            return {**default_typography(), **(value or {})}
        if field == "project_info":
            return {**default_project_info(), **(value or {})}
        if field == "current_step":
            return value if value in STEPS else FIRST_STEP
        return value
