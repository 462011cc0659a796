"""Encoding and decoding of the durable project record.

The record's top-level keys are camelCase (``projectInfo``, ``currentStep``,
``savedAt``). Nested keys are snake_case; records written by older clients
with camelCase nested keys (``fontFamily``, ``cliCommand``) are normalised on
the way in. Only keys the Selection Graph types declare are renamed, so the
free-form ``backgroundSelection`` mapping round-trips unchanged.
"""

import json
import re

from lovabolt.state import (
    GRAPH_FIELDS,
    LIST_FIELDS,
    ColorTheme,
    DesignStyle,
    FunctionalityOption,
    InstallableOption,
    LayoutOption,
    ProjectInfo,
    Typography,
    VisualElement,
)

_CAMEL_RE = re.compile(r"(?<=[a-z0-9])([A-Z])")

_MAPPING_FIELDS = {"project_info", "selected_typography"}

# Stored verbatim: no key renaming, no nested checks.
_OPAQUE_FIELDS = {"background_selection"}

_RECORD_FIELDS = frozenset((*GRAPH_FIELDS, "current_step", "saved_at"))

_KNOWN_SUBKEYS = frozenset().union(
    *(
        t.__annotations__
        for t in (
            ProjectInfo,
            Typography,
            LayoutOption,
            DesignStyle,
            ColorTheme,
            FunctionalityOption,
            VisualElement,
            InstallableOption,
        )
    )
)

# Sub-fields that must hold a list, and the element types each list accepts.
_LIST_SUBKEYS = {
    "colors": (str,),
    "distribution": (int, float),
    "dependencies": (str,),
    "features": (str,),
}


class ProjectRecordError(ValueError):
    """A persisted record is malformed or has a field of the wrong shape."""


def to_snake(name: str) -> str:
    return _CAMEL_RE.sub(r"_\1", name).lower()


def to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _rename(key, known) -> str:
    if isinstance(key, str) and to_snake(key) in known:
        return to_snake(key)
    return key


def _normalize_item(value):
    if not isinstance(value, dict):
        return value
    return {_rename(k, _KNOWN_SUBKEYS): v for k, v in value.items()}


def normalize_keys(record: dict) -> dict:
    """Convert record and sub-field keys to snake_case.

    Keys that no Selection Graph type declares are left as written.
    """
    result = {}
    for key, value in record.items():
        field = _rename(key, _RECORD_FIELDS)
        if field not in _OPAQUE_FIELDS:
            if isinstance(value, list):
                value = [_normalize_item(item) for item in value]
            else:
                value = _normalize_item(value)
        result[field] = value
    return result


def encode_record(graph: dict, current_step: str, saved_at: str) -> str:
    """Serialize the full graph, the step pointer and a timestamp to JSON text."""
    record = {to_camel(field): graph[field] for field in GRAPH_FIELDS}
    record["currentStep"] = current_step
    record["savedAt"] = saved_at
    return json.dumps(record, ensure_ascii=False)


def _check_item(field: str, item: dict) -> None:
    for key, kinds in _LIST_SUBKEYS.items():
        value = item.get(key)
        if value is None:
            continue
        if not isinstance(value, list) or not all(
            isinstance(v, kinds) and not isinstance(v, bool) for v in value
        ):
            kind = "strings" if kinds == (str,) else "numbers"
            raise ProjectRecordError(f"'{to_camel(field)}.{to_camel(key)}' must be a list of {kind}.")


def _check_shape(field: str, value) -> None:
    if value is None:
        return
    if field in LIST_FIELDS:
        if not isinstance(value, list) or not all(isinstance(item, dict) for item in value):
            raise ProjectRecordError(f"'{to_camel(field)}' must be a list of objects.")
        for item in value:
            _check_item(field, item)
    elif field in ("current_step", "saved_at"):
        if not isinstance(value, str):
            raise ProjectRecordError(f"'{to_camel(field)}' must be a string.")
    elif not isinstance(value, dict):
        kind = "an object" if field in _MAPPING_FIELDS else "an object or null"
        raise ProjectRecordError(f"'{to_camel(field)}' must be {kind}.")
    elif field not in _OPAQUE_FIELDS:
        _check_item(field, value)


def validate_record(data) -> dict:
    """Check a decoded record and return it with snake_case keys.

    Every field is optional; unknown keys are ignored.
    Raises ProjectRecordError on a schema violation.
    """
    if not isinstance(data, dict):
        raise ProjectRecordError("Project record must be a JSON object.")
    record = normalize_keys(data)
    for field in (*GRAPH_FIELDS, "current_step", "saved_at"):
        if field in record:
            _check_shape(field, record[field])
    return record


def decode_record(text) -> dict:
    """Parse and validate record text or raw UTF-8 bytes.

    Raises ProjectRecordError on any failure.
    """
    if isinstance(text, (bytes, bytearray)):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ProjectRecordError(f"Project record is not valid UTF-8: {exc}") from exc
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError) as exc:
        raise ProjectRecordError(f"Project record is not valid JSON: {exc}") from exc
    return validate_record(data)
