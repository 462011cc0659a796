"""Input validation for the project-setup form and step ids."""

import re

from lovabolt.state import PROJECT_TYPES, STEPS

_NAME_RE = re.compile(r"^[a-zA-Z0-9\s\-_]+$")


def validate_project_info(info) -> dict:
    """Check project metadata against the project-setup form rules.

    Never raises. Returns ``{"success": True, "data": cleaned}`` or
    ``{"success": False, "errors": {field: [messages]}}``.
    """
    if not isinstance(info, dict):
        return {"success": False, "errors": {"_general": ["Project info must be an object."]}}

    errors: dict[str, list[str]] = {}

    def _fail(field: str, message: str) -> None:
        errors.setdefault(field, []).append(message)

    name = info.get("name")
    if not isinstance(name, str):
        _fail("name", "Project name is required")
    else:
        if len(name) < 3:
            _fail("name", "Project name must be at least 3 characters")
        if len(name) > 50:
            _fail("name", "Project name must be less than 50 characters")
        if name and not _NAME_RE.match(name):
            _fail(
                "name",
                "Project name can only contain letters, numbers, spaces, hyphens, and underscores",
            )

    description = info.get("description")
    if not isinstance(description, str):
        _fail("description", "Description is required")
    else:
        if len(description) < 10:
            _fail("description", "Description must be at least 10 characters")
        if len(description) > 500:
            _fail("description", "Description must be less than 500 characters")

    if info.get("type") not in PROJECT_TYPES:
        _fail("type", "Please select a valid project type")

    purpose = info.get("purpose")
    if not isinstance(purpose, str) or not purpose:
        _fail("purpose", "Purpose is required")

    for optional in ("target_audience", "goals"):
        if info.get(optional) is not None and not isinstance(info[optional], str):
            _fail(optional, f"{optional.replace('_', ' ').capitalize()} must be text")

    if errors:
        return {"success": False, "errors": errors}

    data = {key: info[key] for key in ("name", "description", "type", "purpose")}
    for optional in ("target_audience", "goals"):
        if info.get(optional) is not None:
            data[optional] = info[optional]
    return {"success": True, "data": data}


def validate_step(step: str) -> str:
    """Return ``step`` if it is a known wizard step.

    Raises ValueError otherwise.
    """
    if step not in STEPS:
        raise ValueError(f"Unknown step '{step}'. Must be one of: {STEPS}")
    return step
