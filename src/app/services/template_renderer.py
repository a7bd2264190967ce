"""
Template Renderer

Renders {{variable}} placeholders into a proposal content snapshot.
"""

import re
from typing import Any, Dict, Iterable, List, Optional

from libs.result import Error, Result, Return

PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*([A-Za-z_][A-Za-z0-9_]*)\s*\}\}")


def render(text: str, values: Dict[str, Any]) -> str:
    """Replace known placeholders; unknown ones are left as written."""

    def substitute(match: re.Match) -> str:
        name = match.group(1)
        if name in values and values[name] is not None:
            return str(values[name])
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(substitute, text)


def resolve_variables(
    definitions: Iterable[dict], supplied: Optional[Dict[str, Any]] = None
) -> Result[Dict[str, Any]]:
    """
    Merge supplied values with template defaults.

    Returns:
        Result with the merged mapping, or VALIDATION_ERROR naming the
        required variables that have neither a value nor a default
    """
    definitions = list(definitions)
    values: Dict[str, Any] = {}
    missing: List[str] = []

    for definition in definitions:
        name = definition.get("name")
        if not name:
            continue
        default = definition.get("default_value")
        if default not in (None, ""):
            values[name] = default

    for name, value in (supplied or {}).items():
        if value is not None:
            values[name] = value

    for definition in definitions:
        name = definition.get("name")
        if name and definition.get("required") and values.get(name) in (None, ""):
            missing.append(name)

    if missing:
        return Return.err(
            Error(
                "VALIDATION_ERROR",
                f"Missing required template variables: {', '.join(missing)}",
            )
        )

    return Return.ok(values)
