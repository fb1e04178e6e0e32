"""
Placeholder interpolation for template content.

Strings may carry ``{{dotted.path}}`` tokens that are resolved against the
caller's data context. Tokens whose path cannot be resolved are left exactly
as written so a second pass produces the same output.
"""

from __future__ import annotations

import re
from typing import Any, Mapping

PLACEHOLDER_RE = re.compile(r"\{\{([^}]+)\}\}")

_MISSING = object()


def get_nested_value(data: Any, path: str, default: Any = None) -> Any:
    """
    Walk ``data`` along a dot-separated ``path``.

    Mapping keys are looked up by name; list/tuple segments must be integer
    indexes. Returns ``default`` when any segment is missing; a value that
    is present but None is returned as None.
    """
    current = data
    for key in path.split("."):
        if isinstance(current, Mapping):
            if key not in current:
                return default
            current = current[key]
        elif isinstance(current, (list, tuple)):
            try:
                current = current[int(key)]
            except (ValueError, IndexError):
                return default
        else:
            return default
    return current


def format_value(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def interpolate_text(text: Any, data: Mapping[str, Any] | None) -> Any:
    """
    Replace every ``{{path}}`` in ``text`` with the value found in ``data``.

    Non-string input is returned unchanged.
    """
    if not isinstance(text, str):
        return text

    def _replace(match: re.Match) -> str:
        value = get_nested_value(data or {}, match.group(1).strip(), _MISSING)
        if value is _MISSING:
            return match.group(0)
        return format_value(value)

    return PLACEHOLDER_RE.sub(_replace, text)


def interpolate_data(node: Any, data: Mapping[str, Any] | None) -> Any:
    """
    Recursively interpolate strings inside lists and mappings.

    Shape is preserved (same list lengths, same keys); only string leaves are
    transformed. The input structure is never modified.
    """
    if isinstance(node, str):
        return interpolate_text(node, data)
    if isinstance(node, list):
        return [interpolate_data(item, data) for item in node]
    if isinstance(node, tuple):
        return tuple(interpolate_data(item, data) for item in node)
    if isinstance(node, Mapping):
        return {key: interpolate_data(value, data) for key, value in node.items()}
    return node


__all__ = ["get_nested_value", "interpolate_text", "interpolate_data", "PLACEHOLDER_RE"]
