"""Minimal ``{{var}}`` / ``{{#list}}`` template engine.

Grammar::

    {{name}}            placeholder, resolved against the data context
    {{user.address}}    dotted path into nested mappings
    {{#items}}...{{/items}}
                        section, repeated once per element of ``items``
    {{.}}               the current element inside a section body

Rendering runs in two passes.  Sections are expanded first so that
placeholders inside a section body see the current element before anything
is resolved against the outer context.  Unresolved placeholders are left in
the output verbatim, and a section whose name does not resolve to a list
renders as nothing.  ``render`` never raises.

Sections are single-level: a section nested inside another section's body is
not expanded, and its markers pass through to the output as literal text.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping, Sequence
from typing import Any


# ---------------------------------------------------------------------------
# Grammar
# ---------------------------------------------------------------------------

_SEGMENT = r"[A-Za-z0-9_]+"

SECTION_PATTERN = re.compile(
    r"\{\{#(" + _SEGMENT + r")\}\}(.*?)\{\{/\1\}\}",
    re.DOTALL,
)
PLACEHOLDER_PATTERN = re.compile(
    r"\{\{(" + _SEGMENT + r"(?:\." + _SEGMENT + r")*)\}\}"
)
ITEM_PLACEHOLDER_PATTERN = re.compile(r"\{\{(" + _SEGMENT + r")\}\}")
SELF_REFERENCE = "{{.}}"


class _Missing:
    """Sentinel for a path that does not resolve."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


# ---------------------------------------------------------------------------
# Lookup and coercion
# ---------------------------------------------------------------------------


def resolve_path(data: Any, path: str) -> Any:
    """Walk *data* along a dot-separated *path*.

    Returns ``MISSING`` if any segment is absent or an intermediate value is
    not a mapping.  A key that is present with a ``None`` value resolves to
    ``None``.

    Examples::

        resolve_path({"a": {"b": 1}}, "a.b")  -> 1
        resolve_path({"a": 1}, "a.b")         -> MISSING
    """
    current = data
    for segment in path.split("."):
        if not isinstance(current, Mapping) or segment not in current:
            return MISSING
        current = current[segment]
    return current


def is_sequence(value: Any) -> bool:
    """Return ``True`` for lists/tuples, never for strings or bytes."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def stringify(value: Any) -> str:
    """Convert a resolved value to its text form.

    Scalars follow their JSON spelling for booleans and ``None``;
    mappings and sequences are rendered as compact JSON.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, Mapping) or is_sequence(value):
        try:
            return json.dumps(
                _plain(value),
                ensure_ascii=False,
                separators=(",", ":"),
                default=str,
            )
        except (TypeError, ValueError, RecursionError):
            # Unsupported key types or circular references.
            return str(value)
    return str(value)


def _plain(value: Any) -> Any:
    """Convert read-only mappings/sequences into dicts/lists for ``json``."""
    if isinstance(value, Mapping):
        return {key: _plain(item) for key, item in value.items()}
    if is_sequence(value):
        return [_plain(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _substitute(template: str, pattern: re.Pattern[str], scope: Any) -> str:
    def replace(match: re.Match[str]) -> str:
        value = resolve_path(scope, match.group(1))
        if value is MISSING:
            return match.group(0)
        return stringify(value)

    return pattern.sub(replace, template)


def _render_item(body: str, item: Any) -> str:
    result = body.replace(SELF_REFERENCE, stringify(item))
    if isinstance(item, Mapping):
        result = _substitute(result, ITEM_PLACEHOLDER_PATTERN, item)
    return result


def expand_sections(template: str, data: Any) -> str:
    """Expand every ``{{#name}}...{{/name}}`` section in *template*."""

    def replace(match: re.Match[str]) -> str:
        items = resolve_path(data, match.group(1))
        if not is_sequence(items):
            return ""
        body = match.group(2)
        return "".join(_render_item(body, item) for item in items)

    return SECTION_PATTERN.sub(replace, template)


def substitute_placeholders(template: str, data: Any) -> str:
    """Replace every ``{{path}}`` that resolves against *data*."""
    return _substitute(template, PLACEHOLDER_PATTERN, data)


def render(template: str, data: Mapping[str, Any]) -> str:
    """Render *template* against *data*.

    Args:
        template: Template text.
        data: The data context.  Values may be strings, numbers, booleans,
            nested mappings, or lists.

    Returns:
        The rendered text.
    """
    return substitute_placeholders(expand_sections(template, data), data)
