"""Three-pass template engine for channel message bodies.

Rendering is a fixed pipeline over *text*, not a parsed tree:

1. **Loops** — ``{{#each items}}...{{/each}}`` expands its body once per
   element of the top-level list ``items``.  Inside the body,
   ``{{this.<field>}}`` (mapping elements) or ``{{this}}`` (scalar elements)
   are substituted, together with the loop variables ``{{index}}``
   (1-based), ``{{index0}}``, ``{{count}}``, ``{{isFirst}}`` and
   ``{{isLast}}``.  Loops are single-level: markers nested inside a loop
   body are not evaluated by this pass.
2. **Conditionals** — ``{{#if a.b}}yes{{else}}no{{/if}}`` selects a branch
   by the truthiness of a dotted path resolved against the outer data.
3. **Placeholders** — every remaining ``{{a.b.0.c}}`` is replaced by its
   resolved, stringified value.  Resolution never raises: anything that
   cannot be resolved renders as an empty string.

Examples
--------
>>> render("{{#each items}}{{this.name}},{{/each}}", {"items": [{"name": "A"}, {"name": "B"}]})
'A,B,'
>>> render("{{#if flag}}Y{{else}}N{{/if}}", {"flag": "false"})
'N'
>>> render("{{a.b}}", {"a": {"b": "x"}})
'x'
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from typing import Any

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r"\{\{([^}]+)\}\}")
LOOP_PATTERN = re.compile(r"\{\{#each (\w+)\}\}(.+?)\{\{/each\}\}", re.DOTALL)
IF_PATTERN = re.compile(
    r"\{\{#if (\w+(?:\.\w+)*)\}\}(.+?)(?:\{\{else\}\}(.+?))?\{\{/if\}\}",
    re.DOTALL,
)

OBJECT_MARKER = "[object]"

_FALSY_STRINGS = {"", "0"}
_LIST_SIZE_KEYS = {"size", "count", "length"}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def render(template: str, data: Mapping[str, Any] | None) -> str:
    """Render *template* against *data* using the three-pass pipeline."""
    data = data or {}
    text = process_loops(template, data)
    text = process_conditionals(text, data)
    return process_placeholders(text, data)


def resolve_value(path: str, data: Mapping[str, Any]) -> str:
    """Resolve a dotted *path* in *data* and stringify the result.

    Mapping segments are looked up by key.  List segments accept a
    non-negative integer index, ``first``, ``last`` or
    ``size``/``count``/``length``.  Any other segment, a ``None``
    intermediate, a scalar intermediate or an out-of-range index yields
    an empty string.
    """
    current: Any = data
    for key in path.split("."):
        if current is None:
            return ""
        if isinstance(current, Mapping):
            current = current.get(key)
        elif _is_list(current):
            current = _resolve_list_segment(current, key)
        else:
            return ""
    return format_value(current)


def is_truthy(value: str | None) -> bool:
    """Template truthiness: false for ``None``, ``""``, ``"0"`` and ``"false"``."""
    if value is None or value in _FALSY_STRINGS:
        return False
    return value.lower() != "false"


def format_value(value: Any) -> str:
    """Stringify a resolved value for output."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if _is_list(value):
        return str(len(value))
    if isinstance(value, Mapping):
        return OBJECT_MARKER
    return str(value)


# ---------------------------------------------------------------------------
# Passes
# ---------------------------------------------------------------------------


def process_loops(template: str, data: Mapping[str, Any]) -> str:
    """Pass 1: expand ``{{#each key}}`` blocks."""

    def _expand(match: re.Match[str]) -> str:
        list_name, body = match.group(1), match.group(2)
        items = data.get(list_name)
        if not _is_list(items):
            logger.warning("Loop variable '%s' is not a list", list_name)
            return ""

        total = len(items)
        parts: list[str] = []
        for index, item in enumerate(items):
            content = body
            if isinstance(item, Mapping):
                for key, value in item.items():
                    content = content.replace(
                        "{{this." + str(key) + "}}", _item_field_text(value)
                    )
            else:
                content = content.replace("{{this}}", format_value(item))
            parts.append(_substitute_loop_variables(content, index, total))
        return "".join(parts)

    return LOOP_PATTERN.sub(_expand, template)


def process_conditionals(template: str, data: Mapping[str, Any]) -> str:
    """Pass 2: pick the branch of each ``{{#if path}}`` block."""

    def _choose(match: re.Match[str]) -> str:
        condition, if_branch, else_branch = match.group(1), match.group(2), match.group(3)
        if is_truthy(resolve_value(condition, data)):
            return if_branch
        return else_branch if else_branch is not None else ""

    return IF_PATTERN.sub(_choose, template)


def process_placeholders(template: str, data: Mapping[str, Any]) -> str:
    """Pass 3: resolve every remaining ``{{path}}`` marker."""
    return PLACEHOLDER_PATTERN.sub(
        lambda match: resolve_value(match.group(1).strip(), data), template
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _is_list(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _item_field_text(value: Any) -> str:
    # Loop item fields are stringified verbatim (containers included), null as empty.
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _substitute_loop_variables(content: str, index: int, total: int) -> str:
    replacements = {
        "{{index}}": str(index + 1),
        "{{index0}}": str(index),
        "{{count}}": str(total),
        "{{isFirst}}": "true" if index == 0 else "false",
        "{{isLast}}": "true" if index == total - 1 else "false",
    }
    for marker, value in replacements.items():
        content = content.replace(marker, value)
    return content


def _resolve_list_segment(items: Sequence[Any], key: str) -> Any:
    if key.isascii() and key.isdigit():
        position = int(key)
        return items[position] if position < len(items) else None

    key = key.lower()
    if key == "first":
        return items[0] if items else None
    if key == "last":
        return items[-1] if items else None
    if key in _LIST_SIZE_KEYS:
        return len(items)
    return None
