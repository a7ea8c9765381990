"""Painless update scripts for array fields stored inside a document.

Field names are written into the script source, so they must be plain
identifiers and not Painless keywords.  Every value (selector, element
payload) is passed as a bound parameter.

Replace touches the first matching element only; remove drops every match.
Both set ``ctx.op = 'noop'`` when nothing matches, so the stored document
and its version stay as they were and the backend answers ``"noop"``.
"""

import re
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Mapping

from .errors import InvalidScriptError

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

# Reserved by Painless; these cannot follow a dot in field access.
_PAINLESS_KEYWORDS = frozenset(
    {
        "if", "else", "while", "do", "for", "in", "continue", "break", "return",
        "new", "try", "catch", "throw", "this", "instanceof", "def", "null",
        "true", "false", "boolean", "byte", "short", "char", "int", "long",
        "float", "double", "void",
    }
)

_APPEND = (
    "if (ctx._source.{array} == null) {{ ctx._source.{array} = [params.item]; }} "
    "else {{ ctx._source.{array}.add(params.item); }}"
)

_REPLACE = (
    "def items = ctx._source.{array}; boolean found = false; "
    "if (items != null) {{ for (int i = 0; i < items.size(); i++) {{ "
    "if (items[i].{selector} == params.value) {{ items[i] = params.item; found = true; break; }} "
    "}} }} "
    "if (!found) {{ ctx.op = 'noop'; }}"
)

_REMOVE = (
    "if (ctx._source.{array} == null || "
    "!ctx._source.{array}.removeIf(item -> item.{selector} == params.value)) "
    "{{ ctx.op = 'noop'; }}"
)


@dataclass(frozen=True)
class Script:
    source: str
    params: dict[str, Any] = field(default_factory=dict)

    def to_body(self) -> dict[str, Any]:
        """Return the update request body for this script."""
        return {"script": {"source": self.source, "params": deepcopy(self.params)}}


def append_item_script(array_field: str, item: Mapping[str, Any]) -> Script:
    """Append *item* to *array_field*, creating ``[item]`` if the field is missing."""
    array = _field_name("array_field", array_field)
    return Script(
        source=_APPEND.format(array=array),
        params={"item": _payload(item)},
    )


def replace_item_script(
    array_field: str,
    selector_field: str,
    selector_value: int,
    item: Mapping[str, Any],
) -> Script:
    """Replace the first element whose *selector_field* equals *selector_value*."""
    array = _field_name("array_field", array_field)
    selector = _field_name("selector_field", selector_field)
    return Script(
        source=_REPLACE.format(array=array, selector=selector),
        params={"value": _selector(selector_value), "item": _payload(item)},
    )


def remove_item_script(
    array_field: str,
    selector_field: str,
    selector_value: int,
) -> Script:
    """Remove every element whose *selector_field* equals *selector_value*."""
    array = _field_name("array_field", array_field)
    selector = _field_name("selector_field", selector_field)
    return Script(
        source=_REMOVE.format(array=array, selector=selector),
        params={"value": _selector(selector_value)},
    )


def _field_name(name: str, value: Any) -> str:
    if not isinstance(value, str) or not _IDENTIFIER.fullmatch(value):
        raise InvalidScriptError(f"{name} must be a plain identifier, got {value!r}")
    if value in _PAINLESS_KEYWORDS:
        raise InvalidScriptError(f"{name} cannot be the Painless keyword {value!r}")
    return value


def _selector(value: Any) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidScriptError(f"selector value must be an integer, got {value!r}")
    return value


def _payload(item: Any) -> dict[str, Any]:
    if not isinstance(item, Mapping):
        raise InvalidScriptError(f"array item must be a mapping, got {type(item).__name__}")
    return deepcopy(dict(item))
