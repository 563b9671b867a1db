"""Parsing of order submissions sent by the drag-and-drop editor.

Two wire formats are accepted in the ``order`` field:

* flat, comma separated ids in display order: ``"42,17,9"``
* the JSON hierarchy produced by nestedSortable's ``toHierarchy``::

    [{"id": "42", "children": [{"id": "17"}]}, {"id": "9"}]

Both are flattened into a list of :class:`OrderEntry` in display order
(depth-first, parents before their children).
"""

import json
from dataclasses import dataclass
from typing import Any

from reorder.services.errors import MalformedOrderError

MAX_POST_ID = 2**31 - 1


@dataclass(frozen=True)
class OrderEntry:
    """A single post in a submission."""

    post_id: int
    parent_id: int | None = None
    depth: int = 1


@dataclass(frozen=True)
class ParsedOrder:
    """Flattened submission. ``hierarchical`` is False for the flat format."""

    entries: list[OrderEntry]
    hierarchical: bool = False

    @property
    def post_ids(self) -> list[int]:
        return [entry.post_id for entry in self.entries]

    def __len__(self) -> int:
        return len(self.entries)


def _parse_id(value: Any) -> int:
    """Convert a raw id token to a positive integer."""
    if isinstance(value, bool):
        raise MalformedOrderError(f"Invalid post id: {value!r}")
    if isinstance(value, int):
        post_id = value
    elif isinstance(value, str) and value.strip().isascii() and value.strip().isdigit():
        digits = value.strip()
        if len(digits) > len(str(MAX_POST_ID)):
            raise MalformedOrderError(f"Invalid post id: {value[:20]!r}")
        post_id = int(digits)
    else:
        raise MalformedOrderError(f"Invalid post id: {value!r}")

    if post_id <= 0 or post_id > MAX_POST_ID:
        raise MalformedOrderError(f"Invalid post id: {value!r}")
    return post_id


def _parse_flat(raw: str) -> list[OrderEntry]:
    return [OrderEntry(post_id=_parse_id(token)) for token in raw.split(",")]


def _walk(
    nodes: Any,
    parent_id: int | None,
    depth: int,
    max_levels: int,
    out: list[OrderEntry],
) -> None:
    if not isinstance(nodes, list):
        raise MalformedOrderError("Expected a list of items")
    if depth > max_levels:
        raise MalformedOrderError(f"Nesting deeper than {max_levels} levels")

    for node in nodes:
        if isinstance(node, dict):
            if "id" not in node:
                raise MalformedOrderError("Item without an id")
            post_id = _parse_id(node["id"])
            children = node.get("children") or []
        else:
            post_id = _parse_id(node)
            children = []

        out.append(OrderEntry(post_id=post_id, parent_id=parent_id, depth=depth))
        if children:
            _walk(children, post_id, depth + 1, max_levels, out)


def parse_order(raw: str | None, max_levels: int = 6) -> ParsedOrder:
    """Parse a raw ``order`` value into a flattened submission.

    Raises:
        MalformedOrderError: empty or non-numeric ids, duplicates, invalid
            JSON, or nesting deeper than ``max_levels``.
    """
    text = (raw or "").strip()
    if not text:
        return ParsedOrder(entries=[])

    if text.startswith("["):
        try:
            tree = json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedOrderError(f"Invalid JSON order: {e.msg}") from e
        except (RecursionError, ValueError) as e:
            raise MalformedOrderError("Invalid JSON order: nested too deeply or numbers too large") from e
        entries: list[OrderEntry] = []
        _walk(tree, None, 1, max_levels, entries)
        parsed = ParsedOrder(entries=entries, hierarchical=True)
    else:
        parsed = ParsedOrder(entries=_parse_flat(text))

    seen: set[int] = set()
    duplicates = []
    for post_id in parsed.post_ids:
        if post_id in seen:
            duplicates.append(post_id)
        seen.add(post_id)
    if duplicates:
        raise MalformedOrderError(
            "Duplicate post ids: " + ", ".join(str(i) for i in duplicates)
        )

    return parsed
