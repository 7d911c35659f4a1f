"""Canonical string form of a single argument node."""
from __future__ import annotations

from tree_sitter import Node

from sweeptoc.config import SETTINGS
from sweeptoc.models import ConstantTable
from sweeptoc.syntax import node_text


def strip_station_prefix(text: str, prefix: str | None = None) -> str:
    prefix = SETTINGS.station_prefix if prefix is None else prefix
    if prefix and text.startswith(prefix):
        return text[len(prefix) :]
    return text


def resolve_value(node: Node, source_bytes: bytes, constants: ConstantTable) -> str:
    """
    Resolve a value node to a string, substituting constants.

    - identifiers are replaced by their constant's literal text when known,
      otherwise kept as a live reference (e.g. an instrument object)
    - attributes keep their dotted text, minus a leading ``station.``
    - literals keep their source spelling (``True``, ``None``, ``'a'``)
    - anything else (calls, arithmetic, comprehensions) is returned verbatim
    """
    text = node_text(source_bytes, node)

    if node.type == "identifier":
        return constants.get(text, text)

    if node.type == "attribute":
        return strip_station_prefix(text)

    return text
