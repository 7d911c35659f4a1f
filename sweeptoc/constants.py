"""
Constant collection.

Records ``NAME = <literal>`` assignments across the whole cell. Scopes are
not distinguished: a name assigned in two function bodies resolves to the
later assignment everywhere. This is a known limitation.
"""
from __future__ import annotations

from types import MappingProxyType

from tree_sitter import Node

from sweeptoc.models import ConstantTable
from sweeptoc.syntax import LITERAL_TYPES, NodeVisitor, node_text


def collect_constants(root: Node, source_bytes: bytes) -> ConstantTable:
    """Return an immutable ``name -> literal text`` table, last write wins."""
    table: dict[str, str] = {}

    def on_assignment(node: Node) -> None:
        left = node.child_by_field_name("left")
        right = node.child_by_field_name("right")
        if left is None or right is None or left.type != "identifier":
            return
        if right.type in LITERAL_TYPES:
            table[node_text(source_bytes, left)] = node_text(source_bytes, right)

    NodeVisitor({"assignment": on_assignment}).visit(root)
    return MappingProxyType(table)
