"""
Small helpers over tree-sitter syntax trees.

Offsets reported by tree-sitter are byte offsets, so every slice is taken from
the UTF-8 encoded source rather than the ``str`` the caller handed in.
"""
from __future__ import annotations

from typing import Callable, Iterable, Mapping

from tree_sitter import Node

# Literal node types of the tree-sitter-python grammar.
LITERAL_TYPES = frozenset({"integer", "float", "string", "true", "false", "none"})

NodeHandler = Callable[[Node], None]


def node_text(source_bytes: bytes, node: Node) -> str:
    """Extract text from a tree-sitter node."""
    return source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="ignore")


def walk(node: Node) -> Iterable[Node]:
    """Pre-order traversal in document order."""
    stack = [node]
    while stack:
        n = stack.pop()
        yield n
        for c in reversed(n.children):
            stack.append(c)


def value_children(node: Node) -> list[Node]:
    """Named children of a container node, without comments."""
    return [c for c in node.named_children if c.type != "comment"]


class NodeVisitor:
    """
    Single full-tree pass dispatching on node type.

    Handlers are looked up in a table keyed by ``Node.type``; node types
    without a handler are walked through silently.
    """

    def __init__(self, handlers: Mapping[str, NodeHandler]):
        self._handlers = dict(handlers)

    def visit(self, root: Node) -> None:
        for n in walk(root):
            handler = self._handlers.get(n.type)
            if handler is not None:
                handler(n)
