"""Shared fixtures for sweeptoc tests."""

import pytest
from tree_sitter import Node, Parser

from sweeptoc.cache import ResultCache
from sweeptoc.grammar import ParserManager, load_python_parser
from sweeptoc.syntax import walk


@pytest.fixture(scope="session")
def python_parser() -> Parser:
    """A real tree-sitter parser bound to the Python grammar."""
    return load_python_parser()


@pytest.fixture
def manager(python_parser):
    """A manager whose loader hands out the session parser."""
    return ParserManager(loader=lambda: python_parser)


@pytest.fixture
def cache():
    return ResultCache()


@pytest.fixture(autouse=True)
def reset_parser_manager():
    ParserManager.reset_instance()
    yield
    ParserManager.reset_instance()


@pytest.fixture
def parse(python_parser):
    """Parse a snippet and return (root node, source bytes)."""

    def _parse(source: str):
        source_bytes = source.encode("utf-8")
        return python_parser.parse(source_bytes).root_node, source_bytes

    return _parse


@pytest.fixture
def find_node(parse):
    """Return the first node of the given type in a snippet, with the source bytes."""

    def _find(source: str, node_type: str) -> tuple[Node, bytes]:
        root, source_bytes = parse(source)
        for node in walk(root):
            if node.type == node_type:
                return node, source_bytes
        raise AssertionError(f"no {node_type} node in {source!r}")

    return _find
