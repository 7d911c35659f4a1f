"""
Sweep table-of-contents extraction for notebook cells.

Pipeline:
    source -> parser -> constant table -> call sites -> sweep descriptions -> cache
"""
from __future__ import annotations

import asyncio

from tree_sitter import Parser

from sweeptoc.cache import RESULT_CACHE, ResultCache
from sweeptoc.classifier import classify
from sweeptoc.config import SETTINGS
from sweeptoc.constants import collect_constants
from sweeptoc.errors import ParserInitError
from sweeptoc.extractor import extract_call_sites
from sweeptoc.grammar import ParserManager
from sweeptoc.logging_utils import get_logger
from sweeptoc.models import SweepDescription

logger = get_logger(__name__)


def extract_sweeps(parser: Parser, source: str) -> list[SweepDescription]:
    """Run the full analysis on one cell with an already loaded parser."""
    # Lone surrogates have no UTF-8 form; dropping them keeps argument positions intact.
    source_bytes = source.encode("utf-8", errors="ignore")
    tree = parser.parse(source_bytes)
    root = tree.root_node

    constants = collect_constants(root, source_bytes)
    sweeps = [classify(record) for record in extract_call_sites(root, source_bytes, constants)]

    for sweep in sweeps:
        logger.debug(f"Detected {sweep.kind.value} '{sweep.name}' complete={sweep.complete}")
    return sweeps


async def parse_sweeps(
    source: str,
    *,
    manager: ParserManager | None = None,
    cache: ResultCache | None = None,
) -> list[SweepDescription]:
    """
    Parse sweeps from a code cell source.

    Identical source text returns the cached list instance. If the grammar
    cannot be loaded the cell is reported as having no sweeps; any other
    failure propagates.
    """
    cache = RESULT_CACHE if cache is None else cache
    if SETTINGS.cache_enabled:
        cached = cache.get(source)
        if cached is not None:
            logger.debug("Cache hit")
            return cached

    manager = manager or ParserManager.get_instance()
    try:
        parser = await manager.acquire()
    except ParserInitError:
        return []

    sweeps = extract_sweeps(parser, source)
    if SETTINGS.cache_enabled:
        sweeps = cache.put(source, sweeps)
    return sweeps


def parse_sweeps_sync(source: str, **kwargs) -> list[SweepDescription]:
    """Blocking wrapper around :func:`parse_sweeps` for callers without an event loop."""
    return asyncio.run(parse_sweeps(source, **kwargs))
