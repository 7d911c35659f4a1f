"""Configuration settings for sweeptoc."""
from __future__ import annotations

import os
from dataclasses import dataclass


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() not in {"", "0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    """sweeptoc configuration settings."""

    # Importable module exposing language() for the Python grammar.
    grammar_module: str = os.getenv("SWEEPTOC_GRAMMAR_MODULE", "tree_sitter_python")

    # Attribute prefix stripped from resolved values (station.dmm.voltage -> dmm.voltage)
    station_prefix: str = os.getenv("SWEEPTOC_STATION_PREFIX", "station.")

    # Disabling the result cache is a debugging aid only.
    cache_enabled: bool = _flag("SWEEPTOC_CACHE_ENABLED", "1")

    verbose: bool = _flag("SWEEPTOC_VERBOSE", "0")


SETTINGS = Settings()
