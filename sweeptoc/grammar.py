"""
Process-wide tree-sitter parser for Python source.

The parser is built once on first use and shared for the rest of the process.
Initialization is asynchronous: concurrent callers await the same in-flight
load, and a failed load is remembered so it is never attempted again.

States:
    Uninitialized -> Initializing -> Ready
    Uninitialized -> Initializing -> Failed
    Initializing -> Uninitialized   (only if the load task itself is cancelled)
"""
from __future__ import annotations

import asyncio
import importlib
from dataclasses import dataclass
from typing import Callable, Union

from tree_sitter import Language, Parser

from sweeptoc.config import SETTINGS
from sweeptoc.errors import ParserInitError
from sweeptoc.logging_utils import get_logger

logger = get_logger(__name__)

ParserLoader = Callable[[], Parser]


@dataclass(frozen=True)
class Uninitialized:
    pass


@dataclass(frozen=True)
class Initializing:
    task: asyncio.Future


@dataclass(frozen=True)
class Ready:
    parser: Parser


@dataclass(frozen=True)
class Failed:
    error: ParserInitError


ParserState = Union[Uninitialized, Initializing, Ready, Failed]


def _set_parser_language(parser: Parser, raw: object) -> None:
    # Grammar packages return a PyCapsule; tree_sitter.Parser expects tree_sitter.Language.
    lang: Language
    if isinstance(raw, Language):
        lang = raw
    else:
        lang = Language(raw)  # type: ignore[arg-type]

    # tree-sitter API differs by version; support both.
    if hasattr(parser, "set_language"):
        parser.set_language(lang)  # type: ignore[attr-defined]
    else:
        parser.language = lang  # type: ignore[assignment]


def load_python_parser(grammar_module: str | None = None) -> Parser:
    """Import the grammar package and bind it to a fresh parser."""
    module = importlib.import_module(grammar_module or SETTINGS.grammar_module)
    parser = Parser()
    _set_parser_language(parser, module.language())
    return parser


class ParserManager:
    """Owns the shared parser and its lifecycle."""

    _instance: ParserManager | None = None

    def __init__(self, loader: ParserLoader | None = None):
        self._loader = loader or load_python_parser
        self._state: ParserState = Uninitialized()

    @classmethod
    def get_instance(cls) -> ParserManager:
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the process-wide manager. Intended for tests."""
        cls._instance = None

    @property
    def state(self) -> ParserState:
        return self._state

    async def acquire(self) -> Parser:
        """
        Return the shared parser, loading it on first use.

        Raises:
            ParserInitError: the grammar failed to load, now or earlier.
        """
        state = self._state
        if isinstance(state, Ready):
            return state.parser
        if isinstance(state, Failed):
            raise ParserInitError("Parser initialization previously failed") from state.error
        if isinstance(state, Initializing):
            return await asyncio.shield(state.task)

        task = asyncio.ensure_future(self._initialize())
        self._state = Initializing(task)
        # A cancelled caller must not cancel the load other callers share.
        return await asyncio.shield(task)

    async def _initialize(self) -> Parser:
        try:
            parser = await asyncio.to_thread(self._loader)
        except asyncio.CancelledError:
            # The load itself was cancelled (e.g. its event loop shut down); nothing
            # failed, so the next acquire() starts over.
            self._state = Uninitialized()
            raise
        except Exception as exc:
            logger.warning(f"Failed to initialize tree-sitter parser: {exc}")
            error = ParserInitError(f"Failed to load Python grammar: {exc}")
            self._state = Failed(error)
            raise error from exc
        self._state = Ready(parser)
        return parser
