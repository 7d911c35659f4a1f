"""Error kinds raised by sweeptoc."""
from __future__ import annotations


class SweepTocError(Exception):
    """Base class for sweeptoc errors."""


class ParserInitError(SweepTocError):
    """The tree-sitter runtime or the Python grammar could not be loaded.

    Initialization failure is permanent for the process lifetime.
    """


class NotebookFormatError(SweepTocError):
    """An input file is not a readable notebook."""
