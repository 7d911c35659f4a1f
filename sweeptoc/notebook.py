"""Code cells from Jupyter notebooks and plain Python files."""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from sweeptoc.errors import NotebookFormatError
from sweeptoc.fs_utils import NOTEBOOK_EXTS, safe_read_text


@dataclass(frozen=True)
class CodeCell:
    index: int  # Position among the file's code cells
    source: str


def _cell_source(raw: object) -> str:
    # nbformat stores source either as one string or as a list of lines.
    if isinstance(raw, list):
        return "".join(str(line) for line in raw)
    if isinstance(raw, str):
        return raw
    return ""


def cells_from_notebook(text: str, *, origin: str = "<notebook>") -> list[CodeCell]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise NotebookFormatError(f"{origin}: invalid notebook JSON ({e})") from e

    cells = data.get("cells") if isinstance(data, dict) else None
    if not isinstance(cells, list):
        raise NotebookFormatError(f"{origin}: no 'cells' list (nbformat 4 expected)")

    out: list[CodeCell] = []
    for cell in cells:
        if not isinstance(cell, dict) or cell.get("cell_type") != "code":
            continue
        out.append(CodeCell(index=len(out), source=_cell_source(cell.get("source"))))
    return out


def read_code_cells(path: Path) -> list[CodeCell]:
    """
    Read the code cells of ``path``.

    A ``.py`` file is a single cell. Raises NotebookFormatError when the
    file can't be read or is not a notebook.
    """
    text = safe_read_text(path)
    if text is None:
        raise NotebookFormatError(f"{path}: unreadable")
    if path.suffix.lower() in NOTEBOOK_EXTS:
        return cells_from_notebook(text, origin=str(path))
    return [CodeCell(index=0, source=text)]
