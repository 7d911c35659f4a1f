"""Tests for reading code cells."""

import json

import pytest

from sweeptoc.errors import NotebookFormatError
from sweeptoc.fs_utils import CELL_EXTS, iter_files
from sweeptoc.notebook import CodeCell, cells_from_notebook, read_code_cells


def _notebook(*cells):
    return {"nbformat": 4, "nbformat_minor": 5, "metadata": {}, "cells": list(cells)}


class TestCellsFromNotebook:
    def test_code_cells_only(self):
        nb = _notebook(
            {"cell_type": "markdown", "source": ["# Title"]},
            {"cell_type": "code", "source": ["a = 1\n", "b = 2\n"]},
            {"cell_type": "code", "source": "c = 3"},
        )
        assert cells_from_notebook(json.dumps(nb)) == [
            CodeCell(index=0, source="a = 1\nb = 2\n"),
            CodeCell(index=1, source="c = 3"),
        ]

    def test_invalid_json(self):
        with pytest.raises(NotebookFormatError, match="invalid notebook JSON"):
            cells_from_notebook("{not json")

    def test_missing_cells(self):
        with pytest.raises(NotebookFormatError, match="no 'cells'"):
            cells_from_notebook(json.dumps({"nbformat": 4}))


class TestReadCodeCells:
    def test_python_file_is_one_cell(self, tmp_path):
        path = tmp_path / "measure.py"
        path.write_text("s = Sweep0D()\n", encoding="utf-8")
        assert read_code_cells(path) == [CodeCell(index=0, source="s = Sweep0D()\n")]

    def test_notebook_file(self, tmp_path):
        path = tmp_path / "run.ipynb"
        path.write_text(json.dumps(_notebook({"cell_type": "code", "source": "x = 1"})), encoding="utf-8")
        assert read_code_cells(path)[0].source == "x = 1"

    def test_unreadable(self, tmp_path):
        with pytest.raises(NotebookFormatError, match="unreadable"):
            read_code_cells(tmp_path / "missing.py")


class TestIterFiles:
    def test_excluded_directories_pruned(self, tmp_path):
        (tmp_path / "nb").mkdir()
        (tmp_path / "nb" / "a.ipynb").write_text("{}", encoding="utf-8")
        (tmp_path / "nb" / ".ipynb_checkpoints").mkdir()
        (tmp_path / "nb" / ".ipynb_checkpoints" / "a-checkpoint.ipynb").write_text("{}", encoding="utf-8")
        (tmp_path / "notes.txt").write_text("", encoding="utf-8")
        (tmp_path / "run.py").write_text("", encoding="utf-8")

        rels = [rec.relpath for rec in iter_files(tmp_path, include_exts=CELL_EXTS)]
        assert rels == ["nb/a.ipynb", "run.py"]
