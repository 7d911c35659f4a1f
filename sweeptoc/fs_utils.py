from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable


DEFAULT_EXCLUDE_DIR_NAMES = {
    ".git",
    ".hg",
    ".svn",
    ".idea",
    ".vscode",
    ".ipynb_checkpoints",
    ".venv",
    "venv",
    "build",
    "dist",
    "node_modules",
    "__pycache__",
}


NOTEBOOK_EXTS = {".ipynb"}

CELL_EXTS = NOTEBOOK_EXTS | {".py"}


@dataclass(frozen=True)
class FileRecord:
    path: Path
    relpath: str


def iter_files(
    root: Path,
    *,
    include_exts: set[str] | None = None,
    exclude_dir_names: set[str] | None = None,
    max_file_size_bytes: int = 20_000_000,
) -> Iterable[FileRecord]:
    root = root.resolve()
    include_exts = include_exts or set()
    exclude_dir_names = exclude_dir_names or set()
    merged_excludes = DEFAULT_EXCLUDE_DIR_NAMES | exclude_dir_names

    for p in sorted(root.rglob("*")):
        rel_parts = p.relative_to(root).parts
        # rglob can't prune, so skip anything below an excluded directory.
        if any(part in merged_excludes for part in rel_parts[:-1]):
            continue
        try:
            if not p.is_file():
                continue
        except OSError:
            continue

        if include_exts and p.suffix.lower() not in include_exts:
            continue

        try:
            if p.stat().st_size > max_file_size_bytes:
                continue
        except OSError:
            continue

        rel = "/".join(rel_parts)
        yield FileRecord(path=p, relpath=rel)


def safe_read_text(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8", errors="ignore")
    except OSError:
        return None
