from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from rich.table import Table
from tqdm import tqdm

from sweeptoc.config import SETTINGS
from sweeptoc.errors import SweepTocError
from sweeptoc.fs_utils import CELL_EXTS, FileRecord, iter_files
from sweeptoc.grammar import ParserManager
from sweeptoc.logging_utils import console, err_console, setup_logging
from sweeptoc.models import (
    SimulSweepMetrics,
    Sweep0DMetrics,
    Sweep1DMetrics,
    Sweep2DMetrics,
    SweepDescription,
)
from sweeptoc.notebook import read_code_cells
from sweeptoc.toc import parse_sweeps


def _path(p: str) -> Path:
    return Path(p).expanduser()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="sweeptoc", description="Sweep table of contents for notebooks and Python files"
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    p_scan = sub.add_parser("scan", help="List the sweeps defined in notebooks / .py files")
    p_scan.add_argument(
        "paths",
        nargs="+",
        type=_path,
        help="Notebook (.ipynb), Python file, or directory to search for both",
    )
    p_scan.add_argument("--json", action="store_true", help="Emit one JSON object per sweep")
    p_scan.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        default=SETTINGS.verbose,
        help="Enable debug logging (default: env SWEEPTOC_VERBOSE)",
    )
    return p


def _collect_files(paths: list[Path]) -> list[FileRecord]:
    files: list[FileRecord] = []
    for path in paths:
        if path.is_dir():
            for rec in iter_files(path, include_exts=CELL_EXTS):
                files.append(FileRecord(path=rec.path, relpath=str(path / rec.relpath)))
        else:
            files.append(FileRecord(path=path, relpath=str(path)))
    return files


def summarize(sweep: SweepDescription) -> str:
    m = sweep.metrics
    if isinstance(m, Sweep1DMetrics):
        return f"{m.set_param or '?'} {m.start or '?'}→{m.stop or '?'} @{m.step or '?'}"
    if isinstance(m, Sweep2DMetrics):
        return f"inner: {m.inner_sweep or '?'} | outer: {m.outer_sweep or '?'}"
    if isinstance(m, SimulSweepMetrics):
        return m.param_summary or ""
    if isinstance(m, Sweep0DMetrics):
        return f"max_time={m.max_time}" if m.max_time else ""
    return ""


def _flag_labels(sweep: SweepDescription) -> str:
    f = sweep.flags
    labels = [
        ("bidirectional", f.bidirectional),
        ("continual", f.continual),
        ("plot", f.plot_data),
        ("save", f.save_data),
    ]
    return ", ".join(name for name, on in labels if on)


def _render_table(rows: list[tuple[str, int, SweepDescription]]) -> Table:
    table = Table(title="Sweeps")
    table.add_column("File", style="cyan")
    table.add_column("Cell", justify="right")
    table.add_column("Type")
    table.add_column("Name", style="bold")
    table.add_column("Summary")
    table.add_column("Flags")
    table.add_column("Complete")
    for relpath, cell_index, sweep in rows:
        table.add_row(
            relpath,
            str(cell_index),
            sweep.kind.value,
            sweep.name,
            summarize(sweep),
            _flag_labels(sweep),
            "[green]yes[/green]" if sweep.complete else "[yellow]no[/yellow]",
        )
    return table


async def _scan(paths: list[Path], *, as_json: bool) -> int:
    files = _collect_files(paths)
    manager = ParserManager.get_instance()
    rows: list[tuple[str, int, SweepDescription]] = []
    failed = False

    show_progress = len(files) > 1 and not as_json
    for rec in tqdm(files, desc="Scanning", unit="file", disable=not show_progress):
        try:
            cells = read_code_cells(rec.path)
        except SweepTocError as e:
            err_console.print(f"[bold red]Error:[/bold red] {e}")
            failed = True
            continue
        for cell in cells:
            for sweep in await parse_sweeps(cell.source, manager=manager):
                rows.append((rec.relpath, cell.index, sweep))

    if as_json:
        for relpath, cell_index, sweep in rows:
            payload = {"file": relpath, "cell": cell_index, **sweep.to_dict()}
            sys.stdout.write(json.dumps(payload, ensure_ascii=False) + "\n")
    elif rows:
        console.print(_render_table(rows))
    else:
        console.print("[yellow]No sweeps found[/yellow]")

    return 1 if failed else 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose)

    if args.cmd == "scan":
        return asyncio.run(_scan(args.paths, as_json=args.json))

    parser.error("Unknown command")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
