"""visgate compare-dir command -- gate a directory of screenshots."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import click

from visgate.batch import BatchEntry, compare_directories
from visgate.commands._helpers import (
    EXIT_ERROR,
    EXIT_FAIL,
    EXIT_PASS,
    gate_options,
    resolve_gate,
    result_dict,
    summary_line,
)
from visgate.gate import Verdict, is_failure


def _entry_dict(entry: BatchEntry) -> dict[str, Any]:
    data: dict[str, Any] = {"name": entry.name, "verdict": entry.verdict.value}
    if entry.result is not None:
        data.update(result_dict(entry.result))
    if entry.error:
        data["error"] = entry.error
    return data


def _entry_line(entry: BatchEntry) -> str:
    if entry.result is None:
        return f"{entry.name}\t{entry.verdict.value}\t{entry.error}"
    return f"{entry.name}\t{entry.verdict.value}\t{summary_line(entry.result)}"


@click.command("compare-dir")
@click.argument(
    "reference_dir", type=click.Path(exists=True, file_okay=False, path_type=Path)
)
@click.argument(
    "candidate_dir", type=click.Path(exists=True, file_okay=False, path_type=Path)
)
@gate_options
def compare_dir_cmd(
    reference_dir: Path,
    candidate_dir: Path,
    threshold: float | None,
    max_diff_ratio: float | None,
    exclude_aa: bool,
    allow_size_mismatch: bool,
    use_json: bool,
) -> None:
    """Compare each PNG in REFERENCE_DIR with the same name in CANDIDATE_DIR.

    Exit 0 if every pair passes, exit 1 on any regression, size
    mismatch or missing candidate, exit 2 if any pair errored.
    """
    threshold, max_diff_ratio = resolve_gate(threshold, max_diff_ratio)
    entries = compare_directories(
        reference_dir,
        candidate_dir,
        threshold=threshold,
        max_diff_ratio=max_diff_ratio,
        include_aa=not exclude_aa,
    )

    if use_json:
        click.echo(
            json.dumps(
                {
                    "threshold": threshold,
                    "max_diff_ratio": max_diff_ratio,
                    "entries": [_entry_dict(e) for e in entries],
                }
            )
        )
    else:
        for entry in entries:
            click.echo(_entry_line(entry))
        if not entries:
            click.echo("no reference images found", err=True)

    if any(e.verdict is Verdict.ERROR for e in entries):
        sys.exit(EXIT_ERROR)
    strict = not allow_size_mismatch
    failed = any(is_failure(e.verdict, strict_size=strict) for e in entries)
    sys.exit(EXIT_FAIL if failed else EXIT_PASS)
