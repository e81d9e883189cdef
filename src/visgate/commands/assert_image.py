"""visgate assert-image command -- compare one reference/candidate pair."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from visgate.commands._helpers import (
    EXIT_ERROR,
    EXIT_FAIL,
    EXIT_PASS,
    gate_options,
    resolve_gate,
    result_dict,
    summary_line,
)
from visgate.errors import VisgateError
from visgate.gate import Verdict, evaluate, is_failure
from visgate.image_compare import compare_images


@click.command("assert-image")
@click.argument("reference", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("candidate", type=click.Path(dir_okay=False, path_type=Path))
@gate_options
@click.option(
    "--diff-output",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the diff PNG here instead of next to CANDIDATE.",
)
def assert_image_cmd(
    reference: Path,
    candidate: Path,
    threshold: float | None,
    max_diff_ratio: float | None,
    exclude_aa: bool,
    allow_size_mismatch: bool,
    use_json: bool,
    diff_output: Path | None,
) -> None:
    """Compare CANDIDATE against REFERENCE.

    Exit 0 if the images match within the gate, exit 1 on a visual
    regression or size mismatch, exit 2 on error (missing file,
    invalid image, unwritable diff).
    """
    threshold, max_diff_ratio = resolve_gate(threshold, max_diff_ratio)
    try:
        result = compare_images(
            reference,
            candidate,
            threshold,
            include_aa=not exclude_aa,
            diff_output=diff_output,
        )
    except (VisgateError, OSError) as exc:
        click.echo(f"error: {exc}", err=True)
        sys.exit(EXIT_ERROR)

    verdict = evaluate(result, max_diff_ratio)
    failed = is_failure(verdict, strict_size=not allow_size_mismatch)

    if use_json:
        payload = result_dict(result)
        payload["verdict"] = verdict.value
        payload["max_diff_ratio"] = max_diff_ratio
        click.echo(json.dumps(payload))
    elif verdict is Verdict.PASS:
        click.echo("match")
    else:
        click.echo(summary_line(result))

    sys.exit(EXIT_FAIL if failed else EXIT_PASS)
