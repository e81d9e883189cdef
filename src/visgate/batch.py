"""Compare every reference PNG in a directory with its candidate."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from visgate.errors import VisgateError
from visgate.gate import Verdict, evaluate
from visgate.image_compare import DIFF_SUFFIX, ComparisonResult, compare_images

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchEntry:
    """Outcome for one reference image."""

    name: str
    verdict: Verdict
    result: ComparisonResult | None = None
    error: str = ""


def iter_references(ref_dir: Path) -> Iterator[Path]:
    """Yield reference PNGs in name order.

    ``<name>-diff.png`` is taken for a diff artifact and skipped only when
    ``<name>.png`` sits beside it.
    """
    for p in sorted(Path(ref_dir).glob("*.png")):
        if not p.is_file():
            continue
        if p.stem.endswith(DIFF_SUFFIX):
            source = p.with_name(p.stem[: -len(DIFF_SUFFIX)] + p.suffix)
            if source.is_file():
                log.debug("skipping diff artifact %s", p)
                continue
        yield p


def compare_directories(
    ref_dir: Path,
    cand_dir: Path,
    *,
    threshold: float,
    max_diff_ratio: float,
    include_aa: bool = True,
) -> list[BatchEntry]:
    """Pair ``ref_dir/<name>.png`` with ``cand_dir/<name>.png`` and compare each.

    Per-pair failures are recorded as ``Verdict.ERROR`` entries so the
    rest of the batch still runs.

    Raises:
        NotADirectoryError: If either directory does not exist.
    """
    for d in (ref_dir, cand_dir):
        if not Path(d).is_dir():
            raise NotADirectoryError(f"not a directory: {d}")

    entries: list[BatchEntry] = []
    for ref in iter_references(ref_dir):
        cand = Path(cand_dir) / ref.name
        if not cand.exists():
            log.warning("no candidate for %s", ref.name)
            entries.append(
                BatchEntry(name=ref.name, verdict=Verdict.MISSING, error=f"missing: {cand}")
            )
            continue
        try:
            result = compare_images(ref, cand, threshold, include_aa=include_aa)
        except (VisgateError, OSError) as exc:
            log.error("comparison failed for %s: %s", ref.name, exc)
            entries.append(BatchEntry(name=ref.name, verdict=Verdict.ERROR, error=str(exc)))
            continue
        entries.append(
            BatchEntry(name=ref.name, verdict=evaluate(result, max_diff_ratio), result=result)
        )
    return entries
