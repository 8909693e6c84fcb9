"""
Gaussbinom Sequencer
====================

Drives the engine over a fixed schedule of diagonal ranges.
Pure orchestration — no computation here.

    for k in start//step .. end//step - 1:
        compute(k*step, (k+1)*step)
        write {n}.dat when n = (k+1)*step is a multiple of report_every

Usage:
    python -m gaussbinom data
    python -m gaussbinom data --end 256 --step 8
    python -m gaussbinom data --resume
"""

import argparse
import time
from pathlib import Path
from typing import Any, Dict, Optional

from gaussbinom.core.engine import GaussianBinomial
from gaussbinom.io.manifest import load_manifest, get_schedule
from gaussbinom.io.report import write_report


def validate_schedule(start: int, end: int, step: int, report_every: int) -> list[str]:
    """Return list of schedule errors. Empty list = valid."""
    errors = []
    if step <= 0:
        errors.append(f"step must be positive, got {step}")
    if start < 0:
        errors.append(f"start must be non-negative, got {start}")
    if end < start:
        errors.append(f"end ({end}) must be >= start ({start})")
    if step > 0 and start % step != 0:
        errors.append(f"start ({start}) must be a multiple of step ({step})")
    if report_every <= 0:
        errors.append(f"report_every must be positive, got {report_every}")
    return errors


def resume_point(engine: GaussianBinomial, step: int) -> int:
    """Latest completed checkpoint on the step grid, 0 if none."""
    latest = engine.latest_complete_diagonal(step)
    return 0 if latest is None else latest


def run(
    data_path: str,
    start: int = 0,
    end: int = 512,
    step: int = 16,
    report_every: int = 32,
    resume: bool = False,
    verbose: bool = True,
) -> Dict[str, Any]:
    """
    Advance the table from diagonal `start` to `end` in blocks of `step`.

    Args:
        data_path: Data directory (created if absent)
        start: First diagonal, multiple of step
        end: Last diagonal block boundary
        step: Diagonals per compute call (one snapshot per call)
        report_every: Write {n}.dat when n is a multiple of this
        resume: Start from the latest completed checkpoint instead of `start`
        verbose: Print progress

    Returns:
        Summary dict with diagonals, reports, final diagonal, elapsed seconds
    """
    errors = validate_schedule(start, end, step, report_every)
    if errors:
        raise ValueError("SCHEDULE ERRORS:\n" + "\n".join(f"  - {e}" for e in errors))

    engine = GaussianBinomial(data_path)

    if resume:
        start = max(start, resume_point(engine, step))

    if verbose:
        print("=" * 70)
        print("GAUSSIAN BINOMIAL TABLE")
        print(f"Data:     {engine.data_path}")
        print(f"Schedule: {start} -> {end} step {step} (report every {report_every})")
        print("=" * 70)

    t0 = time.time()
    diagonals = []
    reports = []
    final = None

    for k in range(start // step, end // step):
        block_start = time.time()
        lo, hi = k * step, (k + 1) * step
        r = engine.compute(lo, hi)
        diagonals.append(hi)
        final = hi

        if verbose:
            print(f"  [{lo:>5} -> {hi:>5}] {len(r)} coefficients ({time.time() - block_start:.2f}s)")

        if hi % report_every == 0:
            reports.append(str(write_report(engine.data_path, hi, r, verbose=verbose)))

    elapsed = time.time() - t0

    if verbose:
        print(f"\nDone: {len(diagonals)} blocks, {len(reports)} reports ({elapsed:.1f}s)")

    return {
        'diagonals': diagonals,
        'reports': reports,
        'final_diagonal': final,
        'elapsed': elapsed,
    }


def main(argv: Optional[list] = None):
    """CLI entry point. Merges manifest.yaml schedule with flags and calls run()."""
    parser = argparse.ArgumentParser(
        description="Gaussian binomial coefficient table",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Schedule defaults come from data_path/manifest.yaml (section 'schedule'),
flags override them.

Usage:
  python -m gaussbinom data
  python -m gaussbinom data --end 256 --step 8
  python -m gaussbinom data --resume
"""
    )
    parser.add_argument('data_path', help='Data directory (checkpoints and reports)')
    parser.add_argument('--start', type=int, help='First diagonal (multiple of step)')
    parser.add_argument('--end', type=int, help='Last diagonal')
    parser.add_argument('--step', type=int, help='Diagonals per checkpoint')
    parser.add_argument('--report-every', type=int, help='Report interval in diagonals')
    parser.add_argument('--resume', action='store_true', help='Resume from latest checkpoint')
    parser.add_argument('-q', '--quiet', action='store_true', help='Suppress output')

    args = parser.parse_args(argv)

    data_path = Path(args.data_path)
    if data_path.exists() and not data_path.is_dir():
        raise FileNotFoundError(f"Not a directory: {data_path}")

    schedule = get_schedule(load_manifest(str(data_path)))
    for key in ('start', 'end', 'step', 'report_every'):
        value = getattr(args, key)
        if value is not None:
            schedule[key] = value

    run(
        str(data_path),
        resume=args.resume,
        verbose=not args.quiet,
        **schedule,
    )


if __name__ == '__main__':
    main()
