"""
Tests for the driver schedule, the log-density report and manifest.yaml.
"""

import math

import numpy as np
import pytest

from gaussbinom import GaussianBinomial
from gaussbinom.io.checkpoint import frontier_path, list_checkpoints
from gaussbinom.io.manifest import DEFAULT_SCHEDULE, get_schedule, load_manifest
from gaussbinom.io.report import log_density, report_path, write_report
from gaussbinom.run import main, resume_point, run, validate_schedule


class TestReport:
    """Log-density report."""

    def test_log_density_small(self):
        """Logs of vector(2, 2)."""
        ln_x, density = log_density([1, 1, 2, 1, 1])
        np.testing.assert_allclose(ln_x, [0, 0, math.log(2), 0, 0])
        np.testing.assert_allclose(density, ln_x - math.log(6))

    def test_density_normalized(self):
        """Densities exponentiate to a distribution."""
        coef = [1, 3, 3, 1]
        _, density = log_density(coef)
        assert np.exp(density).sum() == pytest.approx(1.0)

    def test_huge_coefficients_stay_finite(self):
        """Coefficients beyond float range give finite logs."""
        coef = [10 ** 400, 3 * 10 ** 400, 10 ** 400]
        ln_x, density = log_density(coef)
        assert np.all(np.isfinite(ln_x))
        assert ln_x[0] == pytest.approx(400 * math.log(10))
        assert density[1] == pytest.approx(math.log(3 / 5))

    def test_write_report_lines(self, tmp_path):
        """One report line per coefficient."""
        path = write_report(tmp_path, 2, [1, 1, 2, 1, 1])
        assert path == report_path(tmp_path, 2)
        lines = path.read_text().splitlines()
        assert len(lines) == 5
        fields = lines[2].split()
        assert fields[:3] == ['2', '2', '2']
        assert float(fields[3]) == pytest.approx(math.log(2))
        assert float(fields[4]) == pytest.approx(math.log(2) - math.log(6))


class TestManifest:
    """manifest.yaml schedule."""

    def test_missing_manifest_uses_defaults(self, tmp_path):
        """No manifest means default schedule."""
        assert load_manifest(str(tmp_path)) == {}
        assert get_schedule({}) == DEFAULT_SCHEDULE

    def test_schedule_override(self, tmp_path):
        """Manifest keys override defaults."""
        (tmp_path / 'manifest.yaml').write_text("schedule:\n  end: 8\n  step: 2\n")
        schedule = get_schedule(load_manifest(str(tmp_path)))
        assert schedule['end'] == 8
        assert schedule['step'] == 2
        assert schedule['start'] == 0
        assert schedule['report_every'] == 32

    def test_yaml_file_path_is_not_a_manifest(self, tmp_path):
        """Only data_path/manifest.yaml is read."""
        path = tmp_path / 'manifest.yaml'
        path.write_text("schedule:\n  end: 8\n")
        assert load_manifest(str(path)) == {}

    def test_unknown_key(self):
        """Unknown schedule keys are a ValueError."""
        with pytest.raises(ValueError):
            get_schedule({'schedule': {'stride': 4}})


class TestSchedule:
    """Schedule validation."""

    def test_valid(self):
        """Default schedule is valid."""
        assert validate_schedule(0, 512, 16, 32) == []

    def test_errors(self):
        """Every schedule error is reported."""
        errors = validate_schedule(5, 2, 4, 0)
        assert len(errors) == 3

    def test_zero_step(self):
        """run() rejects a zero step."""
        with pytest.raises(ValueError):
            run('unused', step=0, verbose=False)


class TestRun:
    """Driver and CLI."""

    def test_blocks_and_reports(self, tmp_path):
        """Blocks, snapshots and reports follow the schedule."""
        summary = run(str(tmp_path), start=0, end=8, step=2, report_every=4, verbose=False)
        assert summary['diagonals'] == [2, 4, 6, 8]
        assert summary['final_diagonal'] == 8
        assert [p.split('/')[-1] for p in summary['reports']] == ['4.dat', '8.dat']
        assert list_checkpoints(tmp_path) == [2, 4, 6, 8]

        lines = report_path(tmp_path, 8).read_text().splitlines()
        assert len(lines) == 65

    def test_resume(self, tmp_path):
        """--resume continues after the last block."""
        run(str(tmp_path), end=6, step=3, verbose=False)
        summary = run(str(tmp_path), end=12, step=3, resume=True, verbose=False)
        assert summary['diagonals'] == [9, 12]

    def test_resume_point_skips_off_grid(self, tmp_path):
        """Resume point is on the step grid with a snapshot."""
        gb = GaussianBinomial(tmp_path)
        gb.compute(0, 4)
        gb.compute(4, 5)
        assert resume_point(gb, 4) == 4
        assert resume_point(gb, 5) == 5
        frontier_path(tmp_path, 4).unlink()
        assert resume_point(gb, 4) == 0

    def test_main(self, tmp_path, capsys):
        """CLI flags override the manifest."""
        (tmp_path / 'manifest.yaml').write_text("schedule:\n  end: 4\n  step: 2\n  report_every: 2\n")
        main([str(tmp_path), '--end', '6'])
        assert list_checkpoints(tmp_path) == [2, 4, 6]
        assert report_path(tmp_path, 6).exists()
        out = capsys.readouterr().out
        assert 'GAUSSIAN BINOMIAL TABLE' in out

    def test_main_quiet(self, tmp_path, capsys):
        """-q prints nothing."""
        main([str(tmp_path), '--end', '2', '--step', '1', '-q'])
        assert capsys.readouterr().out == ''
        assert not (tmp_path / '2.dat').exists()
