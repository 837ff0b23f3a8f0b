"""Smoke tests for all example scripts.

These tests verify that examples run without errors.
They don't verify correctness of results, just that the code executes.
"""

import subprocess
import sys
from pathlib import Path

EXAMPLES_DIR = Path(__file__).parent.parent / "skyrun" / "examples"


def run_example(example_name: str, timeout: int = 120) -> subprocess.CompletedProcess:
    """Run an example script and return the result."""
    script_path = EXAMPLES_DIR / f"{example_name}.py"

    result = subprocess.run(
        [sys.executable, str(script_path)],
        capture_output=True,
        text=True,
        timeout=timeout,
        cwd=Path(__file__).parent.parent,  # Run from project root
    )

    return result


class TestExamplesSmoke:
    """Smoke tests that verify examples run without crashing."""

    def test_basic_flight_runs(self) -> None:
        """Test that basic_flight.py runs without errors."""
        result = run_example("basic_flight")
        assert result.returncode == 0, f"basic_flight failed:\n{result.stderr}"

    def test_training_flight_runs(self) -> None:
        """Test that training_flight.py runs without errors."""
        result = run_example("training_flight")
        assert result.returncode == 0, f"training_flight failed:\n{result.stderr}"

    def test_canyon_run_runs(self) -> None:
        """Test that canyon_run.py runs without errors."""
        result = run_example("canyon_run")
        assert result.returncode == 0, f"canyon_run failed:\n{result.stderr}"


class TestExamplesOutput:
    """Tests that verify examples produce expected output."""

    def test_basic_flight_stays_finite(self) -> None:
        """Test that basic_flight reports a finite final state."""
        result = run_example("basic_flight")
        assert "State finite:       True" in result.stdout

    def test_training_flight_reports_results(self) -> None:
        """Test that training_flight prints mission results."""
        result = run_example("training_flight")
        assert "TRAINING FLIGHT" in result.stdout
        assert "Checkpoints:" in result.stdout
        assert "Score:" in result.stdout

    def test_canyon_run_saves_telemetry(self) -> None:
        """Test that canyon_run mentions the saved CSV."""
        result = run_example("canyon_run")
        assert "telemetry.csv" in result.stdout
        assert "Recorded" in result.stdout
