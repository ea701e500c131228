import os
import subprocess
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]


def _run(*args: str) -> str:
    env = dict(os.environ, COLUMNS="120")
    completed = subprocess.run(
        [sys.executable, "-m", "fctcast.cli", *args],
        cwd=REPO_ROOT,
        env=env,
        capture_output=True,
        text=True,
        check=True,
    )
    return completed.stdout


def test_cli_period() -> None:
    output = _run("period", "2630000")
    assert "200,000" in output
    assert "264" in output
    assert "2,639,999" in output


def test_cli_project() -> None:
    output = _run("project", "--elapsed", "10000", "--target", "400000", "--minted", "800000", "--rate", "1000000")
    assert "Forecasted new mint rate: 500,000 (gwei) (-50.0%)" in output


def test_cli_project_rejects_zero_elapsed() -> None:
    completed = subprocess.run(
        [sys.executable, "-m", "fctcast.cli", "project", "--elapsed", "0", "--target", "1", "--minted", "1", "--rate", "1"],
        cwd=REPO_ROOT,
        capture_output=True,
        text=True,
    )
    assert completed.returncode == 1


def test_cli_validate() -> None:
    output = _run("validate", str(REPO_ROOT / "configs" / "facet.yaml"))
    assert "validated successfully" in output
