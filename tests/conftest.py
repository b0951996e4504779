"""Shared test fixtures for ci-group."""

import os
import subprocess
import sys
from pathlib import Path

import pytest

from ci_group.provider import DETECTION_ORDER

SRC = Path(__file__).resolve().parent.parent / "src"
PROVIDER_VARS = [var for var, _ in DETECTION_ORDER]


@pytest.fixture(autouse=True)
def no_ci_env(monkeypatch):
    """Start every test outside CI, even when the suite itself runs in CI."""
    for var in PROVIDER_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def run_python():
    """Run a Python snippet in a child interpreter and return the result."""

    def _run(code: str, env: dict[str, str] | None = None) -> subprocess.CompletedProcess:
        child_env = {k: v for k, v in os.environ.items() if k not in PROVIDER_VARS}
        child_env["PYTHONPATH"] = os.pathsep.join(
            p for p in (str(SRC), child_env.get("PYTHONPATH", "")) if p
        )
        child_env.update(env or {})
        return subprocess.run(
            [sys.executable, "-c", code],
            env=child_env,
            capture_output=True,
            text=True,
            timeout=60,
        )

    return _run
