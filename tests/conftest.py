import os
from collections.abc import Callable

import pytest

from kadom.kadom_cli import run_source
from kadom.kadom_environment import Environment

# Subprocess coverage for the CLI entrypoint tests
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()


@pytest.fixture  # type: ignore[misc]
def environment() -> Environment:
    return Environment()


@pytest.fixture  # type: ignore[misc]
def run_program(
    capsys: pytest.CaptureFixture[str], environment: Environment
) -> Callable[[str], str]:
    """Run source against the test's environment and return what it printed."""

    def _run(source: str) -> str:
        run_source(source, environment)
        return capsys.readouterr().out

    return _run
