"""Shared fixtures for logalizer tests."""

import threading

import pytest

from logalizer.model import DataModel


class StubCommandRunner:
    """Deterministic CommandRunner that records every call."""

    def __init__(self, output: str = "", error: Exception | None = None):
        self.output = output
        self.error = error
        self.calls: list[tuple[str, str]] = []
        self._lock = threading.Lock()

    def run(self, command: str, line: str) -> str:
        with self._lock:
            self.calls.append((command, line))
        if self.error is not None:
            raise self.error
        return self.output


@pytest.fixture
def runner():
    """Runner that always answers "dummy"."""
    return StubCommandRunner(output="dummy")


@pytest.fixture
def model(runner):
    """Empty model using the stub runner."""
    return DataModel(runner=runner)


def collect_visible(model: DataModel) -> list[str]:
    """Run one render pass to exhaustion and return line texts."""
    model.prepare_lines()
    texts = []
    while (line := model.next_line()) is not None:
        texts.append(line.text)
    return texts


@pytest.fixture
def visible():
    """Helper running a full render pass over a model."""
    return collect_visible
