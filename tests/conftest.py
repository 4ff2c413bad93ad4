"""Shared fixtures for the redaction layout tests."""

import pytest

from redacted_screensaver.models import WordBox


class SequenceRandomSource:
    """Replays scripted floats; falls back to `default` once exhausted."""

    def __init__(self, values, default=None):
        self.values = list(values)
        self.default = default
        self.calls = 0

    def next_float(self) -> float:
        self.calls += 1
        if self.values:
            return self.values.pop(0)
        if self.default is None:
            raise AssertionError("random source exhausted")
        return self.default


@pytest.fixture
def scripted():
    return SequenceRandomSource


def make_line(y, count, start_x=10, width=30, spacing=50, height=12):
    """Boxes evenly spaced along one text row."""
    return [
        WordBox(x=start_x + i * spacing, y=y, w=width, h=height, text=f"w{y}_{i}")
        for i in range(count)
    ]


@pytest.fixture
def line_factory():
    return make_line
