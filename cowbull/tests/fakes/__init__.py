"""Fake/mock implementations of core ports for testing.

These in-memory implementations allow core game logic to be tested
without external dependencies:

- FakeClock: Settable, optionally self-advancing clock
- FixedTargetProvider: Hands out one fixed target number
- FakeGameRecordSink: In-memory record store with failure injection
"""

from .clock import FakeClock
from .provider import FixedTargetProvider
from .sink import FakeGameRecordSink

__all__ = [
    "FakeClock",
    "FakeGameRecordSink",
    "FixedTargetProvider",
]
