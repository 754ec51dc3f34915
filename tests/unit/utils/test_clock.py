"""Tests for the clock implementations."""

import time

import pytest

from berlin_clock.codec import now
from berlin_clock.utils.clock import FakeClock, SystemClock

pytestmark = pytest.mark.unit


def test_fake_clock_stands_still_until_advanced() -> None:
    clock = FakeClock(100.0)
    assert clock.time() == clock.time() == 100.0
    clock.advance(2.5)
    assert clock.time() == 102.5


def test_advancing_one_second_flips_parity(fake_clock: FakeClock) -> None:
    before = now(fake_clock)
    fake_clock.advance(1)
    assert now(fake_clock).second % 2 != before.second % 2


def test_system_clock_reads_wall_time() -> None:
    before = time.time()
    reading = SystemClock().time()
    assert before <= reading <= time.time()
