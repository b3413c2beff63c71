"""Tests for cycletime.utils.decorators."""

from __future__ import annotations

import pytest

from cycletime.utils.decorators import timed
from cycletime.utils.timing import Timer


class TestTimed:
    def test_sync_function(self, reporter, clock) -> None:
        timer = Timer("job", 0, reporter, clock=clock)

        @timed(timer)
        def job(x: int) -> int:
            clock.advance(0.5)
            return x * 2

        assert job(21) == 42
        assert job.__name__ == "job"
        assert reporter.calls == [("job", pytest.approx(0.5))]

    def test_cycle_ends_on_error(self, reporter, clock) -> None:
        timer = Timer("job", 0, reporter, clock=clock)

        @timed(timer)
        def job() -> None:
            clock.advance(0.1)
            raise ValueError("boom")

        with pytest.raises(ValueError):
            job()
        assert not timer.running
        assert reporter.calls == [("job", pytest.approx(0.1))]

    @pytest.mark.asyncio
    async def test_async_function(self, reporter, clock) -> None:
        timer = Timer("job", 1, reporter, clock=clock)

        @timed(timer)
        async def job() -> str:
            clock.advance(0.2)
            return "done"

        assert await job() == "done"
        assert await job() == "done"
        assert timer.count == 2
        assert timer.total == pytest.approx(0.4)
