"""Shared fixtures: fake clock, recording reporter, fake aioboto3 session."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple
from unittest.mock import AsyncMock

import pytest

from cycletime.config import Settings


class FakeClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, start_ms: float = 1000.0) -> None:
        self.now = start_ms

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds * 1000.0


class RecordingReporter:
    def __init__(self) -> None:
        self.calls: List[Tuple[str, float]] = []

    def report(self, metric: str, value: float) -> None:
        self.calls.append((metric, value))


class _ClientContext:
    def __init__(self, client: Any) -> None:
        self._client = client

    async def __aenter__(self) -> Any:
        return self._client

    async def __aexit__(self, exc_type, exc, tb) -> bool:  # noqa: ANN001
        return False


class FakeSession:
    """Stands in for aioboto3.Session; records client kwargs."""

    def __init__(self, side_effect: Optional[BaseException] = None) -> None:
        self.cloudwatch = AsyncMock()
        self.cloudwatch.put_metric_data = AsyncMock(side_effect=side_effect)
        self.client_calls: List[Tuple[str, Dict[str, Any]]] = []

    def client(self, service: str, **kwargs: Any) -> _ClientContext:
        self.client_calls.append((service, kwargs))
        return _ClientContext(self.cloudwatch)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def cfg() -> Settings:
    return Settings(
        AWS_REGION="eu-central-1",
        AWS_ACCESS_KEY_ID="AKID",
        AWS_SECRET_ACCESS_KEY="SECRET",
        AWS_ENDPOINT_URL=None,
        CYCLETIME_NAMESPACE="namespace",
    )
