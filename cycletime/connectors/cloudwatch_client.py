"""
CloudWatch connector for cycletime.

Responsibilities:
- Upload a single named measurement (seconds) via PutMetricData
- Fire-and-forget: never blocks or raises into the caller
- Log failed uploads with CT-CW-0001, no retry
"""

from __future__ import annotations

import asyncio
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import wait as wait_futures
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Set

import aioboto3
from aiobotocore.config import AioConfig

from cycletime.config import Settings
from cycletime.logging.logger import bind_context, get_logger

# one attempt per upload; botocore would otherwise retry throttling/5xx
NO_RETRY_CONFIG = AioConfig(retries={"max_attempts": 1, "mode": "standard"})


class CloudWatchReporter:
    """
    Async CloudWatch metrics reporter.

    Each instance owns its own Settings, so several reporters with
    different credentials/namespaces can live in one process.
    """

    def __init__(
        self,
        cfg: Optional[Settings] = None,
        session: Optional[Any] = None,
        max_workers: int = 2,
    ) -> None:
        """
        Initialize the reporter.

        Parameters
        ----------
        cfg : Settings
            Region, credentials and namespace. Defaults are read from ENV.
        session : aioboto3.Session, optional
            Session used to open CloudWatch clients. Built from cfg if omitted.
        max_workers : int
            Upload threads used when report() is called without a running
            event loop.
        """
        self._cfg = cfg or Settings()
        self._session = session or aioboto3.Session()
        self._max_workers = max_workers
        self._executor: Optional[ThreadPoolExecutor] = None
        self._pending: Set[asyncio.Task] = set()
        self._pending_futures: Set[Future] = set()
        self._futures_lock = threading.Lock()
        self._logger = get_logger("cycletime.cloudwatch", self._cfg)

    @property
    def namespace(self) -> str:
        return self._cfg.full_namespace

    @property
    def settings(self) -> Settings:
        return self._cfg

    def build_params(self, metric: str, value: float) -> Dict[str, Any]:
        return {
            "MetricData": [
                {
                    "MetricName": metric,
                    "Timestamp": datetime.now(timezone.utc),
                    "Unit": "Seconds",
                    "Value": float(value),
                },
            ],
            "Namespace": self.namespace,
        }

    async def put_metric(self, metric: str, value: float) -> bool:
        """
        Upload one measurement and wait for the result.

        Returns
        -------
        bool
            True on success, False if the upload failed (already logged).
        """
        params = self.build_params(metric, value)
        try:
            async with self._session.client(
                "cloudwatch", config=NO_RETRY_CONFIG, **self._cfg.to_boto3_kwargs()
            ) as cloudwatch:
                await cloudwatch.put_metric_data(**params)
        except Exception as exc:  # noqa: BLE001
            self._logger.error(
                "Could not upload to CloudWatch: %s",
                exc,
                extra=bind_context(metric, self.namespace, {"ct_code": "CT-CW-0001"}),
            )
            return False
        self._logger.debug(
            "metric=%s value=%s uploaded",
            metric,
            value,
            extra=bind_context(metric, self.namespace),
        )
        return True

    def _put_metric_blocking(self, metric: str, value: float) -> bool:
        return asyncio.run(self.put_metric(metric, value))

    def report(self, metric: str, value: float) -> None:
        """
        Send a measurement without waiting for it.

        On a running event loop the upload becomes a detached task; without
        one it is handed to the reporter's upload threads.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._submit(metric, value)
            return

        task = loop.create_task(self.put_metric(metric, value))
        self._pending.add(task)
        task.add_done_callback(self._on_done)

    def _submit(self, metric: str, value: float) -> None:
        with self._futures_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self._max_workers,
                    thread_name_prefix="cycletime-upload",
                )
            future = self._executor.submit(self._put_metric_blocking, metric, value)
            self._pending_futures.add(future)
        future.add_done_callback(self._on_future_done)

    def _log_failure(self, exc: BaseException) -> None:
        self._logger.error(
            "CloudWatch upload task failed: %r",
            exc,
            extra=bind_context(namespace=self.namespace, extra={"ct_code": "CT-CW-0001"}),
        )

    def _on_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self._log_failure(exc)

    def _on_future_done(self, future: Future) -> None:
        with self._futures_lock:
            self._pending_futures.discard(future)
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            self._log_failure(exc)

    @property
    def pending(self) -> int:
        with self._futures_lock:
            return len(self._pending) + len(self._pending_futures)

    def wait(self, timeout: Optional[float] = None) -> None:
        """Block until uploads handed to the upload threads are done."""
        with self._futures_lock:
            futures = list(self._pending_futures)
        if futures:
            wait_futures(futures, timeout=timeout)

    async def drain(self) -> None:
        """Wait for every in-flight upload to finish."""
        while self._pending or self._pending_futures:
            with self._futures_lock:
                futures = [asyncio.wrap_future(f) for f in self._pending_futures]
            await asyncio.gather(*list(self._pending), *futures, return_exceptions=True)

    def close(self) -> None:
        """Wait for queued uploads and release the upload threads."""
        with self._futures_lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)
