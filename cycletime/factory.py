"""
Entry point: configure a reporter once, then hand out timers.

Usage:

import cycletime

client = cycletime.create("eu-central-1", "AWS-KEY", "AWS-SECRET", "namespace")
timer = client.get_timer("my-timer", 10)

timer.start()
...
timer.end()
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from cycletime.config import DEFAULT_REGION, Settings
from cycletime.connectors.cloudwatch_client import CloudWatchReporter
from cycletime.logging.logger import bind_context, get_logger
from cycletime.utils.exceptions import CycletimeError
from cycletime.utils.timing import Reporter, Timer
from cycletime.utils.validators import validate_name, validate_pulse

logger = get_logger("cycletime.factory")


class CycletimeClient:
    """Creates timers bound to one reporter."""

    def __init__(self, reporter: Reporter) -> None:
        self.reporter = reporter

    def get_timer(self, name: Any, pulse: Any = 0) -> Optional[Timer]:
        """
        Return a Timer, or None if name/pulse are invalid.

        Errors are logged, never raised. Timers with pulse > 0 start their
        flush cadence right away.
        """
        try:
            name = validate_name(name)
            pulse = validate_pulse(pulse)
        except CycletimeError as e:
            logger.error(str(e), extra=bind_context(extra={"ct_code": e.code}))
            return None

        timer = Timer(name, pulse, self.reporter)
        if timer.pulse > 0:
            timer.start_pulse()
        return timer


def create(
    region: Optional[str] = None,
    access_key: Optional[str] = None,
    secret_key: Optional[str] = None,
    namespace: Optional[str] = None,
    **kwargs: Any,
) -> CycletimeClient:
    """
    Build a CloudWatch-backed client.

    Parameters
    ----------
    region : str, optional
        CloudWatch region; falls back to AWS_REGION, then 'eu-central-1'.
    access_key, secret_key : str, optional
        Static credentials; omitted values fall back to ENV / boto defaults.
    namespace : str, optional
        Metrics land in Cycletime/<namespace>.
    **kwargs
        Extra Settings fields (e.g. AWS_ENDPOINT_URL, LOG_DIR).
    """
    overrides: Dict[str, Any] = {
        "AWS_REGION": region,
        "AWS_ACCESS_KEY_ID": access_key,
        "AWS_SECRET_ACCESS_KEY": secret_key,
        "CYCLETIME_NAMESPACE": namespace,
        **kwargs,
    }
    cfg = Settings(**{k: v for k, v in overrides.items() if v is not None})
    if not cfg.AWS_REGION:
        cfg.AWS_REGION = DEFAULT_REGION

    return CycletimeClient(CloudWatchReporter(cfg))
