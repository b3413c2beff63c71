"""
Re-export the public API for easier imports.

Usage:
    import cycletime
    client = cycletime.create(region, key, secret, "namespace")
"""

from .config import Settings, settings
from .connectors.cloudwatch_client import CloudWatchReporter
from .factory import CycletimeClient, create
from .utils.decorators import timed
from .utils.exceptions import CycletimeError, ValidationError
from .utils.timing import Timer

__all__ = [
    "Settings",
    "settings",
    "CloudWatchReporter",
    "CycletimeClient",
    "create",
    "timed",
    "CycletimeError",
    "ValidationError",
    "Timer",
]
