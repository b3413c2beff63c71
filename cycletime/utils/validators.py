"""
Validation helpers for timer construction.
"""

from __future__ import annotations

import math
import numbers
from typing import Any

from cycletime.utils.exceptions import ValidationError


def validate_name(value: Any) -> str:
    if not isinstance(value, str) or not value:
        raise ValidationError("CT-CFG-0001", f"Name must be a string, got {value!r}")
    return value


def validate_pulse(value: Any) -> float:
    """Return the pulse in seconds; ``None`` means 0 (report every cycle)."""
    if value is None:
        return 0
    # bool is an int subclass; True is not a pulse
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValidationError("CT-CFG-0002", f"Pulse must be a number, got {value!r}")
    if math.isnan(value) or math.isinf(value) or value < 0:
        raise ValidationError("CT-CFG-0002", f"Pulse must be positive, got {value!r}")
    return value
