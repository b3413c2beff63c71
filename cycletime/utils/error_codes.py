"""
CT error code registry for cycletime.

Each code has:
- description
- retriable flag
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class ErrorInfo:
    code: str
    description: str
    retriable: bool = False


# Core registry
_CT_REGISTRY: Dict[str, ErrorInfo] = {
    # Timer configuration
    "CT-CFG-0001": ErrorInfo("CT-CFG-0001", "Timer name must be a non-empty string", False),
    "CT-CFG-0002": ErrorInfo("CT-CFG-0002", "Pulse must be a non-negative number", False),

    # CloudWatch
    "CT-CW-0001": ErrorInfo("CT-CW-0001", "Could not upload to CloudWatch", True),
}


def get_error_info(code: str) -> ErrorInfo:
    """Return ErrorInfo for a given CT code, or a generic one if not registered."""
    return _CT_REGISTRY.get(
        code,
        ErrorInfo(code=code, description="Unknown cycletime error code", retriable=False),
    )
