"""
Shared exception hierarchy for cycletime.

Raise CycletimeError (or subclasses) with a CT code.
"""

from __future__ import annotations

from typing import Optional

from cycletime.utils.error_codes import get_error_info, ErrorInfo


class CycletimeError(Exception):
    """Base exception for all cycletime errors."""

    def __init__(
        self,
        code: str,
        message: Optional[str] = None,
        *,
        retriable: Optional[bool] = None,
    ) -> None:
        self.info: ErrorInfo = get_error_info(code)
        self.code: str = self.info.code
        self.retriable: bool = retriable if retriable is not None else self.info.retriable
        self.detail: str = message or self.info.description
        super().__init__(f"{self.code}: {self.detail}")


class ValidationError(CycletimeError):
    """Timer name/pulse validation errors."""
