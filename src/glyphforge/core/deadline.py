"""Cooperative wall-clock limit for a single conversion."""

import time

from glyphforge.exceptions import ConversionTimeoutError


class Deadline:
    """Wall-clock budget checked at loop boundaries of the pipeline.

    Example:
        deadline = Deadline(15.0)
        for row in rows:
            deadline.check()
    """

    def __init__(self, timeout_seconds: float | None) -> None:
        self.timeout_seconds = timeout_seconds
        self._expires_at = (
            None if timeout_seconds is None else time.monotonic() + timeout_seconds
        )

    @classmethod
    def unlimited(cls) -> "Deadline":
        return cls(None)

    def remaining(self) -> float | None:
        """Seconds left, or None when unlimited."""
        if self._expires_at is None:
            return None
        return max(0.0, self._expires_at - time.monotonic())

    def expired(self) -> bool:
        return self._expires_at is not None and time.monotonic() >= self._expires_at

    def check(self) -> None:
        """Raise ConversionTimeoutError once the deadline has passed."""
        if self.expired():
            raise ConversionTimeoutError(self.timeout_seconds or 0.0)
