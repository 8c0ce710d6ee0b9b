"""Input size ceiling and the cooperative processing deadline."""

import time
from collections.abc import Callable

from table_progress_tracking.tables.errors import InputTooLargeError, ProcessingTimeoutError


class Clock:
    """Deadline shared by every stage of one processor invocation.

    The clock does nothing until ``start()`` is called; before that
    ``deadline_exceeded()`` always reports False. Stages query it at their
    checkpoints and stop on their own when it reports True.
    """

    def __init__(
        self,
        max_seconds: float,
        now: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_seconds = max_seconds
        self._now = now
        self._started_at: float | None = None

    def start(self) -> None:
        """Start measuring elapsed processing time."""
        self._started_at = self._now()

    @property
    def started(self) -> bool:
        return self._started_at is not None

    def elapsed(self) -> float:
        """Seconds since ``start()``, or 0.0 if not started."""
        if self._started_at is None:
            return 0.0
        return self._now() - self._started_at

    def deadline_exceeded(self) -> bool:
        """Check whether the processing budget has been used up."""
        if self._started_at is None:
            return False
        return self.elapsed() > self.max_seconds

    def checkpoint(self, stage: str) -> None:
        """Raise ProcessingTimeoutError if the deadline has passed.

        Args:
            stage: Description of the work in progress, used in the message.
        """
        if self.deadline_exceeded():
            raise ProcessingTimeoutError(stage)


def input_size(raw_input: str) -> int:
    """Size of the raw tag content in UTF-8 bytes."""
    return len(raw_input.encode("utf-8"))


def check_input_size(raw_input: str, max_input_size: int) -> int:
    """Reject raw input larger than ``max_input_size`` bytes.

    Returns:
        The measured size in bytes.

    Raises:
        InputTooLargeError: If the input exceeds the limit.
    """
    size = input_size(raw_input)
    if size > max_input_size:
        raise InputTooLargeError(size, max_input_size)
    return size
