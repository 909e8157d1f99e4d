"""
Debounced one-shot task scheduling.

A burst of ``schedule()`` calls collapses into a single invocation that runs
once no further call has arrived for ``delay_seconds``.
"""

import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class Debouncer:
    """
    Run a callback after input activity pauses.

    Each ``schedule()`` cancels the pending timer and bumps a generation
    counter. A timer that was already firing when it got superseded sees a
    stale generation and does nothing.
    """

    def __init__(self, callback: Callable[[], None], delay_seconds: float = 0.3):
        """
        Initialize debouncer.

        Args:
            callback: Function to run when the delay elapses
            delay_seconds: Quiet period required before the callback runs
        """
        self.callback = callback
        self.delay_seconds = delay_seconds
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    def schedule(self) -> None:
        """Start or restart the delay."""
        with self._lock:
            self._cancel_locked()
            self._generation += 1
            generation = self._generation
            timer = threading.Timer(self.delay_seconds, self._fire, args=(generation,))
            timer.daemon = True
            self._timer = timer
            timer.start()

    def cancel(self) -> bool:
        """
        Drop the pending invocation.

        Returns:
            True if something was pending
        """
        with self._lock:
            was_pending = self._timer is not None
            self._cancel_locked()
            self._generation += 1
            return was_pending

    def flush(self) -> bool:
        """
        Run the pending invocation now instead of waiting.

        Returns:
            True if a pending invocation was run
        """
        if not self.cancel():
            return False
        self._run()
        return True

    def _cancel_locked(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                logger.debug(f"Skipping superseded debounce generation {generation}")
                return
            self._timer = None
        self._run()

    def _run(self) -> None:
        try:
            self.callback()
        except Exception as e:
            logger.error(f"Error in debounced callback: {e}", exc_info=True)
