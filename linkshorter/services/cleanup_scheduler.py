"""Background sweep of expired links

Classes:
    CleanupScheduler:
        Runs `LinkService.cleanup_expired_links()` on a dedicated daemon thread
        at a fixed rate, first one full interval after `start()`.

Example:
    >>> scheduler = CleanupScheduler(service, interval_ms=60_000)
    >>> scheduler.start()
    >>> scheduler.running
    True
    >>> scheduler.stop()
    >>> scheduler.stop()   # no-op
"""

import time
import logging
import threading

from linkshorter.exceptions import InvalidInputError


logger = logging.getLogger(__name__)

_JOIN_TIMEOUT_SECONDS = 5.0


class CleanupScheduler:
    """Periodic, stoppable expiry sweep

    One instance per composition root; there is no shared scheduler.
    `start()` while running and `stop()` while stopped are no-ops.
    A failing sweep is logged and the next tick runs as scheduled.

    Attributes:
        service (LinkService):
            Service whose `cleanup_expired_links()` is invoked every tick.
        interval (float):
            Seconds between ticks.
    """

    def __init__(self, service, interval_ms: int):
        if isinstance(interval_ms, bool) or not isinstance(interval_ms, (int, float)) or interval_ms <= 0:
            raise InvalidInputError(f'Cleanup interval must be a positive number of milliseconds (given value: {interval_ms!r}).')
        self.service = service
        self.interval = interval_ms / 1000
        self._lock = threading.Lock()
        self._thread: threading.Thread | None = None
        self._stop_event: threading.Event | None = None

    @property
    def running(self) -> bool:
        with self._lock:
            return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        with self._lock:
            if self._thread is not None:
                return

            self._stop_event = threading.Event()
            self._thread = threading.Thread(
                target=self._run,
                args=(self._stop_event,),
                name='link-cleanup-scheduler',
                daemon=True,
            )
            self._thread.start()

        logger.info('Cleanup scheduler started.', extra={'intervalSeconds': self.interval})

    def stop(self) -> None:
        with self._lock:
            thread, stop_event = self._thread, self._stop_event
            self._thread = None
            self._stop_event = None

        if thread is None:
            return

        stop_event.set()
        if thread is not threading.current_thread():
            thread.join(timeout=_JOIN_TIMEOUT_SECONDS)
        logger.info('Cleanup scheduler stopped.')

    def tick(self) -> int | None:
        """Run one sweep now

        Returns:
            int | None: number of links removed, or None if the sweep failed.
        """
        try:
            removed = self.service.cleanup_expired_links()
        except Exception:
            logger.exception('Cleanup sweep failed. Retrying on the next tick.')
            return None

        if removed:
            logger.info('Cleanup sweep removed expired links.', extra={'removed': removed})
        return removed

    def _run(self, stop_event: threading.Event) -> None:
        # Fixed rate: each deadline is the previous deadline plus one interval
        deadline = time.monotonic() + self.interval
        while not stop_event.wait(max(0.0, deadline - time.monotonic())):
            self.tick()
            deadline += self.interval
