"""
Worker Loop

Runs a handler against a request host until the host says stop, and keeps
restarting the loop in a background thread for the life of the process.
"""

import logging
import threading
from typing import Callable, Optional

from .config import ReleaseConfig
from .handler import ReleaseHandler
from .host import Handler, RequestHost

logger = logging.getLogger(__name__)


def run_loop(host: RequestHost, handler: Handler, max_requests: int = 0) -> int:
    """
    Hand requests to handler until the host stops.

    Args:
        host: Request host supplying the requests
        handler: Callable run once per request
        max_requests: Return after this many requests (0 = no limit)

    Returns:
        Number of requests handled
    """
    handled = 0
    while host.handle_request(handler):
        handled += 1
        if max_requests and handled >= max_requests:
            logger.info("Reached max_requests (%d), ending loop", max_requests)
            break
    return handled


class ReleaseWorker:
    """
    Background loop thread for one release.

    Each generation gets a fresh handler. A generation ends when the host
    stops or after max_requests requests, in which case the next one starts.
    """

    def __init__(self, host: RequestHost, config: ReleaseConfig, max_requests: int = 0,
                 handler_factory: Optional[Callable[[ReleaseConfig], Handler]] = None):
        self.host = host
        self.config = config
        self.max_requests = max_requests
        self.handler_factory = handler_factory or ReleaseHandler

        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()
        self._generation = 0
        self._requests_handled = 0

    @property
    def generation(self) -> int:
        """Number of loop generations started so far."""
        with self._lock:
            return self._generation

    @property
    def requests_handled(self) -> int:
        """Requests handled across all finished generations."""
        with self._lock:
            return self._requests_handled

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run(self):
        logger.info("Release %s worker started (%s)", self.config.release, self.config.worker_file)
        while not self.host.stopped:
            with self._lock:
                self._generation += 1
                generation = self._generation
            handler = self.handler_factory(self.config)
            logger.debug("Starting loop generation %d", generation)

            handled = run_loop(self.host, handler, self.max_requests)

            with self._lock:
                self._requests_handled += handled
        logger.info("Release %s worker stopped after %d requests",
                    self.config.release, self.requests_handled)

    def start(self):
        """Start the loop thread (no-op if already running)."""
        if self.running:
            return
        self._thread = threading.Thread(
            target=self._run,
            name=f"release-worker-{self.config.release}",
            daemon=True,
        )
        self._thread.start()

    def stop(self, timeout: Optional[float] = 5.0):
        """Stop the host and wait for the loop thread to finish."""
        self.host.stop()
        if self._thread is not None:
            self._thread.join(timeout)
