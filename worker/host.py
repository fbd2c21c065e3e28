"""
Request Host

The long-running-worker primitive: a host hands inbound requests to a
handler one at a time and tells the caller whether to keep looping.

QueueRequestHost bridges a threaded HTTP front end to a single loop thread:
front-end threads submit requests and block for the answer while the loop
thread pulls them off the queue.
"""

import queue
import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from .handler import HandlerResponse

logger = logging.getLogger(__name__)


class HostError(Exception):
    """Base class for request host errors."""


class HostStopped(HostError):
    """The host is stopping and no longer accepts requests."""


class RequestTimeout(HostError):
    """The worker loop did not answer in time."""


@dataclass(frozen=True)
class InboundRequest:
    """Request as seen by a handler."""
    method: str
    path: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b''


Handler = Callable[[InboundRequest], HandlerResponse]


class RequestHost(ABC):
    """Interface for the request-processing loop primitive."""

    @abstractmethod
    def handle_request(self, handler: Handler) -> bool:
        """
        Wait for the next request and run handler on it.

        Returns:
            True to keep looping, False once the host is stopping
            (the handler is not called in that case)
        """

    @abstractmethod
    def stop(self):
        """Ask the loop to finish."""

    @property
    @abstractmethod
    def stopped(self) -> bool:
        """True once stop() has been called."""


class _PendingRequest:
    """A submitted request waiting for its response."""

    def __init__(self, request: InboundRequest):
        self.request = request
        self.response: Optional[HandlerResponse] = None
        self.error: Optional[BaseException] = None
        self.done = threading.Event()
        # Set when the submitter gave up waiting
        self.cancelled = False

    def resolve(self, response: HandlerResponse):
        self.response = response
        self.done.set()

    def fail(self, error: BaseException):
        self.error = error
        self.done.set()


# Wakes the loop thread on stop
_STOP = object()


class QueueRequestHost(RequestHost):
    """Thread-safe queue bridge between front-end threads and the loop."""

    def __init__(self, poll_interval: float = 0.5):
        """
        Args:
            poll_interval: Seconds the loop waits on the queue before
                re-checking the stop flag
        """
        self.poll_interval = poll_interval
        self._queue: 'queue.Queue' = queue.Queue()
        self._stopping = threading.Event()
        # Guards the stop flag against a concurrent submit
        self._lock = threading.Lock()

    @property
    def stopped(self) -> bool:
        return self._stopping.is_set()

    @property
    def pending(self) -> int:
        """Approximate number of requests waiting for the loop."""
        return self._queue.qsize()

    def submit(self, request: InboundRequest, timeout: Optional[float] = None) -> HandlerResponse:
        """
        Queue a request and block until the loop answers it.

        Raises:
            HostStopped: The host is stopping
            RequestTimeout: No answer within timeout seconds
            Exception: Whatever the handler raised
        """
        pending = _PendingRequest(request)
        with self._lock:
            if self.stopped:
                raise HostStopped("Request host is stopping")
            self._queue.put(pending)

        if not pending.done.wait(timeout):
            pending.cancelled = True
            raise RequestTimeout(f"No response within {timeout}s for {request.method} {request.path}")

        if pending.error is not None:
            raise pending.error
        return pending.response

    def handle_request(self, handler: Handler) -> bool:
        while True:
            if self.stopped:
                return False
            try:
                pending = self._queue.get(timeout=self.poll_interval)
            except queue.Empty:
                continue
            if pending is _STOP:
                return False
            if pending.cancelled:
                logger.debug("Skipping timed out request %s %s", pending.request.method, pending.request.path)
                continue
            break

        try:
            pending.resolve(handler(pending.request))
        except Exception as e:
            logger.exception("Handler failed for %s %s", pending.request.method, pending.request.path)
            pending.fail(e)

        return True

    def stop(self):
        """Stop accepting requests and fail the ones still queued."""
        with self._lock:
            if self.stopped:
                return
            self._stopping.set()
        logger.info("Request host stopping")

        while True:
            try:
                pending = self._queue.get_nowait()
            except queue.Empty:
                break
            if pending is not _STOP:
                pending.fail(HostStopped("Request host stopped before the request was handled"))

        self._queue.put(_STOP)
