"""
Request Handler

The per-request callback registered with the request host.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from .config import ReleaseConfig
from .payload import build_payload

JSON_CONTENT_TYPE = 'application/json'


@dataclass(frozen=True)
class HandlerResponse:
    """Response produced by a handler."""
    status: int
    body: str
    headers: Dict[str, str] = field(default_factory=dict)


class ReleaseHandler:
    """
    Answers every request with the release payload.

    The request itself is ignored; the output only depends on the release
    binding and the filesystem.
    """

    def __init__(self, config: ReleaseConfig):
        self.config = config

    def __call__(self, request: Optional[object] = None) -> HandlerResponse:
        payload = build_payload(self.config)
        return HandlerResponse(
            status=200,
            body=payload.to_json(),
            headers={'Content-Type': JSON_CONTENT_TYPE},
        )

    def __repr__(self):
        return f"ReleaseHandler(release={self.config.release!r})"
