"""
Response Payload

The record returned by every release worker request.
"""

import os
import json
import logging
from dataclasses import dataclass, asdict
from typing import Optional

from .config import ReleaseConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResponsePayload:
    """Release identity reported to the client."""
    release: str
    worker_file: str
    realpath: Optional[str]

    def to_dict(self) -> dict:
        return asdict(self)

    def to_json(self) -> str:
        """Compact JSON, keys in field order."""
        return json.dumps(self.to_dict(), separators=(',', ':'))


def resolve_realpath(path: str) -> Optional[str]:
    """
    Resolve symlinks in path.

    Returns:
        The canonical absolute path, or None if the file does not exist
    """
    if not os.path.exists(path):
        return None
    return os.path.realpath(path)


def build_payload(config: ReleaseConfig) -> ResponsePayload:
    """Build the payload, resolving the worker file at call time."""
    realpath = resolve_realpath(config.worker_file)
    if realpath is None:
        logger.warning("Could not resolve worker file %s", config.worker_file)

    return ResponsePayload(
        release=config.release,
        worker_file=config.worker_file,
        realpath=realpath,
    )
