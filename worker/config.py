"""
Worker Configuration

Handles the release binding for an entry point and the runtime settings
loaded from environment variables.
"""

import os
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class ReleaseConfig:
    """Immutable release binding captured by the request handler."""

    release: str
    worker_file: str

    @classmethod
    def for_entry_point(cls, release: str, worker_file: str) -> 'ReleaseConfig':
        """
        Build the binding for a release entry point.

        The path is resolved once here, symlinks included, so the value
        stays the canonical file the process loaded even if a release
        symlink is switched later.

        Args:
            release: Release version string (e.g. 'v1')
            worker_file: Path of the entry point module, usually __file__
        """
        return cls(release=release, worker_file=os.path.realpath(worker_file))

    def validate(self) -> List[str]:
        """
        Validate the binding.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if not self.release:
            errors.append("release is required")
        elif self.release != self.release.strip() or ' ' in self.release:
            errors.append("release must not contain whitespace")

        if not self.worker_file:
            errors.append("worker_file is required")
        elif not os.path.isabs(self.worker_file):
            errors.append("worker_file must be an absolute path")

        return errors


@dataclass
class WorkerSettings:
    """Worker runtime settings."""

    # Development server
    host: str = '0.0.0.0'
    port: int = 8080

    # Loop settings
    max_requests: int = 0  # 0 = unlimited
    request_timeout: float = 30.0
    poll_interval: float = 0.5

    log_level: str = 'INFO'
    release: str = 'v1'

    @classmethod
    def from_env(cls) -> 'WorkerSettings':
        """
        Load settings from environment variables.

        Environment variables:
            WORKER_HOST: Bind address (default 0.0.0.0)
            WORKER_PORT: Bind port (default 8080)
            MAX_REQUESTS: Requests per loop generation (default 0, unlimited)
            REQUEST_TIMEOUT: Seconds to wait for the loop (default 30)
            POLL_INTERVAL: Seconds between stop checks (default 0.5)
            LOG_LEVEL: Logging level (default INFO)
            RELEASE: Release served by `python -m worker` (default v1)
        """
        try:
            return cls(
                host=os.environ.get('WORKER_HOST', '0.0.0.0'),
                port=int(os.environ.get('WORKER_PORT', '8080')),
                max_requests=int(os.environ.get('MAX_REQUESTS', '0')),
                request_timeout=float(os.environ.get('REQUEST_TIMEOUT', '30')),
                poll_interval=float(os.environ.get('POLL_INTERVAL', '0.5')),
                log_level=os.environ.get('LOG_LEVEL', 'INFO').upper(),
                release=os.environ.get('RELEASE', 'v1').strip(),
            )
        except ValueError as e:
            raise ValueError(f"Invalid numeric setting: {e}") from e

    def validate(self) -> List[str]:
        """
        Validate settings.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if not 0 < self.port < 65536:
            errors.append("port must be between 1 and 65535")

        if self.max_requests < 0:
            errors.append("max_requests must be 0 or greater")

        if self.request_timeout <= 0:
            errors.append("request_timeout must be greater than 0")

        if self.poll_interval <= 0:
            errors.append("poll_interval must be greater than 0")

        if self.log_level not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            errors.append(f"log_level '{self.log_level}' is not a valid level")

        if not self.release:
            errors.append("release is required")

        return errors

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'host': self.host,
            'port': self.port,
            'max_requests': self.max_requests,
            'request_timeout': self.request_timeout,
            'poll_interval': self.poll_interval,
            'log_level': self.log_level,
            'release': self.release,
        }
