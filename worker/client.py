"""
Release Client

Small HTTP client used to check which release a deployment is serving.
"""

import json
import requests
from dataclasses import dataclass
from typing import Dict, Optional


@dataclass
class ReleaseResponse:
    """Wrapper for release worker responses."""
    success: bool
    status_code: int
    data: Optional[Dict] = None
    content_type: Optional[str] = None
    error: Optional[str] = None

    @property
    def release(self) -> Optional[str]:
        return self.data.get('release') if isinstance(self.data, dict) else None


class ReleaseClient:
    """HTTP client for a release worker."""

    def __init__(self, base_url: str, timeout: int = 10):
        """
        Args:
            base_url: Base URL of the worker (e.g., http://localhost:8080)
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

    def fetch(self, path: str = '/') -> ReleaseResponse:
        """
        GET path and decode the release payload.

        Returns:
            ReleaseResponse with success status and data/error
        """
        url = f"{self.base_url}/{path.lstrip('/')}"

        try:
            response = requests.get(url, timeout=self.timeout)
        except requests.exceptions.ConnectionError as e:
            return ReleaseResponse(success=False, status_code=0, error=f"Connection error: {str(e)}")
        except requests.exceptions.Timeout:
            return ReleaseResponse(success=False, status_code=0, error="Request timed out")
        except requests.exceptions.RequestException as e:
            return ReleaseResponse(success=False, status_code=0, error=f"Request failed: {str(e)}")

        content_type = response.headers.get('Content-Type')
        try:
            data = response.json()
        except (json.JSONDecodeError, ValueError):
            data = None

        if not response.ok:
            if not isinstance(data, dict):
                data = None
            error_msg = data.get('error') if data else response.text
            return ReleaseResponse(
                success=False,
                status_code=response.status_code,
                data=data,
                content_type=content_type,
                error=error_msg
            )

        if not isinstance(data, dict):
            return ReleaseResponse(
                success=False,
                status_code=response.status_code,
                content_type=content_type,
                error="Response body is not a JSON object"
            )

        return ReleaseResponse(
            success=True,
            status_code=response.status_code,
            data=data,
            content_type=content_type
        )
