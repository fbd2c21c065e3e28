#!/usr/bin/env python3
"""
Check which release a running worker is serving.

Usage:
    python scripts/check_release.py http://localhost:8080 v2
"""

import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from worker.client import ReleaseClient


def print_result(name, success, details=None):
    status = "PASS" if success else "FAIL"
    print(f"{status} - {name}")
    if details:
        print(f"   Details: {details}")


def check_release(url, expected_release, timeout=10):
    """
    Fetch the payload from url and compare it to expected_release.

    Returns:
        True if every check passed
    """
    print(f"\n--- Checking {url} ---")
    result = ReleaseClient(url, timeout=timeout).fetch()

    if result.status_code == 0:
        print_result("Worker Reachable", False, result.error)
        return False

    checks = [
        ("Status 200", result.status_code == 200, f"Status: {result.status_code}"),
        ("JSON Content-Type", result.content_type == 'application/json', result.content_type),
        ("Release", result.release == expected_release,
         f"Expected {expected_release}, got {result.release}"),
        ("Resolved Path", bool(result.data and result.data.get('realpath')),
         result.data.get('realpath') if result.data else result.error),
    ]

    for name, success, details in checks:
        print_result(name, success, details)

    if result.data:
        print(f"   worker_file: {result.data.get('worker_file')}")

    return all(success for _, success, _ in checks)


def main():
    if len(sys.argv) != 3:
        print(__doc__)
        sys.exit(2)

    ok = check_release(sys.argv[1], sys.argv[2])
    sys.exit(0 if ok else 1)


if __name__ == '__main__':
    main()
