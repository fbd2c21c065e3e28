"""
Release Worker

Long-running worker runtime shared by the release entry points:
- Hold the release binding for an entry point
- Answer each request with the release payload
- Loop over requests supplied by a request host
"""

__version__ = '1.0.0'
