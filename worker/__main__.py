#!/usr/bin/env python3
"""
Release Worker Entry Point

Serves the release named by the RELEASE environment variable.
"""

import sys
import importlib
import traceback

from .app import serve
from .config import WorkerSettings


def load_release_app(release: str):
    """Import releases.<release>.worker and return its WSGI app."""
    module = importlib.import_module(f"releases.{release}.worker")
    return module.app


def main():
    """Main entry point for the release worker."""
    try:
        settings = WorkerSettings.from_env()

        errors = settings.validate()
        if errors:
            print("\nConfiguration errors:")
            for error in errors:
                print(f"  - {error}")
            sys.exit(1)

        try:
            app = load_release_app(settings.release)
        except ModuleNotFoundError as e:
            if not (e.name or '').startswith('releases'):
                raise
            print(f"\nUnknown release: {settings.release}")
            sys.exit(1)

        serve(app, settings)

    except KeyboardInterrupt:
        print("\nShutdown requested by user")
        sys.exit(0)
    except ValueError as e:
        print(f"\nConfiguration error: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"\nFatal error: {e}")
        traceback.print_exc()
        sys.exit(1)


if __name__ == '__main__':
    main()
