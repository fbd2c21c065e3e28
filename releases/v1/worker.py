"""
Release: v1

Worker entry point. Gunicorn loads `releases.v1.worker:app`;
`python -m releases.v1.worker` starts the development server.
"""

from worker.app import create_app, serve
from worker.config import ReleaseConfig, WorkerSettings

RELEASE = 'v1'

config = ReleaseConfig.for_entry_point(RELEASE, __file__)

app = create_app(config, WorkerSettings.from_env())


if __name__ == '__main__':
    serve(app)
