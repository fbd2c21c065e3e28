"""
Gunicorn Configuration for the release workers

Usage:
    gunicorn -c gunicorn_config.py releases.v1.worker:app

Each gunicorn worker process imports the release module after fork and so
owns its own request host and loop thread.
"""

import os
import logging

# Server socket
bind = os.environ.get('GUNICORN_BIND', '0.0.0.0:8080')

# Worker configuration
worker_class = 'gthread'  # Front-end threads block on the loop thread
workers = int(os.environ.get('GUNICORN_WORKERS', 2))
threads = int(os.environ.get('GUNICORN_THREADS', 4))

# Request handling
timeout = int(os.environ.get('GUNICORN_TIMEOUT', 60))
graceful_timeout = int(os.environ.get('GUNICORN_GRACEFUL_TIMEOUT', 30))
keepalive = int(os.environ.get('GUNICORN_KEEPALIVE', 2))

# Max request handling
max_requests = int(os.environ.get('GUNICORN_MAX_REQUESTS', 10000))
max_requests_jitter = int(os.environ.get('GUNICORN_MAX_REQUESTS_JITTER', 1000))

# Logging
accesslog = os.environ.get('GUNICORN_ACCESS_LOG', '-')
errorlog = os.environ.get('GUNICORN_ERROR_LOG', '-')
loglevel = os.environ.get('GUNICORN_LOG_LEVEL', 'info')

# Access log format (similar to nginx combined format)
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'

forwarded_allow_ips = os.environ.get('GUNICORN_FORWARDED_ALLOW_IPS', '*')

logger = logging.getLogger('gunicorn.error')


def on_starting(server):
    """Called just before the master process is initialized."""
    logger.info("Starting release workers on %s", bind)


def worker_int(worker):
    """Called when a worker is interrupted."""
    logger.info("Worker %s received interrupt signal", worker.pid)


def worker_abort(worker):
    """Called when a worker times out."""
    logger.warning("Worker %s was aborted (timeout)", worker.pid)


def worker_exit(server, worker):
    """Stop the release loop thread when a worker exits."""
    app = getattr(worker, 'wsgi', None)
    release_worker = getattr(app, 'extensions', {}).get('release_worker')
    if release_worker is not None:
        release_worker.stop()


def when_ready(server):
    """Called when the server is ready to accept requests."""
    logger.info("Gunicorn server is ready")
