"""
HTTP Front End

Flask application that forwards every request to the release worker loop
through a QueueRequestHost and returns the handler's response as is.
"""

import logging
from typing import Optional

from flask import Flask, Response, jsonify, request

from .config import ReleaseConfig, WorkerSettings
from .host import HostStopped, InboundRequest, QueueRequestHost, RequestTimeout
from .loop import ReleaseWorker

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

METHODS = ['GET', 'HEAD', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS']


def create_app(config: ReleaseConfig, settings: Optional[WorkerSettings] = None,
               host: Optional[QueueRequestHost] = None, start_worker: bool = True) -> Flask:
    """
    Create the front end for one release.

    Args:
        config: Release binding for the handler
        settings: Runtime settings (defaults to WorkerSettings())
        host: Request host to use (a new QueueRequestHost if omitted)
        start_worker: Start the loop thread immediately

    Raises:
        ValueError: If config or settings are invalid
    """
    settings = settings or WorkerSettings()
    errors = config.validate() + settings.validate()
    if errors:
        raise ValueError("; ".join(errors))

    host = host or QueueRequestHost(poll_interval=settings.poll_interval)
    release_worker = ReleaseWorker(host, config, max_requests=settings.max_requests)

    app = Flask(__name__)
    app.config['RELEASE'] = config.release
    app.config['REQUEST_TIMEOUT'] = settings.request_timeout
    app.extensions['release_worker'] = release_worker

    @app.route('/', defaults={'path': ''}, methods=METHODS)
    @app.route('/<path:path>', methods=METHODS)
    def dispatch(path):
        inbound = InboundRequest(
            method=request.method,
            path=request.path,
            headers=dict(request.headers),
            body=request.get_data(),
        )

        try:
            result = host.submit(inbound, timeout=app.config['REQUEST_TIMEOUT'])
        except HostStopped as e:
            return jsonify({'error': str(e)}), 503
        except RequestTimeout as e:
            logger.warning(str(e))
            return jsonify({'error': str(e)}), 504
        except Exception as e:
            return jsonify({'error': f"Handler error: {e}"}), 500

        response = Response(result.body, status=result.status)
        for name, value in result.headers.items():
            response.headers[name] = value
        return response

    if start_worker:
        release_worker.start()

    return app


def configure_logging(level: str = 'INFO'):
    """Configure root logging (stderr only)."""
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)


def serve(app: Flask, settings: Optional[WorkerSettings] = None):
    """Run the threaded development server until interrupted."""
    settings = settings or WorkerSettings.from_env()
    configure_logging(settings.log_level)

    release_worker = app.extensions['release_worker']
    logger.info("Serving release %s on %s:%d", app.config['RELEASE'], settings.host, settings.port)
    try:
        app.run(host=settings.host, port=settings.port, threaded=True, use_reloader=False)
    finally:
        release_worker.stop()
