import logging
import time

from flask import Flask, g, request

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def init_logging(app: Flask) -> None:
    """Root handler at LOG_LEVEL plus one access line per request."""
    root = logging.getLogger()
    root.setLevel(getattr(logging, app.config.get("LOG_LEVEL", "INFO").upper(), logging.INFO))
    root.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(handler)

    # backend calls and the dev server are noisy at INFO
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    @app.before_request
    def _start_timer():
        g.request_start = time.time()

    @app.after_request
    def _log_request(response):
        duration_ms = (time.time() - g.get("request_start", time.time())) * 1000
        app.logger.info("%s %s %s %.0fms", request.method, request.path, response.status_code, duration_ms)
        return response
