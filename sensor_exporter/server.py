"""
server.py

HTTP listener for the exporter. Serves the Prometheus exposition of a
registry on the configured metrics path and a small landing page on "/".
Each request is handled on its own thread, so scrapes that arrive at the
same time poll concurrently.
"""

import logging
import socket
from wsgiref.simple_server import WSGIRequestHandler, make_server

from prometheus_client import CollectorRegistry, make_wsgi_app
from prometheus_client.exposition import ThreadingWSGIServer

from sensor_exporter import PACKAGE_LOGGER_NAME
from sensor_exporter.exceptions import InvalidConfigValueError

logger = logging.getLogger(f"{PACKAGE_LOGGER_NAME}.server")

LANDING_PAGE = """<html>
<head><title>Sensor Exporter</title></head>
<body>
<h1>Sensor Exporter</h1>
<p><a href="{metrics_path}">Metrics</a></p>
</body>
</html>
"""


def parse_listen_address(listen_address: str) -> tuple[str, int]:
    """
    Split "[host]:port" into host and port. An empty host listens on all
    interfaces; IPv6 hosts are given in brackets, e.g. "[::1]:9775".
    """
    host, sep, port = listen_address.rpartition(":")
    if not sep:
        raise InvalidConfigValueError(f"Invalid listen address '{listen_address}': missing port")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    try:
        port_number = int(port)
    except ValueError:
        raise InvalidConfigValueError(
            f"Invalid listen address '{listen_address}': port '{port}' is not a number"
        ) from None
    if not 0 <= port_number <= 65535:
        raise InvalidConfigValueError(
            f"Invalid listen address '{listen_address}': port {port_number} out of range"
        )
    return host, port_number


def make_app(registry: CollectorRegistry, metrics_path: str):
    """
    Build the WSGI application routing requests by path.
    """
    metrics_app = make_wsgi_app(registry)
    landing = LANDING_PAGE.format(metrics_path=metrics_path).encode("utf-8")

    def app(environ, start_response):
        path = environ.get("PATH_INFO", "") or "/"
        if path == metrics_path:
            return metrics_app(environ, start_response)
        if path == "/":
            start_response("200 OK", [("Content-Type", "text/html; charset=utf-8")])
            return [landing]
        start_response("404 Not Found", [("Content-Type", "text/plain; charset=utf-8")])
        return [b"Not Found\n"]

    return app


class _ThreadingWSGIServerV6(ThreadingWSGIServer):
    address_family = socket.AF_INET6


class _LoggingRequestHandler(WSGIRequestHandler):
    def log_message(self, format, *args):
        logger.debug("%s - %s", self.address_string(), format % args)


class MetricsServer:
    """
    Threaded WSGI server exposing a registry.

    Args:
        listen_address: "[host]:port" to bind to.
        metrics_path: Path under which the metrics are served.
        registry: Registry to expose.
    """

    def __init__(self, listen_address: str, metrics_path: str, registry: CollectorRegistry):
        self.listen_address = listen_address
        self.metrics_path = metrics_path
        host, port = parse_listen_address(listen_address)
        self._httpd = make_server(
            host,
            port,
            make_app(registry, metrics_path),
            server_class=_ThreadingWSGIServerV6 if ":" in host else ThreadingWSGIServer,
            handler_class=_LoggingRequestHandler,
        )

    @property
    def server_port(self) -> int:
        return self._httpd.server_port

    def serve_forever(self) -> None:
        """Serve requests until shutdown() is called. Blocks."""
        logger.info(
            "Serving Prometheus sensor exporter on %s%s",
            self.listen_address, self.metrics_path,
        )
        self._httpd.serve_forever()

    def shutdown(self) -> None:
        self._httpd.shutdown()

    def close(self) -> None:
        self._httpd.server_close()
