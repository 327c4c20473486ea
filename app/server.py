"""FastAPI server setup and routes"""
import time
from fastapi import FastAPI, Response
from fastapi.responses import PlainTextResponse, RedirectResponse
from config import Config
from errors import ExporterError
from metrics.registry import MetricsRegistry
from metrics.exporters.prometheus import CONTENT_TYPE
from logging_config import get_logger, log_error
from middleware.request_logging import RequestLoggingMiddleware


logger = get_logger(__name__)


class MetricsServer:
    """FastAPI server for the Varnish metrics exporter"""

    def __init__(self, config: Config, registry: MetricsRegistry = None):
        self.config = config
        self.app = FastAPI(
            title="Varnish Exporter",
            version=config.service_version,
            docs_url=None,
            redoc_url=None,
            openapi_url=None
        )
        self.registry = registry or MetricsRegistry(config)
        self.start_time = time.time()

        self._setup_middleware()
        self._setup_routes()

    def _setup_middleware(self):
        """Setup request logging middleware"""
        if self.config.enable_request_logging:
            self.app.add_middleware(RequestLoggingMiddleware)

    def _setup_routes(self):
        """Setup FastAPI routes"""

        @self.app.get('/')
        def index():
            return RedirectResponse('/metrics', status_code=302)

        # Sync route: FastAPI runs it in its threadpool, so a slow
        # varnishstat call never blocks the event loop
        @self.app.get('/metrics', response_class=Response)
        def get_metrics():
            """Serve a fresh snapshot in Prometheus format"""
            try:
                content = self.registry.collect()
            except ExporterError as e:
                log_error(logger, e, {"component": "metrics_endpoint", "endpoint": "/metrics"})
                return PlainTextResponse(str(e), status_code=500)
            return Response(content, media_type=CONTENT_TYPE)

        @self.app.get('/health')
        def health_check():
            """Liveness check; does not call varnish"""
            return {
                "status": "ok",
                "service": self.config.service_name,
                "version": self.config.service_version,
                "uptime_seconds": round(time.time() - self.start_time, 1),
            }

    def get_app(self) -> FastAPI:
        """Get the FastAPI application"""
        return self.app
