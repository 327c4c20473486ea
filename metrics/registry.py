"""Metrics registry orchestrating one collection cycle"""
import time
from config import Config
from collectors.varnishadm import VclListCollector
from collectors.varnishstat import VarnishStatCollector
from logging_config import get_logger, log_metrics_collection
from .exporters.prometheus import PrometheusExporter
from .transformer import decompose


logger = get_logger(__name__)


class MetricsRegistry:
    """Runs the VCL and stats collectors and renders the exposition text.

    Holds no per-scrape state, so one instance can serve concurrent requests.
    """

    def __init__(self, config: Config):
        self.config = config
        self.vcl_collector = VclListCollector(config)
        self.stats_collector = VarnishStatCollector(config)
        self.exporter = PrometheusExporter()

    def collect(self) -> str:
        """Collect a fresh snapshot; raises StatsUnavailable or RevisionResolutionFailed"""
        start_time = time.time()

        active_vcl = self.vcl_collector.collect()
        counters = self.stats_collector.collect()

        result = decompose(counters, active_vcl)
        for key in result.unrecognized:
            logger.debug("Unknown metric", key=key, event_type="unknown_metric")
        for key in result.malformed:
            logger.warning("Malformed metric key", key=key, event_type="malformed_metric")

        content = self.exporter.export_metrics(result.metrics, result.active_revision)

        log_metrics_collection(
            logger,
            len(result.metrics),
            time.time() - start_time,
            active_vcl=result.active_revision,
            unrecognized=len(result.unrecognized)
        )
        return content
