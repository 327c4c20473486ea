#!/usr/bin/env python3
"""Main entry point for Varnish Exporter"""
import argparse
import sys
from typing import Optional, Sequence
import uvicorn
from config import Config, DEFAULT_BIND, parse_bind_address
from errors import ExporterError
from app.server import MetricsServer
from metrics.registry import MetricsRegistry
from logging_config import setup_structured_logging, get_logger, log_server_startup, log_error


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="varnish-exporter", description="Prometheus exporter for Varnish Cache")
    parser.add_argument("--bind", default=None, help=f"binding address (default {DEFAULT_BIND})")
    parser.add_argument("--check", action="store_true", help="print metrics and exit")
    parser.add_argument("--no-admin", action="store_true", default=None, help="do not call 'varnishadm'")
    parser.add_argument("--instance", default=None, help="varnish instance name (-n)")
    parser.add_argument("--timeout", type=float, default=None, help="timeout for varnish commands in seconds")
    parser.add_argument("--log-level", default=None, help="log level")
    return parser


def load_config(args: argparse.Namespace) -> Config:
    """Build the configuration; command line flags override the environment"""
    overrides = {}
    if args.bind is not None:
        overrides["metrics_host"], overrides["metrics_port"] = parse_bind_address(args.bind)
    if args.no_admin:
        overrides["no_admin"] = True
    if args.instance is not None:
        overrides["varnish_instance"] = args.instance
    if args.timeout is not None:
        overrides["command_timeout"] = args.timeout
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    return Config(**overrides)


def run_check(config: Config) -> int:
    """Collect once and write the exposition text to stdout"""
    logger = get_logger(__name__)
    try:
        content = MetricsRegistry(config).collect()
    except ExporterError as e:
        logger.error(
            "Metrics collection failed",
            error=str(e),
            error_type=type(e).__name__,
            event_type="collection_error"
        )
        return 1

    sys.stdout.write(content)
    sys.stdout.flush()
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main application entry point"""
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        config = load_config(args)
    except ValueError as e:
        parser.error(str(e))

    if args.check:
        setup_structured_logging(config, stream=sys.stderr)
        return run_check(config)

    setup_structured_logging(config)
    logger = get_logger(__name__)

    try:
        log_server_startup(logger, config)
        server = MetricsServer(config)

        uvicorn.run(
            server.get_app(),
            host=config.metrics_host,
            port=config.metrics_port,
            log_config=None  # We handle logging ourselves
        )
    except Exception as e:
        log_error(logger, e, {"component": "main", "phase": "startup"})
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
