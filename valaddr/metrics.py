"""Prometheus metrics for valaddr.

valaddr is a one-shot command and never opens a socket, so metrics are not
served over HTTP. They can be written once at exit in the text exposition
format, for pickup by the node exporter's textfile collector.
"""

import logging
from pathlib import Path

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    Info,
    generate_latest,
    write_to_textfile,
)

from . import __version__

logger = logging.getLogger(__name__)

REGISTRY = CollectorRegistry()

APP_INFO = Info(
    "valaddr_build_info",
    "Build information about valaddr",
    registry=REGISTRY,
)
APP_INFO.info({"version": __version__, "name": "valaddr"})

DERIVATIONS_TOTAL = Counter(
    "derivations_total",
    "Total number of address derivations attempted",
    ["key_format"],
    registry=REGISTRY,
)

DERIVATION_ERRORS_TOTAL = Counter(
    "derivation_errors_total",
    "Total number of failed address derivations",
    ["error_type"],
    registry=REGISTRY,
)

DERIVATION_DURATION_SECONDS = Histogram(
    "derivation_duration_seconds",
    "Time spent deriving a single address",
    buckets=[0.00001, 0.00005, 0.0001, 0.0005, 0.001, 0.005, 0.01],
    registry=REGISTRY,
)


def get_metrics_output() -> bytes:
    """Generate Prometheus-formatted metrics output."""
    return generate_latest(REGISTRY)


def write_metrics(path: Path) -> None:
    """Write all metrics to ``path`` in the text exposition format."""
    write_to_textfile(str(path), REGISTRY)
    logger.debug(f"Wrote metrics to {path}")
