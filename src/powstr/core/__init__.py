"""Core layer providing the foundation for all powstr services.

Sits in the middle of the diamond DAG -- depends only on
``powstr.models`` and is depended upon by ``powstr.services``.

Attributes:
    BaseService: Abstract generic base class with factory methods
        ([from_yaml()][powstr.core.base_service.BaseService.from_yaml],
        [from_dict()][powstr.core.base_service.BaseService.from_dict]),
        an async context manager and Prometheus metric helpers.
    Logger: Structured logger supporting key=value and JSON output modes.
        See [Logger][powstr.core.logger.Logger].
    MetricsServer: Prometheus ``/metrics`` HTTP endpoint.
        See [MetricsServer][powstr.core.metrics.MetricsServer].
    load_yaml: Safe YAML loading with ``yaml.safe_load()``.
    PowstrError: Root of the exception hierarchy in
        [powstr.core.exceptions][powstr.core.exceptions].
"""

from .base_service import BaseService, BaseServiceConfig, ConfigT
from .exceptions import (
    ConfigurationError,
    ConnectivityError,
    PowstrError,
    PublishingError,
    RelayTimeoutError,
)
from .logger import Logger, StructuredFormatter, format_kv_pairs, setup_logging
from .metrics import (
    MINING_DURATION_SECONDS,
    SERVICE_COUNTER,
    SERVICE_GAUGE,
    SERVICE_INFO,
    MetricsConfig,
    MetricsServer,
    start_metrics_server,
)
from .yaml import load_yaml


__all__ = [
    "MINING_DURATION_SECONDS",
    "SERVICE_COUNTER",
    "SERVICE_GAUGE",
    "SERVICE_INFO",
    "BaseService",
    "BaseServiceConfig",
    "ConfigT",
    "ConfigurationError",
    "ConnectivityError",
    "Logger",
    "MetricsConfig",
    "MetricsServer",
    "PowstrError",
    "PublishingError",
    "RelayTimeoutError",
    "StructuredFormatter",
    "format_kv_pairs",
    "load_yaml",
    "setup_logging",
    "start_metrics_server",
]
