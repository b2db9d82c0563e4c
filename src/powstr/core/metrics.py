"""
Prometheus metrics collection and HTTP exposition.

Module-level metric objects (singletons, thread-safe) shared by every
service. Services record through
[set_gauge()][powstr.core.base_service.BaseService.set_gauge] and
[inc_counter()][powstr.core.base_service.BaseService.inc_counter]; the
miner service observes ``MINING_DURATION_SECONDS`` directly. Nothing is
recorded unless ``metrics.enabled`` is set.

Architecture:
    SERVICE_INFO:               Static metadata set when a service starts.
    SERVICE_GAUGE:              Point-in-time values (current state).
    SERVICE_COUNTER:            Cumulative totals (monotonically increasing).
    MINING_DURATION_SECONDS:    Histogram of mining run durations.

The [MetricsServer][powstr.core.metrics.MetricsServer] serves the registry
over aiohttp for Prometheus scraping.
"""

from __future__ import annotations

from aiohttp import web
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    Gauge,
    Histogram,
    Info,
    generate_latest,
)
from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class MetricsConfig(BaseModel):
    """Configuration for the Prometheus metrics endpoint.

    The endpoint is only started, and metrics only recorded, when
    ``enabled`` is True.
    """

    enabled: bool = Field(default=False, description="Enable metrics collection")
    port: int = Field(default=8000, ge=1024, le=65535, description="Metrics HTTP port")
    host: str = Field(default="127.0.0.1", description="Metrics HTTP bind address")
    path: str = Field(default="/metrics", description="Metrics endpoint path")


# ---------------------------------------------------------------------------
# Metrics
# ---------------------------------------------------------------------------

SERVICE_INFO = Info(
    "powstr_service",
    "Service information and metadata",
)

# Mining runs range from milliseconds (low targets) to many minutes
MINING_DURATION_SECONDS = Histogram(
    "powstr_mining_duration_seconds",
    "Duration of proof-of-work mining runs in seconds",
    ["service", "state"],
    buckets=(0.01, 0.1, 0.5, 1, 5, 10, 30, 60, 300, 900),
)

# Labels by service:
#   comments: counter threads_fetched, comments_posted; gauge thread_comments
#   feed:     counter feeds_fetched; gauge feed_notes
#   miner:    counter mining_found, mining_exhausted, mining_aborted, notes_published;
#             gauge mining_attempts
SERVICE_GAUGE = Gauge(
    "powstr_service_gauge",
    "Service gauge values (point-in-time state)",
    ["service", "name"],
)

SERVICE_COUNTER = Counter(
    "powstr_service_counter",
    "Service counter values (cumulative totals)",
    ["service", "name"],
)


# ---------------------------------------------------------------------------
# HTTP Server
# ---------------------------------------------------------------------------


class MetricsServer:
    """Async HTTP server exposing a Prometheus-compatible metrics endpoint.

    Examples:
        ```python
        server = MetricsServer(MetricsConfig(enabled=True, port=8001))
        await server.start()
        # ... mine, fetch ...
        await server.stop()
        ```
    """

    def __init__(self, config: MetricsConfig) -> None:
        self._config = config
        self._runner: web.AppRunner | None = None

    @property
    def running(self) -> bool:
        return self._runner is not None

    async def start(self) -> None:
        """Bind the endpoint; a no-op when metrics are disabled.

        Raises:
            OSError: If the port is already in use or binding fails.
        """
        if not self._config.enabled or self._runner is not None:
            return

        app = web.Application()
        app.router.add_get(self._config.path, self._handle_metrics)

        runner = web.AppRunner(app, access_log=None)
        await runner.setup()
        site = web.TCPSite(runner, self._config.host, self._config.port)
        await site.start()
        self._runner = runner

    async def stop(self) -> None:
        """Release the bound port. Safe to call more than once."""
        if self._runner is not None:
            await self._runner.cleanup()
            self._runner = None

    @staticmethod
    async def _handle_metrics(_request: web.Request) -> web.Response:
        return web.Response(
            body=generate_latest(),
            headers={"Content-Type": CONTENT_TYPE_LATEST},
        )


async def start_metrics_server(config: MetricsConfig | None = None) -> MetricsServer:
    """Create and start a [MetricsServer][powstr.core.metrics.MetricsServer].

    The caller should call ``stop()`` during shutdown.
    """
    server = MetricsServer(config or MetricsConfig())
    await server.start()
    return server
