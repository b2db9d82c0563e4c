"""
Abstract base class for powstr services.

``BaseService[ConfigT]`` provides what every service shares: a typed
Pydantic configuration with YAML/dict factories, structured logging via
[Logger][powstr.core.logger.Logger], Prometheus metric helpers gated on
[MetricsConfig][powstr.core.metrics.MetricsConfig], and an async context
manager marking the service's active lifetime.

Relay access and publishing are injected as collaborators
([RelayQuery][powstr.services.common.types.RelayQuery],
[EventPublisher][powstr.services.common.types.EventPublisher]), so every
service can be exercised in tests with in-memory fakes.

See Also:
    [BaseServiceConfig][powstr.core.base_service.BaseServiceConfig]: Base
        configuration model for all services.
"""

from __future__ import annotations

from abc import ABC
from typing import TYPE_CHECKING, Any, ClassVar, Generic, Self, TypeVar, cast

from pydantic import BaseModel, Field

from .logger import Logger
from .metrics import SERVICE_COUNTER, SERVICE_GAUGE, SERVICE_INFO, MetricsConfig
from .yaml import load_yaml


if TYPE_CHECKING:
    from types import TracebackType

    from powstr.models.constants import ServiceName


# ---------------------------------------------------------------------------
# Base Configuration
# ---------------------------------------------------------------------------


class BaseServiceConfig(BaseModel):
    """Base configuration shared by all services.

    Subclass this to add service-specific fields.
    """

    metrics: MetricsConfig = Field(
        default_factory=MetricsConfig,
        description="Prometheus metrics configuration",
    )


# Bound TypeVar ensuring all service configs inherit from BaseServiceConfig
ConfigT = TypeVar("ConfigT", bound=BaseServiceConfig)


class BaseService(ABC, Generic[ConfigT]):
    """Abstract base class for all powstr services.

    Subclasses set ``SERVICE_NAME`` to a unique identifier and
    ``CONFIG_CLASS`` to their Pydantic config model. Extra constructor
    arguments (collaborators) are forwarded by the factories.

    Attributes:
        SERVICE_NAME: Service identifier used in logging and metric labels.
        CONFIG_CLASS: Pydantic model class used by the factory methods.
        _config: Typed service configuration (defaults from ``CONFIG_CLASS``).
        _logger: [Logger][powstr.core.logger.Logger] named ``powstr.<service>``.
    """

    SERVICE_NAME: ClassVar[ServiceName]
    CONFIG_CLASS: ClassVar[type[BaseServiceConfig]]

    def __init__(self, config: ConfigT | None = None) -> None:
        self._config: ConfigT = (
            config if config is not None else cast("ConfigT", self.CONFIG_CLASS())
        )
        self._logger = Logger(f"powstr.{self.SERVICE_NAME}")
        self._active = False

    @property
    def config(self) -> ConfigT:
        """The typed service configuration (read-only)."""
        return self._config

    @property
    def is_active(self) -> bool:
        """Whether the service is inside its ``async with`` block."""
        return self._active

    # -------------------------------------------------------------------------
    # Factory Methods
    # -------------------------------------------------------------------------

    @classmethod
    def from_yaml(cls, config_path: str, **kwargs: Any) -> Self:
        """Create a service from a YAML configuration file.

        Args:
            config_path: Path to the YAML file.
            **kwargs: Collaborators passed to the constructor.
        """
        return cls.from_dict(load_yaml(config_path), **kwargs)

    @classmethod
    def from_dict(cls, data: dict[str, Any], **kwargs: Any) -> Self:
        """Create a service from a configuration dictionary.

        Raises:
            pydantic.ValidationError: If *data* does not match ``CONFIG_CLASS``.
        """
        config = cast("ConfigT", cls.CONFIG_CLASS(**data))
        return cls(config=config, **kwargs)

    # -------------------------------------------------------------------------
    # Context Manager
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> Self:
        self._active = True
        if self._config.metrics.enabled:
            SERVICE_INFO.info({"service": str(self.SERVICE_NAME)})
        self._logger.info("service_started")
        return self

    async def __aexit__(
        self,
        _exc_type: type[BaseException] | None,
        _exc_val: BaseException | None,
        _exc_tb: TracebackType | None,
    ) -> None:
        self._active = False
        self._logger.info("service_stopped")

    # -------------------------------------------------------------------------
    # Custom Metrics
    # -------------------------------------------------------------------------

    def set_gauge(self, name: str, value: float) -> None:
        """Set a named gauge for this service; no-op when metrics are disabled."""
        if not self._config.metrics.enabled:
            return
        SERVICE_GAUGE.labels(service=self.SERVICE_NAME, name=name).set(value)

    def inc_counter(self, name: str, value: float = 1) -> None:
        """Increment a named counter for this service; no-op when metrics are disabled."""
        if not self._config.metrics.enabled:
            return
        SERVICE_COUNTER.labels(service=self.SERVICE_NAME, name=name).inc(value)
