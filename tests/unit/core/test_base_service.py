"""Unit tests for core.base_service module."""

from typing import ClassVar
from unittest.mock import MagicMock, patch

import pytest
from pydantic import Field, ValidationError

from powstr.core import BaseService, BaseServiceConfig, MetricsConfig


class DummyConfig(BaseServiceConfig):
    batch: int = Field(default=10, ge=1)


class DummyService(BaseService[DummyConfig]):
    SERVICE_NAME: ClassVar[str] = "dummy"
    CONFIG_CLASS: ClassVar[type[DummyConfig]] = DummyConfig

    def __init__(self, config: DummyConfig | None = None, *, relay: object = None) -> None:
        super().__init__(config=config)
        self.relay = relay


# ============================================================================
# Construction
# ============================================================================


class TestInit:
    """Configuration handling."""

    def test_default_config(self):
        service = DummyService()
        assert service.config.batch == 10
        assert service.config.metrics.enabled is False

    def test_custom_config(self):
        assert DummyService(DummyConfig(batch=3)).config.batch == 3

    def test_logger_name(self):
        assert DummyService()._logger.name == "powstr.dummy"

    def test_from_dict_forwards_collaborators(self):
        relay = object()
        service = DummyService.from_dict({"batch": 7}, relay=relay)
        assert service.config.batch == 7
        assert service.relay is relay

    def test_from_dict_invalid(self):
        with pytest.raises(ValidationError):
            DummyService.from_dict({"batch": 0})

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "dummy.yaml"
        path.write_text("batch: 4\nmetrics:\n  enabled: true\n")
        service = DummyService.from_yaml(str(path))
        assert service.config.batch == 4
        assert service.config.metrics.enabled is True


# ============================================================================
# Context Manager
# ============================================================================


class TestContextManager:
    """Active lifetime."""

    async def test_active_inside_block(self):
        service = DummyService()
        assert not service.is_active
        async with service as entered:
            assert entered is service
            assert service.is_active
        assert not service.is_active

    async def test_service_info_when_enabled(self):
        config = DummyConfig(metrics=MetricsConfig(enabled=True))
        with patch("powstr.core.base_service.SERVICE_INFO") as info:
            async with DummyService(config):
                pass
        info.info.assert_called_once_with({"service": "dummy"})


# ============================================================================
# Metrics
# ============================================================================


class TestMetrics:
    """Gauge and counter helpers."""

    def test_disabled_is_noop(self):
        service = DummyService()
        with (
            patch("powstr.core.base_service.SERVICE_GAUGE") as gauge,
            patch("powstr.core.base_service.SERVICE_COUNTER") as counter,
        ):
            service.set_gauge("x", 1)
            service.inc_counter("y")
        gauge.labels.assert_not_called()
        counter.labels.assert_not_called()

    def test_enabled_records(self):
        service = DummyService(DummyConfig(metrics=MetricsConfig(enabled=True)))
        gauge, counter = MagicMock(), MagicMock()
        with (
            patch("powstr.core.base_service.SERVICE_GAUGE", gauge),
            patch("powstr.core.base_service.SERVICE_COUNTER", counter),
        ):
            service.set_gauge("queue", 5)
            service.inc_counter("done", 2)

        gauge.labels.assert_called_once_with(service="dummy", name="queue")
        gauge.labels.return_value.set.assert_called_once_with(5)
        counter.labels.assert_called_once_with(service="dummy", name="done")
        counter.labels.return_value.inc.assert_called_once_with(2)
