from __future__ import annotations

import structlog

from cachebridge.infrastructure.config import AppConfig
from cachebridge.infrastructure.logging import build_logging_config, configure_logging


def _renderer(cfg: dict) -> object:
    return cfg["formatters"]["structlog"]["processors"][-1]


def test_json_renderer_in_prod() -> None:
    cfg = build_logging_config(AppConfig(environment="prod"))
    assert isinstance(_renderer(cfg), structlog.processors.JSONRenderer)


def test_console_renderer_in_dev() -> None:
    cfg = build_logging_config(AppConfig(environment="dev"))
    assert isinstance(_renderer(cfg), structlog.dev.ConsoleRenderer)


def test_log_level_applied_to_root_and_loggers() -> None:
    cfg = build_logging_config(AppConfig(log_level="DEBUG"))
    assert cfg["root"]["level"] == "DEBUG"
    assert cfg["loggers"]["cachebridge"]["level"] == "DEBUG"


def test_build_does_not_mutate_base_config() -> None:
    from cachebridge.infrastructure.logging.setup import BASE_LOGGING_CONFIG

    build_logging_config(AppConfig(log_level="ERROR"))
    assert BASE_LOGGING_CONFIG["loggers"]["cachebridge"]["level"] == "INFO"
    assert "formatters" not in BASE_LOGGING_CONFIG


def test_configure_logging_returns_applied_config() -> None:
    cfg = configure_logging(AppConfig(log_level="WARNING"))
    assert cfg["root"]["level"] == "WARNING"
