"""
Pytest configuration and fixtures for logtree tests
"""

from typing import Tuple

import pytest

from logtree.core.config.settings import Settings
from logtree.encoding.encoder import Encoder
from logtree.encoding.registry import TypeRegistry
from logtree.logger import Logger, make
from logtree.sinks.capture import CaptureSink


@pytest.fixture
def test_settings() -> Settings:
    """Settings independent of the environment"""
    return Settings(
        LOG_LEVEL="DEBUG",
        LOG_FORMAT="human",
        FORCE_COLOR=False,
        DIAGNOSTICS_LEVEL="WARNING",
        DIAGNOSTICS_FORMAT="text",
    )


@pytest.fixture
def registry() -> TypeRegistry:
    """A registry isolated from the default one"""
    return TypeRegistry()


@pytest.fixture
def encoder(registry: TypeRegistry) -> Encoder:
    """An encoder using the isolated registry"""
    return Encoder(registry=registry)


@pytest.fixture
def capture() -> CaptureSink:
    return CaptureSink()


@pytest.fixture
def captured_logger(capture: CaptureSink) -> Tuple[Logger, CaptureSink]:
    """A logger writing to a capture sink"""
    return make(capture), capture


@pytest.fixture(autouse=True)
def no_force_color(monkeypatch):
    """Keep FORCE_COLOR from the environment out of sink tests"""
    monkeypatch.delenv("FORCE_COLOR", raising=False)
