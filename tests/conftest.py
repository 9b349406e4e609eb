"""Root test configuration."""

import logging

import pytest
import structlog
from converge.config import get_settings
from converge.events import EventDispatcher
from converge.node import CookbookCollection, Node
from converge.resources import Resource
from converge.run_context import RunContext


def pytest_configure(config):
    """Configure structlog for tests to suppress debug/info output."""
    logging.basicConfig(level=logging.WARNING, force=True)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """Keep CONVERGE_* variables from the outer environment out of tests."""
    monkeypatch.delenv("CONVERGE_WHY_RUN", raising=False)
    monkeypatch.delenv("CONVERGE_LOG_LEVEL", raising=False)
    monkeypatch.delenv("CONVERGE_LOG_FORMAT", raising=False)
    monkeypatch.delenv("CONVERGE_SHELL_TIMEOUT", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def node():
    return Node(name="latte")


@pytest.fixture
def cookbook_collection():
    return CookbookCollection([])


@pytest.fixture
def events():
    return EventDispatcher()


@pytest.fixture
def run_context(node, cookbook_collection, events):
    return RunContext(node, cookbook_collection, events)


@pytest.fixture
def resource(run_context):
    return Resource("funk", run_context, cookbook_name="a_delicious_pie")
