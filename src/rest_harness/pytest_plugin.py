"""
Pytest plugin providing harness configuration and clients to test suites.

The environment is chosen with ``--config-env`` (or $HARNESS_CONFIG). Tests
marked ``live`` hit the public APIs named in that environment and only run
when ``--live`` is given.
"""

import logging

import pytest

from rest_harness.client import HttpClient
from rest_harness.config import ConfigException, load_config
from rest_harness.config.logging import bootstrap_logging

logger = logging.getLogger(__name__)


def pytest_addoption(parser):
    """Add custom command line options for pytest."""
    group = parser.getgroup('rest_harness')
    group.addoption(
        "--config-env",
        action="store",
        default=None,
        help="Harness environment to load (e.g., qa, local); defaults to $HARNESS_CONFIG or qa"
    )
    group.addoption(
        "--live",
        action="store_true",
        default=False,
        help="Run tests marked 'live' against the public APIs of the environment"
    )


def pytest_configure(config):
    """Register markers and bootstrap logging."""
    config.addinivalue_line(
        "markers", "live: test calls a real public API; skipped unless --live is given"
    )
    bootstrap_logging(__name__)


def pytest_collection_modifyitems(config, items):
    """Skip live tests unless --live was given."""
    if config.getoption("--live"):
        return
    skip_live = pytest.mark.skip(reason="live API test; run with --live")
    for item in items:
        if "live" in item.keywords:
            item.add_marker(skip_live)


def pytest_report_header(config):
    """Show which environment the session targets."""
    env_name = config.getoption("--config-env")
    try:
        harness = load_config(env_name)
    except ConfigException as e:
        return f"rest-harness: environment unavailable ({e})"
    target = harness.base_url
    if harness.base_url2:
        target += f", {harness.base_url2}"
    return f"rest-harness: env={harness.env} target={target} live={config.getoption('--live')}"


@pytest.fixture(scope="session")
def harness_config(request):
    """The HarnessConfig selected for this session."""
    try:
        return load_config(request.config.getoption("--config-env"))
    except ConfigException as e:
        pytest.fail(f"Could not load harness configuration:{e.guidance}")


@pytest.fixture(scope="session")
def api_client(harness_config):
    """HttpClient bound to the environment's primary base URL."""
    logger.info(f"Running tests against: {harness_config.base_url}")
    with HttpClient.from_config(harness_config.client_config()) as client:
        yield client


@pytest.fixture(scope="session")
def alt_api_client(harness_config):
    """HttpClient bound to the environment's secondary base URL (baseURL2)."""
    if harness_config.base_url2 is None:
        pytest.skip(f"Environment '{harness_config.env}' has no baseURL2")
    logger.info(f"Running tests against: {harness_config.base_url2}")
    with HttpClient.from_config(harness_config.client_config(secondary=True)) as client:
        yield client
