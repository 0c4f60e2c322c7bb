"""Configuration for integration tests."""

import pytest


def pytest_configure(config):
    """Add integration markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as exercising the full client stack"
    )
    config.addinivalue_line(
        "markers", "ci_safe: integration test that stubs the API and always runs"
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless ``--integration`` is given.

    Tests marked ``ci_safe`` always run: they talk to an in-process fake API
    through :class:`httpx.MockTransport` and need no network.
    """
    if config.getoption("--integration", default=False):
        return
    skip_integration = pytest.mark.skip(reason="Need --integration option to run")
    for item in items:
        if "integration" in item.keywords and "ci_safe" not in item.keywords:
            item.add_marker(skip_integration)
