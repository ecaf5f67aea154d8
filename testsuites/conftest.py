"""
================================================================================
Root Pytest Configuration
================================================================================

This module provides the root pytest configuration for the entire test suite.
It registers common markers and tags tests by directory.

================================================================================
"""

import os

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests against a real browser and the live shop"
    )
    config.addinivalue_line(
        "markers", "unit: Framework tests against the in-memory fake driver"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "ui: UI-specific tests"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "auth: Tests related to login"
    )
    config.addinivalue_line(
        "markers", "cart: Tests related to the shopping cart"
    )


def pytest_collection_modifyitems(config, items):
    """
    Modify collected test items.

    Adds the suite markers from the directory a test lives in.
    """
    for item in items:
        path = str(item.fspath)

        # Auto-add 'ui' and 'e2e' markers to tests in the ui_testing directory
        if "ui_testing" in path:
            item.add_marker(pytest.mark.ui)
            item.add_marker(pytest.mark.e2e)

        # Auto-add 'unit' marker to tests in the unit directory
        if os.path.join("testsuites", "unit") in path:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "Swag Labs UI Automation",
        "=" * 60,
        "",
    ]
