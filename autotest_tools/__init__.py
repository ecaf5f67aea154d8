"""
================================================================================
Autotest Tools
================================================================================

Shared utilities for the UI automation suite.

Modules:
    - common: Logging setup and small helpers
    - report_tools: Allure attachment helpers and run summaries

Example:
    from autotest_tools.common import init_logger
    from autotest_tools.report_tools.allure_utils import attach_png

    init_logger(level="debug")
    attach_png(png_bytes, name="inventory")

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "report_tools",
]
