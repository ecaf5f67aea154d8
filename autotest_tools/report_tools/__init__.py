"""Allure reporting helpers."""

from .allure_utils import (
    AllureReportProcessor,
    TestResultSummary,
    attach_flow,
    attach_json,
    attach_png,
    attach_text,
)

__all__ = [
    "AllureReportProcessor",
    "TestResultSummary",
    "attach_flow",
    "attach_json",
    "attach_png",
    "attach_text",
]
