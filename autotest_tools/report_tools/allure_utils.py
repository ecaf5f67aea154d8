"""
================================================================================
Allure Report Utilities
================================================================================

This module provides utilities for enhancing Allure test reports with
screenshots and flow diagnostics, and for summarising a finished run.

Features:
- Screenshot / text / JSON attachment helpers
- Failed-flow diagnostics attachment
- Result summary (total / passed / failed) from allure-results
- HTML report generation through the Allure CLI

================================================================================
"""

import json
import subprocess
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

import allure
from loguru import logger


# ================================================================================
# Attachment Helpers
# ================================================================================

def attach_json(data: Any, name: str = "Data"):
    """
    Attach JSON data to Allure report.

    Args:
        data: Data to attach (will be JSON serialized)
        name: Attachment name
    """
    json_str = json.dumps(data, indent=2, default=str)
    allure.attach(
        json_str,
        name=name,
        attachment_type=allure.attachment_type.JSON
    )


def attach_text(text: str, name: str = "Text"):
    """
    Attach text content to Allure report.

    Args:
        text: Text to attach
        name: Attachment name
    """
    allure.attach(
        text,
        name=name,
        attachment_type=allure.attachment_type.TEXT
    )


def attach_png(png: bytes, name: str = "Screenshot"):
    """
    Attach a PNG screenshot to Allure report.

    Args:
        png: Screenshot bytes
        name: Attachment name
    """
    allure.attach(
        png,
        name=name,
        attachment_type=allure.attachment_type.PNG
    )


def attach_flow(flow: Any, name: Optional[str] = None):
    """
    Attach the diagnostics of a page flow (state, failing locator/condition,
    elapsed time, page message).

    Args:
        flow: Flow object from the UI framework
        name: Attachment name (defaults to the flow name)
    """
    result = flow.result
    attach_json(
        {
            "flow": flow.name,
            "state": flow.state.value,
            "elapsed_ms": round(flow.elapsed_ms),
            "result": result.kind.value if result is not None else None,
            "locator": str(result.locator) if result is not None and result.locator else None,
            "condition": result.condition.describe() if result is not None and result.condition else None,
            "cause": repr(result.cause) if result is not None and result.cause else None,
            "message": flow.message,
        },
        name=name or f"Flow: {flow.name}",
    )


# ================================================================================
# Report Processing
# ================================================================================

@dataclass
class TestResultSummary:
    """Summary of test execution results."""
    total: int = 0
    passed: int = 0
    failed: int = 0
    broken: int = 0
    skipped: int = 0
    unknown: int = 0
    duration_ms: int = 0
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    # Not a test class, despite the name
    __test__ = False

    @property
    def pass_rate(self) -> float:
        """Calculate pass rate percentage."""
        if self.total == 0:
            return 0.0
        return (self.passed / self.total) * 100

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "broken": self.broken,
            "skipped": self.skipped,
            "unknown": self.unknown,
            "pass_rate": f"{self.pass_rate:.2f}%",
            "duration_ms": self.duration_ms,
            "timestamp": self.timestamp,
        }


class AllureReportProcessor:
    """
    Reads Allure results and generates reports.

    Usage:
        processor = AllureReportProcessor(Path("reports/allure-results"))
        processor.log_summary()
        processor.generate_report()
    """

    def __init__(self, results_dir: Path, report_dir: Optional[Path] = None):
        """
        Initialize processor.

        Args:
            results_dir: Allure results directory
            report_dir: Output report directory
        """
        self.results_dir = Path(results_dir)
        self.report_dir = Path(report_dir or self.results_dir.parent / "allure-report")

    def parse_results(self) -> List[Dict[str, Any]]:
        """
        Parse Allure result files.

        Returns:
            List of test result dictionaries
        """
        results = []

        for result_file in self.results_dir.glob("*-result.json"):
            try:
                with open(result_file, encoding="utf-8") as f:
                    results.append(json.load(f))
            except (OSError, ValueError) as e:
                logger.warning(f"Failed to parse {result_file}: {e}")

        return results

    def generate_summary(self) -> TestResultSummary:
        """
        Generate summary from results.

        Returns:
            TestResultSummary object
        """
        summary = TestResultSummary()

        for result in self.parse_results():
            summary.total += 1
            status = result.get("status", "unknown")
            if status == "passed":
                summary.passed += 1
            elif status == "failed":
                summary.failed += 1
            elif status == "broken":
                summary.broken += 1
            elif status == "skipped":
                summary.skipped += 1
            else:
                summary.unknown += 1

            summary.duration_ms += result.get("stop", 0) - result.get("start", 0)

        return summary

    def generate_report(self) -> bool:
        """
        Generate Allure HTML report.

        Returns:
            True if successful
        """
        cmd = [
            "allure", "generate",
            str(self.results_dir),
            "-o", str(self.report_dir),
            "--clean"
        ]
        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except FileNotFoundError:
            logger.warning("Allure CLI not found. Please install Allure to generate reports.")
            return False

        if result.returncode != 0:
            logger.error(f"Report generation failed: {result.stderr}")
            return False

        logger.info(f"Report generated at {self.report_dir}")
        return True

    def log_summary(self) -> TestResultSummary:
        """Log the run summary and return it."""
        summary = self.generate_summary()

        logger.info("=" * 60)
        logger.info("TEST EXECUTION SUMMARY")
        logger.info("=" * 60)
        logger.info(f"Total Tests:    {summary.total}")
        logger.info(f"Passed:         {summary.passed} ✅")
        logger.info(f"Failed:         {summary.failed} ❌")
        logger.info(f"Broken:         {summary.broken} ⚠️")
        logger.info(f"Skipped:        {summary.skipped} ⏭️")
        logger.info(f"Pass Rate:      {summary.pass_rate:.2f}%")
        logger.info(f"Duration:       {summary.duration_ms / 1000:.2f}s")
        logger.info("=" * 60)

        return summary


__all__ = [
    "AllureReportProcessor",
    "TestResultSummary",
    "attach_flow",
    "attach_json",
    "attach_png",
    "attach_text",
]
