import json
from datetime import datetime

import pytest

from autotest_tools.common import add_timestamp, init_logger
from autotest_tools.report_tools.allure_utils import AllureReportProcessor, TestResultSummary


def test_add_timestamp_is_filesystem_safe():
    stamped = add_timestamp("checkout", datetime(2024, 1, 2, 3, 4, 5, 600))

    assert stamped == "checkout_2024-01-02T03-04-05-000600"
    assert ":" not in add_timestamp("now")


def test_init_logger_levels(tmp_path):
    assert init_logger("warn", force=True) == "WARNING"
    assert init_logger("debug", log_file=str(tmp_path / "logs" / "ui.log"), force=True) == "DEBUG"
    assert (tmp_path / "logs").is_dir()

    with pytest.raises(ValueError):
        init_logger("verbose", force=True)

    init_logger("info", force=True)


def test_result_summary_from_allure_results(tmp_path):
    statuses = ["passed", "passed", "failed", "broken", "skipped"]
    for i, status in enumerate(statuses):
        (tmp_path / f"{i}-result.json").write_text(
            json.dumps({"status": status, "start": 1000, "stop": 1250}), encoding="utf-8"
        )
    (tmp_path / "garbage-result.json").write_text("{not json", encoding="utf-8")

    summary = AllureReportProcessor(tmp_path).generate_summary()

    assert summary.total == 5
    assert summary.passed == 2
    assert summary.failed == 1
    assert summary.broken == 1
    assert summary.skipped == 1
    assert summary.duration_ms == 1250
    assert summary.to_dict()["pass_rate"] == "40.00%"


def test_empty_summary():
    assert TestResultSummary().pass_rate == 0.0
