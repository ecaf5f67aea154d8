import pytest

from testsuites.ui_testing.framework.conditions import Deadline
from testsuites.ui_testing.framework.element_actions import ActionExecutor
from testsuites.ui_testing.framework.settings import UiSettings
from testsuites.ui_testing.framework.waiter import Waiter

from .fakes import FakeDriver, SwagLabsSimulator


@pytest.fixture
def driver():
    return FakeDriver(title="Swag Labs")


@pytest.fixture
def fast_deadline():
    return Deadline(timeout_ms=200, poll_interval_ms=10)


@pytest.fixture
def waiter(driver, fast_deadline):
    return Waiter(driver, fast_deadline)


@pytest.fixture
def actions(driver, waiter):
    return ActionExecutor(driver, waiter)


@pytest.fixture
def settings(tmp_path):
    return UiSettings(
        base_url="https://shop.test/",
        default_timeout_ms=300,
        poll_interval_ms=10,
        interstitial_timeout_ms=50,
        retry_attempts=3,
        retry_backoff_ms=10,
        screenshot_dir=tmp_path / "screenshots",
    )


@pytest.fixture
def shop(driver):
    return SwagLabsSimulator(driver)
