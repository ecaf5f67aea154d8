"""
================================================================================
Login Feature UI Tests (Async / Playwright)
================================================================================

End-to-end login against the live Swag Labs shop:
  - valid credentials land on the inventory under a "Swag Labs" title
  - invalid and locked-out credentials fail with the shop's error banner

================================================================================
"""

import allure
import pytest

from testsuites.ui_testing.framework.flow import FlowState
from testsuites.ui_testing.pages.login_page import LoginPage

pytestmark = [pytest.mark.e2e, pytest.mark.ui, pytest.mark.auth]


@allure.epic("UI Testing")
@allure.feature("Authentication")
class TestLogin:
    """Login UI test suite (async)."""

    @allure.story("Happy Path")
    @allure.title("Login succeeds with valid credentials")
    @allure.severity(allure.severity_level.BLOCKER)
    @pytest.mark.P0
    @pytest.mark.smoke
    async def test_login_success(self, login_page: LoginPage, test_data):
        """Verify user can login and reach the inventory."""
        user = test_data["valid_user"]

        with allure.step("Open login page"):
            await login_page.open()

        with allure.step("Login"):
            flow = await login_page.login(user["username"], user["password"])

        with allure.step("Verify flow confirmed and title"):
            assert flow.state is FlowState.CONFIRMED, flow.diagnostics()
            assert "Swag Labs" in await login_page.driver.current_title()

    @allure.story("Negative Path")
    @allure.title("Login fails with invalid credentials")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P0
    @pytest.mark.smoke
    async def test_login_invalid_credentials(self, login_page: LoginPage, test_data):
        """Verify invalid credential login fails and displays an error."""
        user = test_data["invalid_user"]

        await login_page.open()
        flow = await login_page.login(user["username"], user["password"])

        assert flow.state is FlowState.FAILED
        assert "Epic sadface" in flow.message
        assert "Epic sadface" in await login_page.get_error_message()

    @allure.story("Negative Path")
    @allure.title("Login fails for a locked out user")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P1
    @pytest.mark.regression
    async def test_login_locked_out_user(self, login_page: LoginPage, test_data):
        """Verify a locked out account is rejected with a reason."""
        user = test_data["locked_out_user"]

        await login_page.open()
        flow = await login_page.login(user["username"], user["password"])

        assert flow.failed
        assert "locked out" in flow.message

    @allure.story("Form Validation")
    @allure.title("Login fails with empty username")
    @allure.severity(allure.severity_level.NORMAL)
    @pytest.mark.P1
    @pytest.mark.regression
    async def test_login_empty_username(self, login_page: LoginPage, test_data):
        """Verify the form rejects a submission without a username."""
        user = test_data["valid_user"]

        await login_page.open()
        flow = await login_page.login("", user["password"])

        assert flow.failed
        assert "Username is required" in flow.message
