"""
UI run settings.

Typed, validated view over the `ui`, `retry` and `logging` configuration
sections. Built once per test case and handed to page objects explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from .conditions import Deadline
from .config_loader import ConfigLoader, ConfigurationError
from .retry import RetryPolicy


LOG_LEVELS = ("debug", "info", "warn", "error")

BROWSERS = ("chromium", "firefox", "webkit")

ENGINES = ("playwright", "selenium")


@dataclass(frozen=True)
class UiSettings:
    """
    Attributes:
        base_url: Application under test
        headless: Run the browser without a window
        browser: chromium, firefox or webkit
        engine: playwright, or selenium (Chrome only)
        implicit_wait_ms: Default timeout for raw driver calls
        default_timeout_ms: Default explicit wait timeout
        poll_interval_ms: Waiter poll interval
        interstitial_timeout_ms: Detection timeout per interstitial rule
        startup_timeout_ms: Browser launch timeout
        retry_attempts: Attempts for flaky reads
        retry_backoff_ms: Constant delay between those attempts
        log_level: debug, info, warn or error
        log_file: Optional log file
        screenshot_dir: Where screenshots are written
    """

    base_url: str = "https://www.saucedemo.com/"
    headless: bool = True
    browser: str = "chromium"
    engine: str = "playwright"
    implicit_wait_ms: int = 5000
    default_timeout_ms: int = 10000
    poll_interval_ms: int = 100
    interstitial_timeout_ms: int = 1000
    startup_timeout_ms: int = 30000
    retry_attempts: int = 3
    retry_backoff_ms: int = 500
    log_level: str = "info"
    log_file: Optional[str] = None
    screenshot_dir: Path = Path("reports/screenshots")

    def __post_init__(self) -> None:
        if not self.base_url:
            raise ConfigurationError("ui.base_url must not be empty")
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError(
                f"logging.level must be one of {LOG_LEVELS}, got {self.log_level!r}"
            )
        if self.browser not in BROWSERS:
            raise ConfigurationError(
                f"ui.browser must be one of {BROWSERS}, got {self.browser!r}"
            )
        if self.engine not in ENGINES:
            raise ConfigurationError(
                f"ui.engine must be one of {ENGINES}, got {self.engine!r}"
            )
        if self.engine == "selenium" and self.browser != "chromium":
            raise ConfigurationError("ui.engine selenium drives chromium (Chrome) only")
        for name in (
            "implicit_wait_ms",
            "default_timeout_ms",
            "poll_interval_ms",
            "interstitial_timeout_ms",
            "startup_timeout_ms",
            "retry_attempts",
        ):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be > 0, got {getattr(self, name)}")
        if self.retry_backoff_ms < 0:
            raise ConfigurationError(f"retry_backoff_ms must be >= 0, got {self.retry_backoff_ms}")
        if self.poll_interval_ms > min(self.default_timeout_ms, self.interstitial_timeout_ms):
            raise ConfigurationError(
                "poll_interval_ms must not exceed default_timeout_ms or interstitial_timeout_ms"
            )

    @classmethod
    def load(cls, loader: Optional[ConfigLoader] = None) -> "UiSettings":
        """Build settings from a ConfigLoader (a fresh default one if omitted)."""
        loader = loader or ConfigLoader()
        defaults = cls()

        def _int(key: str, default: int) -> int:
            value = loader.get(key, default)
            try:
                return int(value)
            except (TypeError, ValueError) as e:
                raise ConfigurationError(f"{key} must be an integer, got {value!r}") from e

        def _bool(key: str, default: bool) -> bool:
            value: Any = loader.get(key, default)
            if isinstance(value, str):
                return value.lower() in ("true", "1", "yes", "on")
            return bool(value)

        log_file = loader.get("logging.file", defaults.log_file)
        return cls(
            base_url=str(loader.get("ui.base_url", defaults.base_url)),
            headless=_bool("ui.headless", defaults.headless),
            browser=str(loader.get("ui.browser", defaults.browser)).lower(),
            engine=str(loader.get("ui.engine", defaults.engine)).lower(),
            implicit_wait_ms=_int("ui.implicit_wait_ms", defaults.implicit_wait_ms),
            default_timeout_ms=_int("ui.default_timeout_ms", defaults.default_timeout_ms),
            poll_interval_ms=_int("ui.poll_interval_ms", defaults.poll_interval_ms),
            interstitial_timeout_ms=_int("ui.interstitial_timeout_ms", defaults.interstitial_timeout_ms),
            startup_timeout_ms=_int("ui.startup_timeout_ms", defaults.startup_timeout_ms),
            retry_attempts=_int("retry.max_attempts", defaults.retry_attempts),
            retry_backoff_ms=_int("retry.backoff_ms", defaults.retry_backoff_ms),
            log_level=str(loader.get("logging.level", defaults.log_level)).lower(),
            log_file=str(log_file) if log_file else None,
            screenshot_dir=Path(loader.get("ui.screenshot_dir", str(defaults.screenshot_dir))),
        )

    def default_deadline(self, timeout_ms: Optional[int] = None) -> Deadline:
        """Deadline from the configured timeout/poll interval, optionally overridden."""
        if timeout_ms is None:
            timeout_ms = self.default_timeout_ms
        return Deadline(timeout_ms, min(self.poll_interval_ms, timeout_ms))

    def retry_policy(self) -> RetryPolicy:
        return RetryPolicy(max_attempts=self.retry_attempts, backoff_ms=self.retry_backoff_ms)


__all__ = [
    "BROWSERS",
    "ENGINES",
    "LOG_LEVELS",
    "UiSettings",
]
