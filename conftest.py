"""
Repository-level pytest configuration.

Why this exists:
  - Provide the public demo credentials of the Swag Labs shop as defaults
  - Keep behavior explicit and discoverable

Important:
  The values below are the demo shop's published test accounts, not secrets.
  Everything else (base URL, timeouts, headless, ...) comes from
  testsuites/config/config.yaml and its environment overrides.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _demo_safe_env_defaults() -> Generator[None, None, None]:
    """
    Set demo credentials if not already provided by the user/CI.
    """
    defaults = {
        "UI_USERNAME": "standard_user",
        "UI_PASSWORD": "secret_sauce",
    }

    for k, v in defaults.items():
        os.environ.setdefault(k, v)

    yield
