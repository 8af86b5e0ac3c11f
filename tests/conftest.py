"""Pytest configuration and fixtures."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from pwreport.bundle import open_bundle
from pwreport.core.config import get_settings
from pwreport.parser import ReportParser
from tests.factories import write_sample_bundle

if TYPE_CHECKING:
    from collections.abc import Generator
    from pathlib import Path


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Settings are cached per process; isolate tests that change env vars."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sample_bundle(tmp_path: Path) -> Path:
    """Path to index.html of the sample report (see write_sample_bundle)."""
    return write_sample_bundle(tmp_path / "playwright-report")


@pytest.fixture
def parser(sample_bundle: Path) -> ReportParser:
    """Sample report opened synchronously, safe to share with async tests."""
    return ReportParser(sample_bundle, open_bundle(sample_bundle.read_text(encoding="utf-8")))
