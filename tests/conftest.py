"""Shared test fixtures."""

import pytest

from config.settings import Settings


@pytest.fixture
def test_settings() -> Settings:
    """Tight timeouts so slow-source tests finish fast."""
    return Settings(
        fetch_timeout_sec=0.2,
        http_max_retries=1,
        markdown_dialect="strict",
        validation_predicate="core",
        require_reference_link=False,
    )
