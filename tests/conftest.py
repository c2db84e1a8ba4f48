"""Shared pytest fixtures and configuration."""

from collections.abc import Iterator

import pytest

from hypertile.config import Settings
from hypertile.triangle import FundamentalTriangle, build_fundamental_triangle
from hypertile.utils.logging import clear_correlation_context


@pytest.fixture(autouse=True)
def reset_logging_context() -> Iterator[None]:
    """Reset correlation context between tests."""
    clear_correlation_context()
    yield
    clear_correlation_context()


@pytest.fixture
def test_settings() -> Settings:
    """Create a Settings instance with test-safe defaults."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        LOG_LEVEL="DEBUG",
        LOG_FORMAT="console",
        TILING_DEPTH=2,
        TILING_MAX_FACES=0,
    )


@pytest.fixture(scope="session")
def triangle_237() -> FundamentalTriangle:
    """The (2,3,7) hyperbolic fundamental triangle."""
    return build_fundamental_triangle(2, 3, 7)
