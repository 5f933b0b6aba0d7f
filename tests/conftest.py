"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from collections.abc import Callable, Generator, Sequence

import pytest
import structlog

from spcinsight.core.config import Settings, get_settings


def _build_records(
    values: Sequence[object], lsl: object = "5", usl: object = "15"
) -> list[dict[str, object]]:
    return [
        {"ActualSpecification": v, "FromSpecification": lsl, "ToSpecification": usl}
        for v in values
    ]


# Ten measurements, two full subgroups of five: means 11.2 and 11.6, ranges 3 and 3
SCENARIO_A = [10, 12, 11, 13, 10, 12, 11, 13, 10, 12]


@pytest.fixture
def make_records() -> Callable[..., list[dict[str, object]]]:
    """Factory for inspection-feed records sharing one pair of specification limits."""
    return _build_records


@pytest.fixture
def settings() -> Settings:
    """Default settings, independent of the environment."""
    return Settings(_env_file=None)


@pytest.fixture
def scenario_a_records() -> list[dict[str, object]]:
    return _build_records([str(v) for v in SCENARIO_A])


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Generator[None, None, None]:
    """Each test sees settings freshly read from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def log_output() -> Generator[list[dict], None, None]:
    """Capture structlog events emitted during a test."""
    with structlog.testing.capture_logs() as logs:
        yield logs
