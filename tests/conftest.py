"""
Pytest configuration for serialbench.

Provides fixtures for:
- The sample dataset and its plain-dict payload
- The Employees schema descriptor
- Settings isolation for CLI tests
"""

from __future__ import annotations

import copy
from typing import Any, Dict, Generator

import pytest

from serialbench.config import Settings, get_settings
from serialbench.domain import EmployeeCollection, build_sample_dataset
from serialbench.infrastructure.schema import SchemaDescriptor, load_schema


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.
    """
    return Settings(log_level="DEBUG", benchmark_runs=1)


@pytest.fixture(scope="session")
def employee_schema() -> SchemaDescriptor:
    return load_schema("Employees")


@pytest.fixture
def dataset() -> EmployeeCollection:
    return build_sample_dataset()


@pytest.fixture
def payload(dataset: EmployeeCollection) -> Dict[str, Any]:
    """Fresh plain-dict root object; safe to mutate per test."""
    return copy.deepcopy(dataset.to_payload())


@pytest.fixture
def clean_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """
    Clear cached settings and env overrides so each CLI test starts from defaults.
    """
    for name in (
        "OUTPUT_DIR",
        "SCHEMA_NAME",
        "LOG_LEVEL",
        "JSON_LOGS",
        "BENCHMARK_RUNS",
        "BENCHMARK_WARMUP",
        "TRACE_ALLOCATIONS",
        "PERSIST_RESULTS",
        "RESULTS_DIR",
        "JSON_INDENT",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
