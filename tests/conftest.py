"""Pytest configuration and fixtures for doclog tests."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Generator

import pytest
from prometheus_client import CollectorRegistry

from doclog.application import DocumentStore
from doclog.infrastructure.config import Config, QueryConfig, StorageConfig
from doclog.infrastructure.metrics import MetricsRegistry


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def log_path(temp_dir: Path) -> Path:
    """Provide the path of a log file inside the temporary directory."""
    return temp_dir / "data" / "records.log"


@pytest.fixture
def test_config() -> Config:
    """Provide a test configuration."""
    return Config(
        storage=StorageConfig(sync_mode="none", create_if_missing=True),
        query=QueryConfig(strict=False),
    )


@pytest.fixture
def metrics_registry() -> MetricsRegistry:
    """Provide a fresh metrics registry for each test."""
    # Use a separate registry to avoid conflicts between tests
    registry = CollectorRegistry(auto_describe=True)
    return MetricsRegistry(registry=registry)


@pytest.fixture
def store(
    log_path: Path, test_config: Config, metrics_registry: MetricsRegistry
) -> DocumentStore:
    """Provide a store with ``notes`` as its full-text field."""
    return DocumentStore(
        log_path,
        full_text_fields=["notes"],
        config=test_config,
        metrics=metrics_registry,
    )


# Markers for test categories
def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
