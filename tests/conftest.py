"""
Pytest configuration and fixtures for factory-ops tests

This module provides shared fixtures for unit and integration tests.
"""
from datetime import date, timedelta
from typing import Generator

import pytest
from testcontainers.postgres import PostgresContainer

from factory_ops.core.models import DataKind, InventoryItem, ProductionRecord
from factory_ops.warehouse import InMemoryCollectionStore


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require external services"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that require Docker containers"
    )
    config.addinivalue_line(
        "markers", "slow: Tests that take more than 5 seconds to run"
    )


# =======================
# STORE FIXTURES
# =======================

@pytest.fixture(scope="function")
def memory_store() -> InMemoryCollectionStore:
    """Empty in-memory collection store"""
    return InMemoryCollectionStore()


# =======================
# RECORD FIXTURES
# =======================

@pytest.fixture
def make_production():
    """
    Build consecutive daily production records from a list of quantities

    Returns:
        Callable(quantities, waste=None, start=date(2025, 9, 1)) -> list[ProductionRecord]
    """
    def _make(quantities, waste=None, start=date(2025, 9, 1), product_type="Standard Shutter"):
        waste = waste if waste is not None else [0.0] * len(quantities)
        return [
            ProductionRecord(
                date=start + timedelta(days=offset),
                product_type=product_type,
                quantity=quantity,
                target=200,
                waste_kg=waste_kg,
            )
            for offset, (quantity, waste_kg) in enumerate(zip(quantities, waste))
        ]

    return _make


@pytest.fixture
def paint_item() -> InventoryItem:
    """Paint at 40L against a 100L minimum"""
    return InventoryItem(
        item_name="Paint",
        stock_kg=40,
        min_stock_kg=100,
        unit="L",
        last_updated="2025-10-01T08:00:00Z",
    )


@pytest.fixture
def aluminum_item() -> InventoryItem:
    """Well-stocked material that triggers nothing"""
    return InventoryItem(
        item_name="Aluminum Sheets",
        stock_kg=1200,
        min_stock_kg=500,
        last_updated="2025-10-01T08:00:00Z",
    )


# =======================
# FILE FIXTURES
# =======================

@pytest.fixture
def write_file(tmp_path):
    """
    Write text to a file under tmp_path

    Returns:
        Callable(name, text) -> Path
    """
    def _write(name: str, text: str):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


# =======================
# DATABASE FIXTURES (Testcontainers)
# =======================

@pytest.fixture(scope="session")
def postgres_container() -> Generator[PostgresContainer, None, None]:
    """
    Start PostgreSQL container for integration tests

    Yields:
        PostgresContainer instance
    """
    with PostgresContainer(
        image="postgres:16.2-alpine",
        username="test_factory",
        password="test_password",
        dbname="test_factory_ops",
    ) as postgres:
        yield postgres


@pytest.fixture(scope="session")
def postgres_conninfo(postgres_container) -> str:
    """libpq connection string for the test container"""
    return (
        f"host={postgres_container.get_container_host_ip()} "
        f"port={postgres_container.get_exposed_port(5432)} "
        f"dbname={postgres_container.dbname} "
        f"user={postgres_container.username} "
        f"password={postgres_container.password}"
    )


@pytest.fixture(scope="function")
def postgres_store(postgres_conninfo):
    """
    PostgresCollectionStore on clean tables

    Yields:
        PostgresCollectionStore with every collection and the batch table empty
    """
    from factory_ops.warehouse.connection import DatabaseConnectionPool
    from factory_ops.warehouse.postgres_store import BATCH_TABLE, PostgresCollectionStore

    pool = DatabaseConnectionPool(conninfo=postgres_conninfo, max_size=2)
    pool.open()
    store = PostgresCollectionStore(pool)
    store.ensure_schema()

    tables = ", ".join([kind.value for kind in DataKind] + [BATCH_TABLE])
    pool.execute(f"TRUNCATE TABLE {tables} RESTART IDENTITY")

    yield store

    pool.close()
