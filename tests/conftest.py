from datetime import datetime
import pytest
from fastapi.testclient import TestClient
from inventory_dashboard.main import create_app
from inventory_dashboard.scripts.seed_data import seed
from inventory_dashboard.services.inventory_store import InventoryStore


class FakeClock:
    """Callable clock that tests can move by assigning .now"""
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 6, 15, 10, 30))


@pytest.fixture
def empty_store(clock):
    return InventoryStore(clock=clock)


@pytest.fixture
def store(clock):
    """Fresh store with the demo seed data for every test."""
    return seed(InventoryStore(clock=clock), now=clock.now)


@pytest.fixture
def client(store):
    return TestClient(create_app(store))


@pytest.fixture
def supplier_data():
    return {
        "name": "Northwind Traders",
        "email": "buyers@northwind.com",
        "category": "Groceries",
        "contact_person": "Nancy Davolio",
    }


@pytest.fixture
def product_data():
    return {
        "name": "USB-C Cable 2m",
        "sku": "USB-004",
        "cost_price": 3.25,
        "selling_price": 9.99,
        "stock_level": 40,
        "min_stock_level": 15,
        "supplier_id": "1",
        "category": "Electronics",
    }
