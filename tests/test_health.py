import importlib
import pytest
from unittest.mock import patch
from fastapi.testclient import TestClient
from inventory_dashboard import main
from inventory_dashboard.main import create_app


@pytest.mark.asyncio
async def test_health_endpoint(store):
    """Test health endpoint"""
    client = TestClient(create_app(store))
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_default_app_is_seeded():
    """An app built without a store owns a seeded one with an admin user and no notifications"""
    store = create_app().state.store

    assert store.total_products == 3
    assert store.get_notifications() == []
    assert store.get_current_user().role.value == "admin"


def test_each_app_owns_its_store():
    assert create_app().state.store is not create_app().state.store


def test_import_has_no_side_effects():
    """Importing the module neither builds an app nor configures logging"""
    with patch("logging.basicConfig") as mock_basic_config:
        module = importlib.reload(main)

    mock_basic_config.assert_not_called()
    assert not hasattr(module, "app")


def test_run_serves_app_factory():
    with patch("inventory_dashboard.main.uvicorn.run") as mock_run, \
            patch("inventory_dashboard.main.logging.basicConfig") as mock_basic_config:
        main.run()

    mock_basic_config.assert_called_once()
    args, kwargs = mock_run.call_args
    assert args == ("inventory_dashboard.main:create_app",)
    assert kwargs["factory"] is True
