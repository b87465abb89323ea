from fastapi import Request
from inventory_dashboard.services.inventory_store import InventoryStore


def get_store(request: Request) -> InventoryStore:
    """Returns the store owned by the application (set up in create_app)."""
    return request.app.state.store
