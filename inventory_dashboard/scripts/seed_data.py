# scripts/seed_data.py
import logging
from datetime import datetime
from typing import Optional
from inventory_dashboard.models import (
    ActivityLog,
    Order,
    OrderStatus,
    OrderType,
    Product,
    Supplier,
)
from inventory_dashboard.services.inventory_store import InventoryStore

log = logging.getLogger("seed_data")


def seed(store: InventoryStore, now: Optional[datetime] = None) -> InventoryStore:
    """Loads the demo suppliers, products, order and activity log. No notifications are created."""
    now = now or datetime.now()

    suppliers = [
        Supplier(
            id="1", created_at=now, name="TechCorp Electronics", email="orders@techcorp.com",
            phone="+1-555-0123", address="123 Tech Street, Silicon Valley, CA",
            category="Electronics", contact_person="John Smith",
        ),
        Supplier(
            id="2", created_at=now, name="Global Supplies Ltd", email="sales@globalsupplies.com",
            phone="+1-555-0456", address="456 Commerce Ave, New York, NY",
            category="Office Supplies", contact_person="Sarah Johnson",
        ),
    ]

    products = [
        Product(
            id="1", created_at=now, name="Wireless Bluetooth Headphones", sku="WBH-001",
            description="High-quality wireless headphones with noise cancellation",
            cost_price=45.00, selling_price=89.99, stock_level=150, min_stock_level=20, max_stock_level=300,
            supplier_id="1", category="Electronics", unit="pieces", barcode="123456789012",
        ),
        Product(
            id="2", created_at=now, name="Office Chair - Ergonomic", sku="CHR-002",
            description="Adjustable ergonomic office chair with lumbar support",
            cost_price=120.00, selling_price=249.99, stock_level=45, min_stock_level=10, max_stock_level=100,
            supplier_id="2", category="Furniture", unit="pieces", barcode="123456789013",
        ),
        Product(
            id="3", created_at=now, name="A4 Paper - 500 sheets", sku="PAP-003",
            description="Premium quality A4 copy paper, 80gsm",
            cost_price=8.50, selling_price=15.99, stock_level=8, min_stock_level=20, max_stock_level=200,
            supplier_id="2", category="Office Supplies", unit="packs", barcode="123456789014",
        ),
    ]

    orders = [
        Order(
            id="1", created_at=now, type=OrderType.OUT, product_id="1", quantity=5, total_value=449.95,
            status=OrderStatus.COMPLETED, order_number=f"ORD-{now.year}-001",
            notes="Customer order #12345", processed_by="admin",
        ),
    ]

    activity_logs = [
        ActivityLog(
            id="1", user_id=store.get_current_user().id, action="created", entity_type="product",
            entity_id="1", timestamp=now, details="Created new product: Wireless Bluetooth Headphones",
        ),
    ]

    store.load(suppliers=suppliers, products=products, orders=orders, activity_logs=activity_logs)
    log.info(f"Store seeded: {len(suppliers)} suppliers, {len(products)} products, {len(orders)} orders.")
    return store
