# inventory_dashboard/models/__init__.py
from .base import BaseEntity
from .supplier import Supplier, SupplierStatus
from .product import Product, ProductStatus
from .order import Order, OrderType, OrderStatus
from .activity import ActivityLog, Notification, NotificationType
from .user import User, UserRole

# Export all models
__all__ = [
    "ActivityLog",
    "BaseEntity",
    "Notification",
    "NotificationType",
    "Order",
    "OrderStatus",
    "OrderType",
    "Product",
    "ProductStatus",
    "Supplier",
    "SupplierStatus",
    "User",
    "UserRole",
]
