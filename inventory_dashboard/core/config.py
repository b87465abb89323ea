import os


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# Application Metadata
PROJECT_NAME = "Inventory Dashboard"
VERSION = "1.0.0"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Store Configuration
ITEMS_PER_PAGE = int(os.getenv("ITEMS_PER_PAGE", 10)) # Default page size for list queries
ACTIVITY_LOG_LIMIT = int(os.getenv("ACTIVITY_LOG_LIMIT", 100)) # Newest N activity log entries kept
NOTIFICATION_LIMIT = int(os.getenv("NOTIFICATION_LIMIT", 50)) # Newest N notifications kept
RECENT_ORDERS_LIMIT = int(os.getenv("RECENT_ORDERS_LIMIT", 5))

# Startup behaviour
SEED_DATA = _flag("SEED_DATA", "true") # Pre-populate the store with demo suppliers/products/orders
LOW_STOCK_ALERTS = _flag("LOW_STOCK_ALERTS", "true") # Attach the low stock alert consumer
