import logging
from typing import Callable
from inventory_dashboard.events.dispatcher import PRODUCTS, ChangeEvent
from inventory_dashboard.models import Product
from inventory_dashboard.services.inventory_store import InventoryStore

log = logging.getLogger("low_stock_consumer")


def check_for_low_stock(product: Product) -> bool:
    """Checks if current stock is at or below the minimum and logs an alert if so."""
    if not product.is_low_stock:
        return False
    log.warning(
        f"ALERT: Low stock detected for {product.name} ({product.sku})! "
        f"Qty: {product.stock_level}, minimum: {product.min_stock_level}"
    )
    return True


class LowStockConsumer:
    """
    Watches product changes and alerts once when a product drops to or below
    its minimum stock level. The alert re-arms after the product is restocked.
    """

    def __init__(self, store: InventoryStore):
        self.store = store
        self._alerted = {p.id for p in store.low_stock_alerts}

    def __call__(self, event: ChangeEvent):
        if event.action == "loaded":
            self._alerted = {p.id for p in self.store.low_stock_alerts}
            return
        if event.action == "deleted":
            self._alerted.discard(event.entity_id)
            return

        product = self.store.get_product(event.entity_id)
        if product is None:
            return
        if not product.is_low_stock:
            self._alerted.discard(product.id)
        elif product.id not in self._alerted and check_for_low_stock(product):
            self._alerted.add(product.id)


def attach_low_stock_consumer(store: InventoryStore) -> Callable[[], None]:
    """Subscribes a LowStockConsumer to product changes. Returns the unsubscribe function."""
    return store.subscribe(PRODUCTS, LowStockConsumer(store))
