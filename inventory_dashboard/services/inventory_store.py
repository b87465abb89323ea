import logging
import math
import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel

from inventory_dashboard.core import config
from inventory_dashboard.core.errors import InsufficientStockError
from inventory_dashboard.events import dispatcher as topics
from inventory_dashboard.events.dispatcher import ChangeDispatcher, ChangeEvent
from inventory_dashboard.models import (
    ActivityLog,
    BaseEntity,
    Notification,
    NotificationType,
    Order,
    OrderStatus,
    OrderType,
    Product,
    ProductStatus,
    Supplier,
    User,
    UserRole,
)
from inventory_dashboard.schemas.dashboard import DashboardSummary, InventoryDistribution, Page, SalesTrend
from inventory_dashboard.schemas.inventory import ProductRequest, ProductUpdate, SupplierRequest, SupplierUpdate
from inventory_dashboard.schemas.order import OrderRequest

log = logging.getLogger("inventory_dashboard.store")

E = TypeVar("E", bound=BaseEntity)
S = TypeVar("S", bound=BaseModel)

MONTH_LABELS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
SALES_CHART_FLOOR = 1000 # Minimum y-axis maximum for the sales trend chart

DEFAULT_USER = User(id="admin", name="Admin User", email="admin@company.com", role=UserRole.ADMIN)


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _shift_month(year: int, month: int, delta: int):
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def _validated(schema: Type[S], data: Union[S, Dict[str, Any]]) -> S:
    if isinstance(data, schema):
        return data
    return schema.model_validate(data)


def _changes(schema: Type[BaseModel], data: Union[BaseModel, Dict[str, Any]]) -> Dict[str, Any]:
    """Validates a partial update and keeps only the fields the caller actually set."""
    return _validated(schema, data).model_dump(exclude_unset=True, exclude_none=True)


def _contains(term: str, *values: Optional[str]) -> bool:
    term = term.lower()
    return any(term in value.lower() for value in values if value)


class InventoryStore:
    """
    In-memory owner of suppliers, products, orders, activity logs and notifications.

    Every mutation runs under one re-entrant lock: the collection change, its
    activity log entry and its notification are applied together, and change
    events are published to subscribers only after the whole mutation is done.
    Derived aggregates are recomputed from the collections on every read.
    """

    def __init__(
        self,
        current_user: User = DEFAULT_USER,
        items_per_page: int = config.ITEMS_PER_PAGE,
        activity_log_limit: int = config.ACTIVITY_LOG_LIMIT,
        notification_limit: int = config.NOTIFICATION_LIMIT,
        recent_orders_limit: int = config.RECENT_ORDERS_LIMIT,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.items_per_page = items_per_page
        self.activity_log_limit = activity_log_limit
        self.notification_limit = notification_limit
        self.recent_orders_limit = recent_orders_limit
        self._clock = clock
        self._current_user = current_user

        self._suppliers: List[Supplier] = []
        self._products: List[Product] = []
        self._orders: List[Order] = []
        self._activity_logs: List[ActivityLog] = [] # Newest first
        self._notifications: List[Notification] = [] # Newest first

        self._lock = threading.RLock()
        self._dispatcher = ChangeDispatcher()
        self._in_mutation = False
        self._pending: List[ChangeEvent] = []

    # ----------- Subscription -----------

    def subscribe(self, topic: str, callback: Callable[[ChangeEvent], None]) -> Callable[[], None]:
        """Registers a change observer for one collection topic (or '*'). Returns an unsubscribe function."""
        return self._dispatcher.subscribe(topic, callback)

    @contextmanager
    def _mutation(self):
        """
        Serializes a mutation and collects its change events. Nested mutations
        (e.g. bulk delete calling delete_product) publish once, from the outermost.
        Events are dropped if the mutation raises.
        """
        events: List[ChangeEvent] = []
        with self._lock:
            outermost = not self._in_mutation
            self._in_mutation = True
            try:
                yield
                if outermost:
                    events = self._pending
            finally:
                if outermost:
                    self._in_mutation = False
                    self._pending = []
        if events:
            self._dispatcher.publish(events)

    def _record(self, topic: str, action: str, entity_id: Optional[str] = None):
        self._pending.append(ChangeEvent(topic=topic, action=action, entity_id=entity_id))

    def _log(self, action: str, entity_type: str, entity_id: str, details: str):
        entry = ActivityLog(
            user_id=self._current_user.id,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            timestamp=self._clock(),
            details=details,
        )
        self._activity_logs = ([entry] + self._activity_logs)[: self.activity_log_limit]
        self._record(topics.ACTIVITY_LOGS, "created", entry.id)

    def _notify(self, type: NotificationType, title: str, message: str):
        notification = Notification(type=type, title=title, message=message, timestamp=self._clock())
        self._notifications = ([notification] + self._notifications)[: self.notification_limit]
        self._record(topics.NOTIFICATIONS, "created", notification.id)

    @staticmethod
    def _find(collection: List[E], entity_id: str) -> Optional[E]:
        return next((entity for entity in collection if entity.id == entity_id), None)

    def _replace(self, collection: List[E], entity_id: str, fields: Dict[str, Any]) -> Optional[E]:
        for index, entity in enumerate(collection):
            if entity.id == entity_id:
                collection[index] = entity.model_copy(update={**fields, "updated_at": self._clock()})
                return collection[index]
        return None

    def _remove(self, collection: List[E], entity_id: str) -> Optional[E]:
        entity = self._find(collection, entity_id)
        if entity is not None:
            collection.remove(entity)
        return entity

    # ----------- Seeding -----------

    def load(
        self,
        suppliers: Iterable[Supplier] = (),
        products: Iterable[Product] = (),
        orders: Iterable[Order] = (),
        activity_logs: Iterable[ActivityLog] = (),
    ) -> None:
        """Replaces the collections wholesale, without logging or notifying. Used for seed data."""
        with self._mutation():
            self._suppliers = list(suppliers)
            self._products = list(products)
            self._orders = list(orders)
            self._activity_logs = list(activity_logs)[: self.activity_log_limit]
            for topic in (topics.SUPPLIERS, topics.PRODUCTS, topics.ORDERS, topics.ACTIVITY_LOGS):
                self._record(topic, "loaded")

    # ----------- Suppliers -----------

    def add_supplier(self, data: Union[SupplierRequest, Dict[str, Any]]) -> Supplier:
        payload = _validated(SupplierRequest, data)
        with self._mutation():
            supplier = Supplier(**payload.model_dump(), created_at=self._clock())
            self._suppliers.append(supplier)
            self._record(topics.SUPPLIERS, "created", supplier.id)
            self._log("created", "supplier", supplier.id, f"Created supplier: {supplier.name}")
            self._notify(NotificationType.SUCCESS, "Supplier Added", f"Supplier {supplier.name} has been added successfully.")
        return supplier

    def update_supplier(self, supplier_id: str, changes: Union[SupplierUpdate, Dict[str, Any]]) -> Optional[Supplier]:
        """
        Merges changes into the supplier. An unknown id changes nothing, but the
        update is still logged and notified.
        """
        fields = _changes(SupplierUpdate, changes)
        with self._mutation():
            supplier = self._replace(self._suppliers, supplier_id, fields)
            if supplier is not None:
                self._record(topics.SUPPLIERS, "updated", supplier_id)
            else:
                log.debug(f"update_supplier: no supplier with id {supplier_id}")
            self._log("updated", "supplier", supplier_id, "Updated supplier information")
            self._notify(NotificationType.SUCCESS, "Supplier Updated", "Supplier information has been updated successfully.")
        return supplier

    def delete_supplier(self, supplier_id: str) -> Optional[Supplier]:
        with self._mutation():
            supplier = self._remove(self._suppliers, supplier_id)
            if supplier is not None:
                self._record(topics.SUPPLIERS, "deleted", supplier_id)
                self._log("deleted", "supplier", supplier_id, f"Deleted supplier: {supplier.name}")
                self._notify(NotificationType.WARNING, "Supplier Deleted", f"Supplier {supplier.name} has been deleted.")
        return supplier

    # ----------- Products -----------

    def add_product(self, data: Union[ProductRequest, Dict[str, Any]]) -> Product:
        payload = _validated(ProductRequest, data)
        with self._mutation():
            product = Product(**payload.model_dump(), created_at=self._clock())
            self._products.append(product)
            self._record(topics.PRODUCTS, "created", product.id)
            self._log("created", "product", product.id, f"Created product: {product.name}")
            self._notify(NotificationType.SUCCESS, "Product Added", f"Product {product.name} has been added successfully.")
        return product

    def update_product(self, product_id: str, changes: Union[ProductUpdate, Dict[str, Any]]) -> Optional[Product]:
        """Same semantics as update_supplier, including logging for unknown ids."""
        fields = _changes(ProductUpdate, changes)
        with self._mutation():
            product = self._replace(self._products, product_id, fields)
            if product is not None:
                self._record(topics.PRODUCTS, "updated", product_id)
            else:
                log.debug(f"update_product: no product with id {product_id}")
            self._log("updated", "product", product_id, "Updated product information")
            self._notify(NotificationType.SUCCESS, "Product Updated", "Product information has been updated successfully.")
        return product

    def delete_product(self, product_id: str) -> Optional[Product]:
        with self._mutation():
            product = self._remove(self._products, product_id)
            if product is not None:
                self._record(topics.PRODUCTS, "deleted", product_id)
                self._log("deleted", "product", product_id, f"Deleted product: {product.name}")
                self._notify(NotificationType.WARNING, "Product Deleted", f"Product {product.name} has been deleted.")
        return product

    def bulk_delete_products(self, ids: Iterable[str]) -> List[Product]:
        """Deletes each product, then adds one summary notification counting every requested id."""
        ids = list(ids)
        with self._mutation():
            deleted = [product for product in map(self.delete_product, ids) if product is not None]
            self._notify(NotificationType.WARNING, "Bulk Delete", f"{len(ids)} products have been deleted.")
        return deleted

    def bulk_update_product_status(self, ids: Iterable[str], status: Union[ProductStatus, str]) -> List[Product]:
        ids = list(ids)
        status = ProductStatus(status)
        wanted = set(ids)
        with self._mutation():
            updated = []
            for product in list(self._products):
                if product.id in wanted:
                    updated.append(self._replace(self._products, product.id, {"status": status}))
                    self._record(topics.PRODUCTS, "updated", product.id)
            self._notify(NotificationType.SUCCESS, "Bulk Update", f"{len(ids)} products status updated to {status.value}.")
        return updated

    # ----------- Orders -----------

    def add_order(self, data: Union[OrderRequest, Dict[str, Any]]) -> Optional[Order]:
        """
        Processes a stock movement and records the order.

        OUT orders require the product to exist and hold at least `quantity` units,
        otherwise InsufficientStockError is raised and nothing changes.
        IN orders for an unknown product are ignored and return None.
        """
        request = _validated(OrderRequest, data)
        with self._mutation():
            product = self._find(self._products, request.product_id)

            if request.type == OrderType.OUT:
                if product is None or product.stock_level < request.quantity:
                    raise InsufficientStockError(
                        request.product_id,
                        request.quantity,
                        product.stock_level if product else None,
                    )
                stock_level = product.stock_level - request.quantity
                unit_price = product.selling_price
            else:
                if product is None:
                    log.debug(f"add_order: IN order ignored, no product with id {request.product_id}")
                    return None
                stock_level = product.stock_level + request.quantity
                unit_price = product.cost_price

            total_value = request.total_value
            if total_value is None:
                total_value = round(unit_price * request.quantity, 2)

            now = self._clock()
            order = Order(
                **request.model_dump(exclude={"total_value"}),
                total_value=total_value,
                order_number=f"ORD-{now.year}-{len(self._orders) + 1:03d}",
                created_at=now,
            )
            self._replace(self._products, product.id, {"stock_level": stock_level})
            self._orders.append(order)

            self._record(topics.PRODUCTS, "updated", product.id)
            self._record(topics.ORDERS, "created", order.id)
            self._log("created", "order", order.id, f"Processed {order.type.value} order for {order.quantity} units")
            self._notify(NotificationType.SUCCESS, "Order Processed", f"Order {order.order_number} has been processed successfully.")

        log.info(f"Order {order.order_number} processed: {order.type.value} {order.quantity} x {product.id} (stock now {stock_level})")
        return order

    # ----------- Notifications -----------

    def mark_notification_as_read(self, notification_id: str) -> Optional[Notification]:
        with self._mutation():
            for index, notification in enumerate(self._notifications):
                if notification.id == notification_id:
                    self._notifications[index] = notification.model_copy(update={"read": True})
                    self._record(topics.NOTIFICATIONS, "updated", notification_id)
                    return self._notifications[index]
        return None

    # ----------- Queries -----------

    def _paginate(self, items: List[E], page: Optional[int], limit: Optional[int]) -> Page:
        page = page or 1
        limit = limit or self.items_per_page
        if page < 1 or limit < 1:
            raise ValueError("page and limit must be positive")

        start = (page - 1) * limit
        return Page(
            data=items[start:start + limit],
            total=len(items),
            page=page,
            total_pages=math.ceil(len(items) / limit),
        )

    def get_suppliers(self, search_term: Optional[str] = None, page: Optional[int] = None, limit: Optional[int] = None) -> Page:
        with self._lock:
            suppliers = list(self._suppliers)
        if search_term:
            suppliers = [s for s in suppliers if _contains(search_term, s.name, s.email, s.category)]
        return self._paginate(suppliers, page, limit)

    def get_products(self, search_term: Optional[str] = None, page: Optional[int] = None, limit: Optional[int] = None) -> Page:
        with self._lock:
            products = list(self._products)
        if search_term:
            products = [p for p in products if _contains(search_term, p.name, p.sku, p.category)]
        return self._paginate(products, page, limit)

    def get_orders(self, search_term: Optional[str] = None, page: Optional[int] = None, limit: Optional[int] = None) -> Page:
        with self._lock:
            orders = list(self._orders)
        if search_term:
            orders = [o for o in orders if _contains(search_term, o.order_number)]
        return self._paginate(orders, page, limit)

    def get_supplier(self, supplier_id: str) -> Optional[Supplier]:
        with self._lock:
            return self._find(self._suppliers, supplier_id)

    def get_product(self, product_id: str) -> Optional[Product]:
        with self._lock:
            return self._find(self._products, product_id)

    def get_order(self, order_id: str) -> Optional[Order]:
        with self._lock:
            return self._find(self._orders, order_id)

    def get_activity_logs(self) -> List[ActivityLog]:
        with self._lock:
            return list(self._activity_logs)

    def get_notifications(self) -> List[Notification]:
        with self._lock:
            return list(self._notifications)

    def get_current_user(self) -> User:
        return self._current_user

    # ----------- Derived aggregates -----------

    @property
    def total_revenue(self) -> float:
        """Value of completed OUT orders."""
        with self._lock:
            return sum(
                o.total_value for o in self._orders
                if o.type == OrderType.OUT and o.status == OrderStatus.COMPLETED
            )

    @property
    def total_products(self) -> int:
        with self._lock:
            return len(self._products)

    @property
    def low_stock_alerts(self) -> List[Product]:
        with self._lock:
            return [p for p in self._products if p.is_low_stock]

    @property
    def total_inventory_value(self) -> float:
        with self._lock:
            return sum(p.inventory_value for p in self._products)

    @property
    def recent_orders(self) -> List[Order]:
        with self._lock:
            return self._orders[: self.recent_orders_limit]

    @property
    def unread_notifications(self) -> List[Notification]:
        with self._lock:
            return [n for n in self._notifications if not n.read]

    def get_sales_trend_data(self) -> SalesTrend:
        """
        Sums order value (every type and status) per calendar month for the
        twelve months ending with the current one, oldest first.
        """
        now = self._clock()
        with self._lock:
            orders = list(self._orders)

        months, sales = [], []
        for offset in range(11, -1, -1):
            year, month = _shift_month(now.year, now.month, -offset)
            months.append(MONTH_LABELS[month - 1])
            month_total = sum(
                o.total_value for o in orders
                if o.created_at.year == year and o.created_at.month == month
            )
            sales.append(round_half_up(month_total))

        first, last = sales[0], sales[-1]
        growth = round_half_up((last - first) / first * 100) if first else 0
        return SalesTrend(
            months=months,
            sales=sales,
            total=sum(sales),
            max_sales=max(sales + [SALES_CHART_FLOOR]),
            growth=growth,
        )

    def get_inventory_distribution_data(self) -> InventoryDistribution:
        """Groups stock value by category, in the order categories first appear."""
        with self._lock:
            products = list(self._products)

        by_category: Dict[str, float] = {}
        for product in products:
            by_category[product.category] = by_category.get(product.category, 0) + product.inventory_value

        values = list(by_category.values())
        grand_total = sum(values)
        percentages = [round_half_up(value / grand_total * 100) if grand_total else 0 for value in values]
        return InventoryDistribution(
            categories=list(by_category),
            values=values,
            percentages=percentages,
            total_value=grand_total,
        )

    def get_dashboard_summary(self) -> DashboardSummary:
        with self._lock:
            low_stock = self.low_stock_alerts
            return DashboardSummary(
                total_revenue=self.total_revenue,
                total_products=self.total_products,
                total_inventory_value=self.total_inventory_value,
                low_stock_count=len(low_stock),
                low_stock_alerts=low_stock,
                recent_orders=self.recent_orders,
                unread_notifications=len(self.unread_notifications),
            )
