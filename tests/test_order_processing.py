import threading
from datetime import datetime
import pytest
from inventory_dashboard.core.errors import InsufficientStockError
from inventory_dashboard.models import OrderStatus, OrderType
from inventory_dashboard.schemas.order import OrderRequest


def out_order(product_id="1", quantity=1, **extra):
    return {"type": "OUT", "product_id": product_id, "quantity": quantity, **extra}


def in_order(product_id="1", quantity=1, **extra):
    return {"type": "IN", "product_id": product_id, "quantity": quantity, **extra}


class TestOutOrders:
    def test_out_order_decrements_stock(self, store, clock):
        order = store.add_order(out_order("1", 10))

        assert store.get_product("1").stock_level == 140
        assert order.type == OrderType.OUT
        assert order.created_at == clock.now
        assert order.status == OrderStatus.PENDING
        assert order.processed_by == "System"
        assert store.get_orders().total == 2

        entry = store.get_activity_logs()[0]
        assert (entry.action, entry.entity_type, entry.entity_id) == ("created", "order", order.id)
        assert entry.details == "Processed OUT order for 10 units"
        assert store.get_notifications()[0].message == f"Order {order.order_number} has been processed successfully."

    def test_out_order_for_exact_stock_empties_product(self, store):
        store.add_order(out_order("3", 8))
        assert store.get_product("3").stock_level == 0

    def test_insufficient_stock_changes_nothing(self, store):
        """Headphones hold 150 units, an OUT order for 200 is rejected"""
        products_before = store.get_products().model_dump()
        orders_before = store.get_orders().model_dump()
        logs_before = store.get_activity_logs()

        with pytest.raises(InsufficientStockError) as excinfo:
            store.add_order(out_order("1", 200))

        assert excinfo.value.requested == 200
        assert excinfo.value.available == 150
        assert "Insufficient stock" in str(excinfo.value)
        assert store.get_product("1").stock_level == 150
        assert store.get_products().model_dump() == products_before
        assert store.get_orders().model_dump() == orders_before
        assert store.get_activity_logs() == logs_before
        assert store.get_notifications() == []

        # Sequence numbering is unaffected by the rejected order
        assert store.add_order(out_order("1", 1)).order_number.endswith("-002")

    def test_out_order_for_missing_product_is_insufficient_stock(self, store):
        with pytest.raises(InsufficientStockError) as excinfo:
            store.add_order(out_order("missing", 1))

        assert excinfo.value.available is None
        assert store.get_orders().total == 1

    def test_insufficient_stock_is_a_value_error(self, store):
        with pytest.raises(ValueError):
            store.add_order(out_order("3", 9))


class TestInOrders:
    def test_in_order_restocks_and_clears_low_stock(self, store):
        """A4 Paper (8 of min 20) leaves the low stock list after receiving 50"""
        assert "3" in [p.id for p in store.low_stock_alerts]

        store.add_order(in_order("3", 50))

        assert store.get_product("3").stock_level == 58
        assert "3" not in [p.id for p in store.low_stock_alerts]

    def test_in_order_for_missing_product_is_silent(self, store):
        assert store.add_order(in_order("missing", 5)) is None
        assert store.get_orders().total == 1
        assert len(store.get_activity_logs()) == 1
        assert store.get_notifications() == []

    def test_stock_update_refreshes_updated_at(self, store, clock):
        clock.now = datetime(2026, 6, 20, 8, 0)
        store.add_order(in_order("2", 5))
        assert store.get_product("2").updated_at == clock.now


class TestOrderValues:
    def test_default_total_value_uses_selling_price_for_out(self, store):
        order = store.add_order(out_order("1", 2))
        assert order.total_value == pytest.approx(179.98)

    def test_default_total_value_uses_cost_price_for_in(self, store):
        order = store.add_order(in_order("3", 10))
        assert order.total_value == pytest.approx(85.0)

    def test_explicit_total_value_and_fields_are_kept(self, store):
        order = store.add_order(OrderRequest(
            type=OrderType.OUT, product_id="2", quantity=1, total_value=200,
            status=OrderStatus.COMPLETED, notes="Walk-in", processed_by="admin",
        ))
        assert order.total_value == 200
        assert order.notes == "Walk-in"
        assert order.processed_by == "admin"


class TestOrderNumbering:
    def test_sequential_numbers_share_year_prefix(self, store):
        numbers = [store.add_order(in_order("2", 1)).order_number for _ in range(3)]
        assert numbers == ["ORD-2026-002", "ORD-2026-003", "ORD-2026-004"]

    def test_year_comes_from_clock(self, empty_store, clock, product_data):
        clock.now = datetime(2027, 1, 2)
        product = empty_store.add_product(product_data)
        assert empty_store.add_order(in_order(product.id, 1)).order_number == "ORD-2027-001"

    def test_numbers_increase_strictly(self, empty_store, product_data):
        product = empty_store.add_product({**product_data, "stock_level": 500})
        sequence = [int(empty_store.add_order(out_order(product.id, 1)).order_number.split("-")[-1]) for _ in range(12)]
        assert sequence == sorted(set(sequence))


class TestStockConservation:
    def test_stock_matches_seed_plus_in_minus_out(self, store):
        """Interleaved orders, some rejected, keep stock = seed + IN - OUT and never negative"""
        moves = [
            ("IN", 10), ("OUT", 30), ("OUT", 200), ("IN", 5), ("OUT", 135), ("OUT", 1), ("IN", 2), ("OUT", 2),
        ]
        expected = 150
        for kind, quantity in moves:
            try:
                store.add_order({"type": kind, "product_id": "1", "quantity": quantity})
            except InsufficientStockError:
                assert quantity > expected
                continue
            expected += quantity if kind == "IN" else -quantity
            assert store.get_product("1").stock_level == expected >= 0

        assert store.get_product("1").stock_level == expected == 0

    def test_concurrent_out_orders_never_oversell(self, store):
        """Threads racing OUT orders against 150 headphones accept exactly 150 // quantity of them"""
        workers, quantity = 40, 7
        barrier = threading.Barrier(workers)
        numbers, rejected = [], []

        def submit():
            barrier.wait()
            try:
                numbers.append(store.add_order(out_order("1", quantity)).order_number)
            except InsufficientStockError:
                rejected.append(quantity)

        threads = [threading.Thread(target=submit) for _ in range(workers)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        accepted = len(numbers)
        assert accepted == 150 // quantity
        assert len(rejected) == workers - accepted
        assert store.get_product("1").stock_level == 150 - quantity * accepted
        assert len(set(numbers)) == accepted
        assert store.get_orders().total == 1 + accepted

    def test_low_stock_membership_after_out_order(self, store):
        """Office chair (45, min 10) crosses the threshold on the next read"""
        assert "2" not in [p.id for p in store.low_stock_alerts]
        store.add_order(out_order("2", 35))
        assert "2" in [p.id for p in store.low_stock_alerts]
