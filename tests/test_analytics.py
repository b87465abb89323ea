from datetime import datetime
import pytest
from inventory_dashboard.services.inventory_store import round_half_up


class TestAggregates:
    def test_seed_aggregates(self, store):
        assert store.total_revenue == pytest.approx(449.95)
        assert store.total_products == 3
        assert store.total_inventory_value == pytest.approx(45 * 150 + 120 * 45 + 8.5 * 8)
        assert [p.name for p in store.low_stock_alerts] == ["A4 Paper - 500 sheets"]
        assert [o.order_number for o in store.recent_orders] == ["ORD-2026-001"]
        assert store.unread_notifications == []

    def test_revenue_counts_completed_out_orders_only(self, store):
        store.add_order({"type": "OUT", "product_id": "2", "quantity": 1, "total_value": 250, "status": "completed"})
        store.add_order({"type": "OUT", "product_id": "2", "quantity": 1, "total_value": 1000})
        store.add_order({"type": "IN", "product_id": "2", "quantity": 1, "total_value": 120, "status": "completed"})

        assert store.total_revenue == pytest.approx(699.95)

    def test_low_stock_threshold_is_inclusive(self, store):
        store.update_product("2", {"stock_level": 10})
        assert {p.id for p in store.low_stock_alerts} == {"2", "3"}

    def test_recent_orders_are_first_five_in_insertion_order(self, store):
        for _ in range(6):
            store.add_order({"type": "IN", "product_id": "1", "quantity": 1})

        recent = store.recent_orders
        assert len(recent) == 5
        assert [o.order_number for o in recent] == [f"ORD-2026-{n:03d}" for n in range(1, 6)]

    def test_inventory_value_follows_stock_changes(self, store):
        before = store.total_inventory_value
        store.add_order({"type": "OUT", "product_id": "2", "quantity": 5})
        assert store.total_inventory_value == pytest.approx(before - 5 * 120)

    def test_dashboard_summary(self, store, supplier_data):
        store.add_supplier(supplier_data)
        summary = store.get_dashboard_summary()

        assert summary.total_products == 3
        assert summary.low_stock_count == 1
        assert summary.low_stock_alerts[0].id == "3"
        assert summary.unread_notifications == 1
        assert summary.total_revenue == pytest.approx(449.95)


class TestSalesTrend:
    def test_twelve_trailing_months_oldest_first(self, store):
        trend = store.get_sales_trend_data()

        assert trend.months == ["Jul", "Aug", "Sep", "Oct", "Nov", "Dec", "Jan", "Feb", "Mar", "Apr", "May", "Jun"]
        assert trend.sales == [0] * 11 + [450]
        assert trend.total == 450
        assert trend.max_sales == 1000
        assert trend.growth == 0

    def test_orders_bucketed_by_calendar_month(self, store, clock):
        clock.now = datetime(2025, 7, 3)
        store.add_order({"type": "IN", "product_id": "1", "quantity": 1, "total_value": 100})
        clock.now = datetime(2025, 6, 30) # Outside the window
        store.add_order({"type": "IN", "product_id": "1", "quantity": 1, "total_value": 999})
        clock.now = datetime(2026, 1, 31, 23, 59)
        store.add_order({"type": "OUT", "product_id": "1", "quantity": 1, "total_value": 2500.4, "status": "cancelled"})

        clock.now = datetime(2026, 6, 15)
        trend = store.get_sales_trend_data()

        assert trend.sales[0] == 100
        assert trend.sales[6] == 2500
        assert trend.sales[11] == 450
        assert trend.total == 3050
        assert trend.max_sales == 2500
        assert trend.growth == 350

    def test_window_crosses_year_boundary(self, empty_store, clock):
        clock.now = datetime(2027, 2, 10)
        trend = empty_store.get_sales_trend_data()
        assert trend.months[0] == "Mar"
        assert trend.months[-1] == "Feb"
        assert trend.sales == [0] * 12


class TestInventoryDistribution:
    def test_seed_distribution(self, store):
        data = store.get_inventory_distribution_data()

        assert data.categories == ["Electronics", "Furniture", "Office Supplies"]
        assert data.values == pytest.approx([6750.0, 5400.0, 68.0])
        assert data.percentages == [55, 44, 1]
        assert data.total_value == pytest.approx(12218.0)

    def test_categories_are_grouped(self, store, product_data):
        store.add_product(product_data) # Electronics, 40 x 3.25
        data = store.get_inventory_distribution_data()

        assert data.categories == ["Electronics", "Furniture", "Office Supplies"]
        assert data.values[0] == pytest.approx(6750.0 + 130.0)

    def test_percentages_sum_close_to_100(self, store, product_data):
        for i, category in enumerate(["Tools", "Garden", "Toys", "Books"]):
            store.add_product({**product_data, "category": category, "stock_level": 7 + i, "cost_price": 13.3})

        data = store.get_inventory_distribution_data()
        assert abs(sum(data.percentages) - 100) <= len(data.categories)

    def test_empty_inventory(self, empty_store):
        data = empty_store.get_inventory_distribution_data()
        assert (data.categories, data.percentages, data.total_value) == ([], [], 0)

    def test_zero_value_inventory_has_zero_percentages(self, empty_store, product_data):
        empty_store.add_product({**product_data, "stock_level": 0})
        assert empty_store.get_inventory_distribution_data().percentages == [0]


def test_round_half_up():
    assert [round_half_up(v) for v in (0.5, 1.5, 2.5, 2.4999, -0.5)] == [1, 2, 3, 2, 0]
