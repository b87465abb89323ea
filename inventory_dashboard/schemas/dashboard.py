from typing import Generic, List, TypeVar
from pydantic import BaseModel
from inventory_dashboard.models import Order, Product

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """One page of a filtered collection."""
    data: List[T]
    total: int
    page: int
    total_pages: int


class SalesTrend(BaseModel):
    """Order value per calendar month for the trailing twelve months, oldest first."""
    months: List[str]
    sales: List[int]
    total: int
    max_sales: int
    growth: int # Percent change from the first month to the last


class InventoryDistribution(BaseModel):
    """Stock value (cost price x stock level) grouped by product category."""
    categories: List[str]
    values: List[float]
    percentages: List[int]
    total_value: float


class DashboardSummary(BaseModel):
    total_revenue: float
    total_products: int
    total_inventory_value: float
    low_stock_count: int
    low_stock_alerts: List[Product]
    recent_orders: List[Order]
    unread_notifications: int
