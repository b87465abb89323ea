from enum import Enum
from typing import Optional
from pydantic import Field
from .base import BaseEntity


class ProductStatus(str, Enum):
    ACTIVE = "active"
    DISCONTINUED = "discontinued"


class Product(BaseEntity):
    name: str
    sku: str
    description: Optional[str] = None
    cost_price: float = Field(..., ge=0)
    selling_price: float = Field(..., ge=0)
    stock_level: int = Field(0, ge=0)
    min_stock_level: int = Field(0, ge=0) # For low stock alert
    max_stock_level: Optional[int] = Field(None, ge=0)
    supplier_id: str # Not checked against the supplier collection
    category: str
    unit: str = "pieces"
    barcode: Optional[str] = None
    status: ProductStatus = ProductStatus.ACTIVE

    @property
    def is_low_stock(self) -> bool:
        return self.stock_level <= self.min_stock_level

    @property
    def inventory_value(self) -> float:
        return self.cost_price * self.stock_level
