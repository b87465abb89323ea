from enum import Enum
from typing import Optional
from pydantic import Field
from .base import BaseEntity


class OrderType(str, Enum):
    IN = "IN"   # Restock / receipt, adds units
    OUT = "OUT" # Sale / shipment, removes units


class OrderStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Order(BaseEntity):
    type: OrderType
    product_id: str
    quantity: int = Field(..., gt=0)
    total_value: float = Field(..., ge=0)
    status: OrderStatus = OrderStatus.PENDING
    order_number: str
    notes: Optional[str] = None
    processed_by: str
