from typing import Optional
from pydantic import BaseModel, Field
from inventory_dashboard.models import OrderStatus, OrderType


class OrderRequest(BaseModel):
    """Schema for an order request body. Stock moves when the order is accepted."""
    type: OrderType
    product_id: str
    quantity: int = Field(..., gt=0, description="Units moved in or out.")
    total_value: Optional[float] = Field(
        None, ge=0,
        description="Order value. Defaults to selling price (OUT) or cost price (IN) times quantity."
    )
    status: OrderStatus = OrderStatus.PENDING
    notes: Optional[str] = None
    processed_by: str = "System"
