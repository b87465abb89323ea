import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from inventory_dashboard.api.deps import get_store
from inventory_dashboard.core.errors import InsufficientStockError
from inventory_dashboard.schemas.order import OrderRequest
from inventory_dashboard.schemas.response import SuccessResponse
from inventory_dashboard.services.inventory_store import InventoryStore

router = APIRouter()
log = logging.getLogger("inventory_dashboard.api")


@router.get("/", response_model=SuccessResponse)
async def list_orders(
    q: Optional[str] = Query(None, description="Matches the order number."),
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=100),
    store: InventoryStore = Depends(get_store),
):
    return SuccessResponse(data=store.get_orders(q, page, limit).model_dump())


@router.get("/{order_id}", response_model=SuccessResponse)
async def get_order(order_id: str, store: InventoryStore = Depends(get_store)):
    order = store.get_order(order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return SuccessResponse(data=order.model_dump())


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def create_order(request_data: OrderRequest, store: InventoryStore = Depends(get_store)):
    """
    Processes an IN (restock) or OUT (sale) order and adjusts stock immediately.
    OUT orders larger than the available stock are rejected with 409.
    """
    try:
        order = store.add_order(request_data)
    except InsufficientStockError:
        # Rendered by insufficient_stock_handler
        raise
    except ValueError as e:
        log.error(f"Value error placing order: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    if order is None:
        # The store ignores IN orders for unknown products
        raise HTTPException(status_code=404, detail="Product not found")

    log.info(f"Order {order.order_number} placed by {order.processed_by}.")
    return SuccessResponse(
        message=f"Order {order.order_number} has been processed successfully.",
        data=order.model_dump(),
    )
