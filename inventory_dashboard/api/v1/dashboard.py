import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from inventory_dashboard.api.deps import get_store
from inventory_dashboard.schemas.response import SuccessResponse
from inventory_dashboard.services.inventory_store import InventoryStore

router = APIRouter()
log = logging.getLogger("inventory_dashboard.api")


@router.get("/summary", response_model=SuccessResponse)
async def dashboard_summary(store: InventoryStore = Depends(get_store)):
    """Headline numbers for the dashboard page."""
    return SuccessResponse(data=store.get_dashboard_summary().model_dump())


@router.get("/sales-trend", response_model=SuccessResponse)
async def sales_trend(store: InventoryStore = Depends(get_store)):
    return SuccessResponse(data=store.get_sales_trend_data().model_dump())


@router.get("/inventory-distribution", response_model=SuccessResponse)
async def inventory_distribution(store: InventoryStore = Depends(get_store)):
    return SuccessResponse(data=store.get_inventory_distribution_data().model_dump())


@router.get("/low-stock", response_model=SuccessResponse)
async def low_stock(store: InventoryStore = Depends(get_store)):
    return SuccessResponse(data=[p.model_dump() for p in store.low_stock_alerts])


@router.get("/activity-logs", response_model=SuccessResponse)
async def activity_logs(
    limit: Optional[int] = Query(None, ge=1),
    store: InventoryStore = Depends(get_store),
):
    """Newest first."""
    logs = store.get_activity_logs()[:limit]
    return SuccessResponse(data=[entry.model_dump() for entry in logs])


@router.get("/notifications", response_model=SuccessResponse)
async def notifications(
    limit: Optional[int] = Query(None, ge=1),
    unread_only: bool = False,
    store: InventoryStore = Depends(get_store),
):
    """Newest first."""
    items = store.unread_notifications if unread_only else store.get_notifications()
    return SuccessResponse(data=[n.model_dump() for n in items[:limit]])


@router.post("/notifications/{notification_id}/read", response_model=SuccessResponse)
async def mark_notification_read(notification_id: str, store: InventoryStore = Depends(get_store)):
    notification = store.mark_notification_as_read(notification_id)
    if not notification:
        raise HTTPException(status_code=404, detail="Notification not found")
    return SuccessResponse(data=notification.model_dump())


@router.get("/me", response_model=SuccessResponse)
async def current_user(store: InventoryStore = Depends(get_store)):
    return SuccessResponse(data=store.get_current_user().model_dump())
