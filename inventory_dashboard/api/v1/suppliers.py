import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from inventory_dashboard.api.deps import get_store
from inventory_dashboard.schemas.inventory import SupplierRequest, SupplierUpdate
from inventory_dashboard.schemas.response import SuccessResponse
from inventory_dashboard.services.inventory_store import InventoryStore

router = APIRouter()
log = logging.getLogger("inventory_dashboard.api")


@router.get("/", response_model=SuccessResponse)
async def list_suppliers(
    q: Optional[str] = Query(None, description="Matches name, email or category."),
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=100),
    store: InventoryStore = Depends(get_store),
):
    """Lists suppliers, filtered and paginated."""
    return SuccessResponse(data=store.get_suppliers(q, page, limit).model_dump())


@router.get("/{supplier_id}", response_model=SuccessResponse)
async def get_supplier(supplier_id: str, store: InventoryStore = Depends(get_store)):
    supplier = store.get_supplier(supplier_id)
    if not supplier:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Supplier not found")
    return SuccessResponse(data=supplier.model_dump())


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def create_supplier(payload: SupplierRequest, store: InventoryStore = Depends(get_store)):
    supplier = store.add_supplier(payload)
    log.info(f"Supplier {supplier.id} ({supplier.name}) created.")
    return SuccessResponse(message=f"Supplier {supplier.name} has been added successfully.", data=supplier.model_dump())


@router.patch("/{supplier_id}", response_model=SuccessResponse)
async def update_supplier(supplier_id: str, payload: SupplierUpdate, store: InventoryStore = Depends(get_store)):
    """
    Applies partial changes. An unknown id is still recorded in the activity
    log by the store, but answers 404 here.
    """
    supplier = store.update_supplier(supplier_id, payload)
    if not supplier:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Supplier not found")
    return SuccessResponse(data=supplier.model_dump())


@router.delete("/{supplier_id}", response_model=SuccessResponse)
async def delete_supplier(supplier_id: str, store: InventoryStore = Depends(get_store)):
    supplier = store.delete_supplier(supplier_id)
    if not supplier:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Supplier not found")
    log.info(f"Supplier {supplier_id} deleted.")
    return SuccessResponse(message=f"Supplier {supplier.name} has been deleted.", data={"id": supplier_id})
