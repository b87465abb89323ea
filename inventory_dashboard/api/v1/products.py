import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from inventory_dashboard.api.deps import get_store
from inventory_dashboard.schemas.inventory import BulkDeleteRequest, BulkStatusRequest, ProductRequest, ProductUpdate
from inventory_dashboard.schemas.response import SuccessResponse
from inventory_dashboard.services.inventory_store import InventoryStore

router = APIRouter()
log = logging.getLogger("inventory_dashboard.api")


@router.get("/", response_model=SuccessResponse)
async def list_products(
    q: Optional[str] = Query(None, description="Matches name, SKU or category."),
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=100),
    store: InventoryStore = Depends(get_store),
):
    """Lists products, filtered and paginated."""
    return SuccessResponse(data=store.get_products(q, page, limit).model_dump())


# Bulk routes are declared before /{product_id} so the literal paths win
@router.post("/bulk-delete", response_model=SuccessResponse)
async def bulk_delete_products(payload: BulkDeleteRequest, store: InventoryStore = Depends(get_store)):
    if not payload.ids:
        raise HTTPException(status_code=400, detail="No product ids given.")
    deleted = store.bulk_delete_products(payload.ids)
    log.info(f"Bulk delete: {len(deleted)} of {len(payload.ids)} requested products removed.")
    return SuccessResponse(
        message=f"{len(payload.ids)} products have been deleted.",
        data={"deleted": [p.id for p in deleted]},
    )


@router.post("/bulk-status", response_model=SuccessResponse)
async def bulk_update_status(payload: BulkStatusRequest, store: InventoryStore = Depends(get_store)):
    if not payload.ids:
        raise HTTPException(status_code=400, detail="No product ids given.")
    updated = store.bulk_update_product_status(payload.ids, payload.status)
    return SuccessResponse(
        message=f"{len(payload.ids)} products status updated to {payload.status.value}.",
        data={"updated": [p.id for p in updated]},
    )


@router.get("/{product_id}", response_model=SuccessResponse)
async def get_product(product_id: str, store: InventoryStore = Depends(get_store)):
    product = store.get_product(product_id)
    if not product:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return SuccessResponse(data=product.model_dump())


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def create_product(payload: ProductRequest, store: InventoryStore = Depends(get_store)):
    product = store.add_product(payload)
    log.info(f"Product {product.id} ({product.sku}) created with {product.stock_level} {product.unit}.")
    return SuccessResponse(message=f"Product {product.name} has been added successfully.", data=product.model_dump())


@router.patch("/{product_id}", response_model=SuccessResponse)
async def update_product(product_id: str, payload: ProductUpdate, store: InventoryStore = Depends(get_store)):
    product = store.update_product(product_id, payload)
    if not product:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return SuccessResponse(data=product.model_dump())


@router.delete("/{product_id}", response_model=SuccessResponse)
async def delete_product(product_id: str, store: InventoryStore = Depends(get_store)):
    product = store.delete_product(product_id)
    if not product:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    log.info(f"Product {product_id} deleted.")
    return SuccessResponse(message=f"Product {product.name} has been deleted.", data={"id": product_id})
