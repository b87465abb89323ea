from typing import List, Optional
from pydantic import BaseModel, Field
from inventory_dashboard.models import ProductStatus, SupplierStatus


class SupplierRequest(BaseModel):
    """Schema for creating a supplier."""
    name: str = Field(..., min_length=1, description="Supplier company name.")
    email: str = Field(..., description="Contact email address.")
    phone: Optional[str] = None
    address: Optional[str] = None
    category: str = Field(..., description="Category of goods supplied (e.g., Electronics).")
    status: SupplierStatus = SupplierStatus.ACTIVE
    contact_person: Optional[str] = None


class SupplierUpdate(BaseModel):
    """Partial supplier changes. Only the fields sent are applied."""
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    category: Optional[str] = None
    status: Optional[SupplierStatus] = None
    contact_person: Optional[str] = None


class ProductRequest(BaseModel):
    """Schema for creating a product."""
    name: str = Field(..., min_length=1, description="Product name.")
    sku: str = Field(..., min_length=1, description="Stock keeping unit.")
    description: Optional[str] = None
    cost_price: float = Field(..., ge=0, description="Unit purchase cost.")
    selling_price: float = Field(..., ge=0, description="Unit selling price.")
    stock_level: int = Field(0, ge=0, description="Units currently held.")
    min_stock_level: int = Field(0, ge=0, description="Stock level at or below which an alert is raised.")
    max_stock_level: Optional[int] = Field(None, ge=0)
    supplier_id: str = Field(..., description="ID of the supplier providing this product.")
    category: str
    unit: str = "pieces"
    barcode: Optional[str] = None
    status: ProductStatus = ProductStatus.ACTIVE


class ProductUpdate(BaseModel):
    """Partial product changes. Only the fields sent are applied."""
    name: Optional[str] = Field(None, min_length=1)
    sku: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    cost_price: Optional[float] = Field(None, ge=0)
    selling_price: Optional[float] = Field(None, ge=0)
    stock_level: Optional[int] = Field(None, ge=0)
    min_stock_level: Optional[int] = Field(None, ge=0)
    max_stock_level: Optional[int] = Field(None, ge=0)
    supplier_id: Optional[str] = None
    category: Optional[str] = None
    unit: Optional[str] = None
    barcode: Optional[str] = None
    status: Optional[ProductStatus] = None


class BulkDeleteRequest(BaseModel):
    ids: List[str]


class BulkStatusRequest(BaseModel):
    ids: List[str]
    status: ProductStatus
