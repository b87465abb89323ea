from enum import Enum
from typing import Optional
from .base import BaseEntity


class SupplierStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class Supplier(BaseEntity):
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    category: str
    status: SupplierStatus = SupplierStatus.ACTIVE
    contact_person: Optional[str] = None
