from typing import Optional


class InsufficientStockError(ValueError):
    """
    Raised when an OUT order asks for more units than the product holds,
    or when the product it references does not exist.
    """

    def __init__(self, product_id: str, requested: int, available: Optional[int] = None):
        self.product_id = product_id
        self.requested = requested
        self.available = available
        if available is None:
            message = f"Insufficient stock: product {product_id} not found"
        else:
            message = f"Insufficient stock: {product_id}. Requested: {requested}, Available: {available}"
        super().__init__(message)
