"""Product domain exceptions.

Raised by the Service Layer when business rules are violated.
``modules.core.exceptions.exception_handler`` translates them into
HTTP responses carrying the ``code`` below.
"""

from __future__ import annotations

from modules.core.exceptions import DomainError, NotFound


class ProductNotFound(NotFound):
    """The requested product does not exist."""

    default_message = "Product not found"


class ProductHasOrderItems(DomainError):
    """Deletion blocked: at least one order item references the product."""

    code = "PRODUCT_HAS_ORDER_ITEMS"

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(
            f"Cannot delete product. Product is referenced in {count} "
            "order item(s). Please delete the orders first.",
            details={"count": count},
        )
