"""Product service layer (Use Cases).

Orchestrates business logic for the Product aggregate, delegating
persistence to the injected ``IProductRepository``.

Business rules enforced here:
- Price > 0 and stock >= 0 (validated by the DTOs).
- A product referenced by order items cannot be deleted
  (``PRODUCT_HAS_ORDER_ITEMS``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional
from uuid import UUID

import structlog
from django.db import transaction
from django.db.models import ProtectedError

from modules.products.exceptions import ProductHasOrderItems, ProductNotFound
from modules.products.models import Product

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from modules.products.dtos import CreateProductDTO, UpdateProductDTO
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_product(self, dto: CreateProductDTO) -> Product:
        product = Product(name=dto.name, price=dto.price, stock=dto.stock)
        product = self._repo.save(product)
        logger.info("product.created", product_id=str(product.id))
        return product

    @transaction.atomic
    def update_product(self, id: UUID, dto: UpdateProductDTO) -> Product:
        """Update an existing product with the supplied fields.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound()

        for field in ("name", "price", "stock"):
            value = getattr(dto, field)
            if value is not None:
                setattr(product, field, value)

        product = self._repo.save(product)
        logger.info("product.updated", product_id=str(id))
        return product

    @transaction.atomic
    def delete_product(self, id: UUID) -> None:
        """Delete a product that no order item references.

        Raises:
            ProductHasOrderItems: the product appears in order items;
                nothing is deleted.
            ProductNotFound: the product does not exist.
        """
        log = logger.bind(product_id=str(id))

        item_count = self._repo.count_order_items(id)
        if item_count > 0:
            log.warning("product.delete_blocked", order_item_count=item_count)
            raise ProductHasOrderItems(item_count)

        try:
            deleted = self._repo.delete(id)
        except ProtectedError:
            item_count = self._repo.count_order_items(id)
            log.warning("product.delete_blocked", order_item_count=item_count)
            raise ProductHasOrderItems(item_count) from None

        if not deleted:
            raise ProductNotFound()
        log.info("product.deleted")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> QuerySet[Product]:
        """Return products, newest first, optionally filtered."""
        return self._repo.list(filters)

    def get_product(self, id: UUID) -> Product:
        """Retrieve a single product by ID.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound()
        return product
