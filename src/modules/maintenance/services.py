"""Development data utilities.

``DataAdminService`` seeds a small demo dataset, wipes every table and
reports row counts.  Seeding goes through the regular application
services so the demo data obeys the same rules as API-created data.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, List

import structlog
from django.db import transaction

from modules.customers.dtos import CreateCustomerDTO
from modules.customers.models import Customer
from modules.customers.repositories import CustomerDjangoRepository
from modules.customers.services import CustomerService
from modules.orders.constants import OrderStatus
from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
from modules.orders.models import Order, OrderItem
from modules.orders.repositories import OrderDjangoRepository
from modules.orders.services import OrderService
from modules.products.dtos import CreateProductDTO
from modules.products.models import Product
from modules.products.repositories import ProductDjangoRepository
from modules.products.services import ProductService

logger = structlog.get_logger(__name__)

SEED_CUSTOMERS = [
    ("John Doe", "john.doe@example.com", "+1-555-0101"),
    ("Jane Smith", "jane.smith@example.com", "+1-555-0102"),
    ("Bob Johnson", "bob.johnson@example.com", "+1-555-0103"),
    ("Alice Brown", "alice.brown@example.com", "+1-555-0104"),
]

SEED_PRODUCTS = [
    ("Wireless Mouse", "29.99", 50),
    ("Mechanical Keyboard", "89.99", 25),
    ("Gaming Headset", "149.99", 15),
    ("USB-C Hub", "45.99", 30),
    ("Monitor Stand", "79.99", 20),
    ("Desk Lamp", "35.99", 40),
]

# (customer index, status, [(product index, quantity), ...])
SEED_ORDERS = [
    (0, OrderStatus.COMPLETED, [(0, 2), (1, 1)]),
    (1, OrderStatus.PENDING, [(2, 1), (3, 3)]),
    (2, OrderStatus.COMPLETED, [(4, 1)]),
    (3, OrderStatus.CANCELLED, [(5, 2)]),
]


class DataAdminService:
    def __init__(self) -> None:
        self._customers = CustomerService(repository=CustomerDjangoRepository())
        self._products = ProductService(repository=ProductDjangoRepository())
        self._orders = OrderService(order_repository=OrderDjangoRepository())

    @transaction.atomic
    def seed(self) -> Dict[str, List]:
        """Replace all data with the demo dataset.

        Returns the created customers, products and orders.
        """
        self.clear()

        customers = [
            self._customers.create_customer(
                CreateCustomerDTO(name=name, email=email, phone=phone)
            )
            for name, email, phone in SEED_CUSTOMERS
        ]
        products = [
            self._products.create_product(
                CreateProductDTO(name=name, price=Decimal(price), stock=stock)
            )
            for name, price, stock in SEED_PRODUCTS
        ]
        orders = []
        for customer_index, order_status, lines in SEED_ORDERS:
            dto = CreateOrderDTO(
                customer_id=customers[customer_index].id,
                status=order_status.value,
                items=[
                    CreateOrderItemDTO(
                        product_id=products[product_index].id,
                        quantity=quantity,
                        price=products[product_index].price,
                    )
                    for product_index, quantity in lines
                ],
            )
            orders.append(self._orders.create_order(dto))

        logger.info(
            "data.seeded",
            customers=len(customers),
            products=len(products),
            orders=len(orders),
        )
        return {"customers": customers, "products": products, "orders": orders}

    @transaction.atomic
    def clear(self) -> None:
        """Delete every row, children before parents."""
        OrderItem.objects.all().delete()
        Order.objects.all().delete()
        Customer.objects.all().delete()
        Product.objects.all().delete()
        logger.info("data.cleared")

    def stats(self) -> Dict[str, int]:
        return {
            "customers": Customer.objects.count(),
            "products": Product.objects.count(),
            "orders": Order.objects.count(),
            "orderItems": OrderItem.objects.count(),
        }
