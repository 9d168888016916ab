"""Admin utility endpoints for development and demos."""

from __future__ import annotations

from rest_framework.decorators import action
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.maintenance.services import DataAdminService


class AdminViewSet(ViewSet):
    """Seed, clear and inspect the dataset."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = DataAdminService()

    @action(detail=False, methods=["post"])
    def seed(self, request: Request) -> Response:
        """POST /api/admin/seed"""
        data = self._service.seed()
        return Response(
            {
                "message": "Test data seeded successfully",
                "data": {
                    "customers": len(data["customers"]),
                    "products": len(data["products"]),
                    "orders": len(data["orders"]),
                },
            }
        )

    @action(detail=False, methods=["delete"])
    def clear(self, request: Request) -> Response:
        """DELETE /api/admin/clear"""
        self._service.clear()
        return Response({"message": "All data cleared successfully"})

    @action(detail=False, methods=["get"])
    def stats(self, request: Request) -> Response:
        """GET /api/admin/stats"""
        return Response(self._service.stats())
