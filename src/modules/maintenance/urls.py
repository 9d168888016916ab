"""Admin utility URL configuration."""

from __future__ import annotations

from rest_framework.routers import SimpleRouter

from modules.maintenance.views import AdminViewSet

router = SimpleRouter(trailing_slash=False)
router.register("admin", AdminViewSet, basename="admin")

urlpatterns = router.urls
