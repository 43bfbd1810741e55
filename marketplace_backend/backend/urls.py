# backend/urls.py
"""
MARKETPLACE URL MAP

    /api/            service index (public)
    /api/health/     liveness + database probe (public)
    /api/schema/     OpenAPI document
    /api/docs/       Swagger UI
    /api/auth/       accounts + JWT
    /api/artisans/   seller profiles
    /api/catalog/    categories, products, product images
    /api/cart/       the caller's cart
    /api/orders/     checkout + fulfillment
    /<ADMIN_PATH>    Django admin (path configurable)
"""

from __future__ import annotations

from django.conf import settings
from django.contrib import admin
from django.db import connection
from django.db.utils import DatabaseError
from django.urls import include, path
from django.views.generic import RedirectView
from drf_spectacular.utils import OpenApiResponse, extend_schema
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

API_MODULES = {
    "auth": "/api/auth/",
    "artisans": "/api/artisans/",
    "catalog": "/api/catalog/",
    "cart": "/api/cart/",
    "orders": "/api/orders/",
}


@extend_schema(responses={200: OpenApiResponse(description="Service name, module map and docs links")}, tags=["Platform"])
@api_view(["GET"])
@permission_classes([AllowAny])
def api_root(request):
    return Response(
        {
            "message": "Artisan Marketplace API is running",
            "modules": API_MODULES,
            "auth": {
                "register": "/api/auth/register/",
                "register_artisan": "/api/auth/register-artisan/",
                "login": "/api/auth/login/",
                "refresh": "/api/auth/jwt/refresh/",
            },
            "docs": {"swagger": "/api/docs/", "schema": "/api/schema/"},
        }
    )


@extend_schema(
    responses={
        200: OpenApiResponse(description='{"status": "ok", "db": "ok"}'),
        503: OpenApiResponse(description='{"status": "degraded", "db": "down"}'),
    },
    tags=["Platform"],
)
@api_view(["GET"])
@permission_classes([AllowAny])
def health_check(request):
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except DatabaseError:
        return Response({"status": "degraded", "db": "down"}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
    return Response({"status": "ok", "db": "ok"})


# Django admin wants a trailing slash.
ADMIN_PATH = settings.ADMIN_PATH.strip("/") + "/"

api_urlpatterns = [
    path("", api_root, name="api-root"),
    path("health/", health_check, name="health-check"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    path("docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("auth/", include("users.urls")),
    path("artisans/", include("artisans.urls")),
    path("catalog/", include("products.urls")),
    path("cart/", include("cart.urls")),
    path("orders/", include("orders.urls")),
]

urlpatterns = [
    path(ADMIN_PATH, admin.site.urls),
    path("", RedirectView.as_view(url="/api/docs/", permanent=False), name="root"),
    path("api/", include(api_urlpatterns)),
]
