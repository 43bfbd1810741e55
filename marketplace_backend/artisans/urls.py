# artisans/urls.py

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from artisans.views import ArtisanProfileViewSet

router = SimpleRouter()
router.register(r"", ArtisanProfileViewSet, basename="artisans")

urlpatterns = [
    path("", include(router.urls)),
]
