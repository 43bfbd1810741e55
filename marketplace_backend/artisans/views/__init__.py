from .artisan_profile import ArtisanProfileViewSet

__all__ = ["ArtisanProfileViewSet"]
