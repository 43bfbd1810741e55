from .artisan_profile import ArtisanProfile

__all__ = ["ArtisanProfile"]
