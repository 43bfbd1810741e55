from .artisan_profile import (
    ArtisanProfileImageSerializer,
    ArtisanProfileSerializer,
    ArtisanProfileWriteSerializer,
)

__all__ = [
    "ArtisanProfileSerializer",
    "ArtisanProfileWriteSerializer",
    "ArtisanProfileImageSerializer",
]
