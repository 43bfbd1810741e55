# artisans/models/artisan_profile.py

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

from permissions.roles import ROLE_ARTISAN


class ArtisanProfile(models.Model):
    """
    Public seller profile.

    Rules:
    - Exactly one profile per user (OneToOne)
    - Only users with the artisan role may own a profile
    - Owns the artisan's products (deleting a profile cascades to them;
      products already referenced by orders block the delete)
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="artisan_profile",
    )

    display_name = models.CharField(max_length=200)
    bio = models.TextField(blank=True, default="")

    profile_image_url = models.CharField(max_length=500, blank=True, default="")
    cover_image_url = models.CharField(max_length=500, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["display_name"]
        indexes = [
            models.Index(fields=["display_name"], name="artisan_display_name_idx"),
        ]

    def clean(self):
        if not (self.display_name or "").strip():
            raise ValidationError("display_name is required")

        if self.user_id and getattr(self.user, "role", None) != ROLE_ARTISAN:
            raise ValidationError("User must have the artisan role to own an artisan profile")

    def __str__(self):
        return self.display_name
