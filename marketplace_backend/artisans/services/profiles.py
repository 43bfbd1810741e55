# artisans/services/profiles.py

"""
ARTISAN PROFILE SERVICE

Rules:
- a profile can only be created for a user with the artisan role
- one profile per user (second create -> DuplicateError)
- deleting a profile cascades to its products; products already sold
  (referenced by order items) make the delete fail with a conflict
"""

from __future__ import annotations

import logging

from django.db import transaction
from django.db.models import Q

from artisans.models import ArtisanProfile
from backend.exceptions import DomainValidationError, DuplicateError, NotFoundError
from permissions.roles import ROLE_ARTISAN

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("display_name", "bio", "profile_image_url", "cover_image_url")


def get_profile(profile_id) -> ArtisanProfile:
    try:
        return ArtisanProfile.objects.select_related("user").get(pk=profile_id)
    except ArtisanProfile.DoesNotExist:
        raise NotFoundError(f"Artisan profile {profile_id} not found")


def get_profile_for_user(user_id) -> ArtisanProfile:
    profile = ArtisanProfile.objects.select_related("user").filter(user_id=user_id).first()
    if profile is None:
        raise NotFoundError("Artisan profile not found for this user")
    return profile


def search_profiles(query: str):
    query = (query or "").strip()
    qs = ArtisanProfile.objects.select_related("user")
    if not query:
        return qs
    return qs.filter(Q(display_name__icontains=query) | Q(bio__icontains=query))


def _clean_display_name(value) -> str:
    value = (value or "").strip()
    if not value:
        raise DomainValidationError("display_name is required")
    return value


@transaction.atomic
def create_profile(
    *,
    user,
    display_name: str,
    bio: str = "",
    profile_image_url: str = "",
    cover_image_url: str = "",
) -> ArtisanProfile:
    if getattr(user, "role", None) != ROLE_ARTISAN:
        raise DomainValidationError("Only artisan accounts can own an artisan profile")

    if ArtisanProfile.objects.filter(user=user).exists():
        raise DuplicateError("This user already has an artisan profile")

    profile = ArtisanProfile.objects.create(
        user=user,
        display_name=_clean_display_name(display_name),
        bio=(bio or "").strip(),
        profile_image_url=(profile_image_url or "").strip(),
        cover_image_url=(cover_image_url or "").strip(),
    )
    logger.info("Artisan profile created", extra={"profile_id": profile.id, "user_id": str(user.pk)})
    return profile


@transaction.atomic
def update_profile(*, profile_id, **changes) -> ArtisanProfile:
    profile = get_profile(profile_id)

    unknown = set(changes) - set(EDITABLE_FIELDS)
    if unknown:
        raise DomainValidationError(f"Fields not editable: {', '.join(sorted(unknown))}")

    for name, value in changes.items():
        if name == "display_name":
            value = _clean_display_name(value)
        else:
            value = (value or "").strip()
        setattr(profile, name, value)

    profile.save()
    return profile


def set_profile_image(*, profile_id, image_url) -> ArtisanProfile:
    return update_profile(profile_id=profile_id, profile_image_url=image_url)


def set_cover_image(*, profile_id, image_url) -> ArtisanProfile:
    return update_profile(profile_id=profile_id, cover_image_url=image_url)


def remove_profile_image(*, profile_id) -> ArtisanProfile:
    return update_profile(profile_id=profile_id, profile_image_url="")


def remove_cover_image(*, profile_id) -> ArtisanProfile:
    return update_profile(profile_id=profile_id, cover_image_url="")


@transaction.atomic
def delete_profile(*, profile_id) -> None:
    profile = get_profile(profile_id)
    profile.delete()
    logger.info("Artisan profile deleted", extra={"profile_id": profile_id})
