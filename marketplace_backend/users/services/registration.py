# users/services/registration.py

"""
REGISTRATION SERVICE

- register_customer: plain customer account
- register_artisan: artisan account + its ArtisanProfile in one transaction
  (a failure creating the profile leaves no user behind)
"""

from __future__ import annotations

import logging

from django.contrib.auth import get_user_model
from django.db import transaction

from backend.exceptions import DuplicateError
from permissions.roles import ROLE_ARTISAN, ROLE_CUSTOMER

logger = logging.getLogger(__name__)

User = get_user_model()


def email_taken(email: str) -> bool:
    return User.objects.filter(email__iexact=(email or "").strip()).exists()


def _create_user(*, email, password, role, first_name="", last_name=""):
    if email_taken(email):
        raise DuplicateError("An account with this email already exists")

    return User.objects.create_user(
        email=email,
        password=password,
        first_name=(first_name or "").strip(),
        last_name=(last_name or "").strip(),
        role=role,
    )


@transaction.atomic
def register_customer(*, email, password, first_name="", last_name=""):
    user = _create_user(
        email=email,
        password=password,
        role=ROLE_CUSTOMER,
        first_name=first_name,
        last_name=last_name,
    )
    logger.info("Customer registered", extra={"user_id": str(user.pk)})
    return user


@transaction.atomic
def register_artisan(
    *,
    email,
    password,
    display_name,
    bio="",
    first_name="",
    last_name="",
):
    from artisans.services.profiles import create_profile

    user = _create_user(
        email=email,
        password=password,
        role=ROLE_ARTISAN,
        first_name=first_name,
        last_name=last_name,
    )
    profile = create_profile(user=user, display_name=display_name, bio=bio)

    logger.info(
        "Artisan registered",
        extra={"user_id": str(user.pk), "profile_id": profile.id},
    )
    return user, profile
