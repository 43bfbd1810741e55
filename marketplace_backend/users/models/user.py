"""
PATH: users/models/user.py

MARKETPLACE ACCOUNT

- Login identity is the email, stored lowercased so lookups and the
  unique constraint agree.
- role (customer / artisan / admin) is fixed at creation.
- is_active=False deactivates the account: it cannot log in and every
  access decision treats it as anonymous.
"""

from __future__ import annotations

import uuid

from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.core.exceptions import ValidationError
from django.db import models

from permissions.roles import ROLE_ADMIN, ROLE_ARTISAN, ROLE_CHOICES, ROLE_CUSTOMER


def normalize_login_email(email) -> str:
    return (email or "").strip().lower()


class UserManager(BaseUserManager):
    use_in_migrations = True

    def create_user(self, email=None, password=None, **extra_fields):
        email = normalize_login_email(email)
        if not email:
            raise ValueError("An email address is required")

        extra_fields.setdefault("role", ROLE_CUSTOMER)
        user = self.model(email=email, **extra_fields)

        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.full_clean(exclude=["password"])
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """Superusers are marketplace admins with Django admin access."""
        if not password:
            raise ValueError("An admin account needs a password")

        extra_fields.update(role=ROLE_ADMIN, is_staff=True, is_superuser=True, is_active=True)
        return self.create_user(email=email, password=password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)

    first_name = models.CharField(max_length=100, blank=True)
    last_name = models.CharField(max_length=100, blank=True)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_CUSTOMER)

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = []

    class Meta:
        ordering = ["-created_at"]

    def clean(self):
        self.email = normalize_login_email(self.email)
        if not self.email:
            raise ValidationError({"email": "An email address is required"})

    @property
    def is_artisan(self) -> bool:
        return self.role == ROLE_ARTISAN

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __str__(self):
        return f"{self.email} ({self.role})"
