"""
PATH: users/auth_backends.py

Email login for marketplace accounts.

Used by authenticate() (login view, Django admin) and by the SimpleJWT
token endpoint, which passes the USERNAME_FIELD ("email") as a keyword.
Permission checks for the admin site come from ModelBackend.
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.contrib.auth.backends import ModelBackend

User = get_user_model()


class EmailBackend(ModelBackend):
    def authenticate(self, request, username=None, password=None, email=None, **kwargs):
        login = (email or username or "").strip()
        if not login or password is None:
            return None

        user = User.objects.filter(email__iexact=login).first()
        if user is None:
            # Same hashing cost for unknown emails.
            User().set_password(password)
            return None

        if user.check_password(password) and self.user_can_authenticate(user):
            return user
        return None

    def get_user(self, user_id):
        user = User.objects.filter(pk=user_id).first()
        if user is None or not self.user_can_authenticate(user):
            return None
        return user
