"""
PATH: backend/settings/test.py

TEST SETTINGS

- in-memory SQLite (no DATABASE_URL needed)
- fast password hashing
- throttling off so API tests never hit rate limits
"""

from __future__ import annotations

from .base import *  # noqa: F403
from .base import REST_FRAMEWORK

DEBUG = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

# A None rate disables a throttle scope (views still declare their classes).
REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    "DEFAULT_THROTTLE_CLASSES": (),
    "DEFAULT_THROTTLE_RATES": {
        "anon": None,
        "user": None,
        "guest_order": None,
        "auth": None,
    },
}
