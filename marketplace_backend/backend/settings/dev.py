"""
PATH: backend/settings/dev.py

Local development: sqlite by default, DEBUG on, the storefront dev server
allowed through CORS, service-layer logs at DEBUG.
"""

from __future__ import annotations

from .base import *  # noqa: F403
from .base import LOGGING, MARKETPLACE_APPS, env

DEBUG = True

ALLOWED_HOSTS = env.list("ALLOWED_HOSTS", default=["localhost", "127.0.0.1", "0.0.0.0"])

CORS_ALLOWED_ORIGINS = env.list(
    "CORS_ALLOWED_ORIGINS",
    default=["http://localhost:5173", "http://127.0.0.1:5173"],
)

LOGGING["loggers"].update(
    {
        app.split(".")[0]: {"handlers": ["console"], "level": "DEBUG", "propagate": False}
        for app in MARKETPLACE_APPS
    }
)
