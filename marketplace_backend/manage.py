#!/usr/bin/env python
"""
PATH: manage.py

Marketplace management entrypoint.

`backend.settings` is a package with no settings of its own, so an unset
or package-level DJANGO_SETTINGS_MODULE is pointed at the dev module.
Deploys set backend.settings.prod explicitly.
"""

from __future__ import annotations

import os
import sys

DEFAULT_SETTINGS = "backend.settings.dev"


def _ensure_settings_module() -> None:
    current = (os.environ.get("DJANGO_SETTINGS_MODULE") or "").strip()
    if current in ("", "backend.settings"):
        os.environ["DJANGO_SETTINGS_MODULE"] = DEFAULT_SETTINGS


def main() -> None:
    _ensure_settings_module()

    from django.core.management import execute_from_command_line

    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()
