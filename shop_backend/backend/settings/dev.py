# backend/settings/dev.py
"""
PATH: backend/settings/dev.py

LOCAL DEVELOPMENT SETTINGS
Safe + convenient defaults.
"""

from __future__ import annotations

from .base import *  # noqa: F403
from .base import PAYMENTS, env

DEBUG = True

ALLOWED_HOSTS = env.list(
    "ALLOWED_HOSTS", default=["localhost", "127.0.0.1", "testserver"]
)

CORS_ALLOWED_ORIGINS = env.list(
    "CORS_ALLOWED_ORIGINS", default=["http://localhost:5173"]
)

CSRF_TRUSTED_ORIGINS = env.list(
    "CSRF_TRUSTED_ORIGINS", default=["http://localhost:5173"]
)

CORS_ALLOW_CREDENTIALS = True

# Local webhook testing (stripe listen --forward-to ...) prints its own secret;
# fall back to a fixed one so the endpoint is usable without configuration.
if not PAYMENTS["STRIPE"]["WEBHOOK_SECRET"]:
    PAYMENTS["STRIPE"]["WEBHOOK_SECRET"] = "whsec_dev_local"
