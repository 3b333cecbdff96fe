"""
SiteOps – Django Settings (Infrastructure Only)
===============================================
Django hosts the policy as an installed app so the self-check runs
once at startup. The permission tables themselves live in code, not
in settings.
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get("SITEOPS_SECRET_KEY", "siteops-dev-key")

DEBUG = os.environ.get("SITEOPS_DEBUG", "0") == "1"

ALLOWED_HOSTS = []

# ── Installed Apps ────────────────────────────────────────────
INSTALLED_APPS = [
    # ── SiteOps Modules ───────────────────────────────────
    "siteops.bootstrap.apps.SiteOpsBootstrapConfig",
]

MIDDLEWARE = []

# ── Policy ────────────────────────────────────────────────────
# Read by siteops.permissions.config.PolicyConfig.from_settings().
SITEOPS_POLICY = {
    "CURRENCY": "LYD",
    # VIEWER cannot initiate approvals. False: routing returns None.
    # True: routing raises NotAuthorizedToInitiate.
    "STRICT_INITIATION": False,
}

# ── Logging ───────────────────────────────────────────────────
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {
            "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "plain",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
    "loggers": {
        "siteops": {
            "level": os.environ.get("SITEOPS_LOG_LEVEL", "INFO"),
        },
    },
}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
