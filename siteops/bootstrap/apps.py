"""
SiteOps Bootstrap - Django App
==============================
Owns the process-wide PolicyFacade. ready() builds it from
settings.SITEOPS_POLICY and, for processes that will answer permission
or approval queries, proves the tables sound before the first request.

Tooling invocations (shell, migrations, the test runner) get the facade
but not the self-check.
"""

import logging
import os
import sys

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger("siteops.bootstrap")

TOOLING_COMMANDS = frozenset({
    "check",
    "collectstatic",
    "makemigrations",
    "migrate",
    "shell",
    "test",
})


def self_check_skip_reason():
    """Why this process should not run the self-check, or None."""
    if "PYTEST_CURRENT_TEST" in os.environ or "pytest" in sys.modules:
        return "running under pytest"
    command = sys.argv[1] if len(sys.argv) > 1 else None
    if command in TOOLING_COMMANDS:
        return f"'{command}' does not serve policy queries"
    return None


def build_policy_facade():
    """PolicyFacade configured from the SITEOPS_POLICY setting."""
    from siteops.permissions.config import PolicyConfig
    from siteops.permissions.facade import PolicyFacade

    return PolicyFacade(config=PolicyConfig.from_settings(settings))


class SiteOpsBootstrapConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "siteops.bootstrap"
    label = "siteops_bootstrap"
    verbose_name = "SiteOps Policy"

    facade = None

    def ready(self):
        self.facade = build_policy_facade()

        reason = self_check_skip_reason()
        if reason is not None:
            logger.info(f"Policy self-check skipped: {reason}.")
            return

        from siteops.bootstrap.self_check import run_policy_checks
        run_policy_checks(self.facade)
