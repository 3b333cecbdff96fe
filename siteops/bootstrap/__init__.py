"""
SiteOps Bootstrap - Policy Self-Defense
=======================================
Ensures the permission policy never loads in an unsafe state.
"""

from siteops.bootstrap.errors import SystemBootstrapError
from siteops.bootstrap.self_check import run_policy_checks

__all__ = [
    "SystemBootstrapError",
    "run_policy_checks",
]
