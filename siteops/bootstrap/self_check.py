"""
SiteOps Bootstrap - Self-Check Orchestrator
===========================================
Runs all policy invariant checks at startup.
If any check fails → SystemBootstrapError propagates → app refuses to start.

Check order:
1. Permission matrix totality
2. Threshold table totality
3. Chain totality
4. Chain monotonicity
5. Fallback approver unlimited
6. Terminal roles
7. Scope consistency
"""

import logging

from siteops.bootstrap.invariants import (
    check_chain_monotonicity,
    check_chain_totality,
    check_fallback_unlimited,
    check_matrix_totality,
    check_scope_consistency,
    check_terminal_roles,
    check_threshold_totality,
)

logger = logging.getLogger("siteops.bootstrap")


def run_policy_checks(facade=None):
    """
    Execute all policy invariant checks against `facade`
    (the default facade when omitted).
    """
    if facade is None:
        from siteops.permissions.facade import get_default_facade
        facade = get_default_facade()

    logger.info("═══ SiteOps Policy Self-Check Starting ═══")

    check_matrix_totality(facade)
    check_threshold_totality(facade)
    check_chain_totality(facade)
    check_chain_monotonicity(facade)
    check_fallback_unlimited(facade)
    check_terminal_roles(facade)
    check_scope_consistency(facade)

    logger.info("═══ SiteOps Policy Self-Check PASSED ═══")
