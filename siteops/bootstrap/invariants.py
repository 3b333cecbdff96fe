"""
SiteOps Bootstrap - Invariant Checks
====================================
Each function verifies one policy law against a facade.
If any check fails → SystemBootstrapError is raised.

These checks do NOT:
- Patch a broken table
- Substitute defaults
- Silence failures
"""

import logging

from siteops.bootstrap.errors import SystemBootstrapError
from siteops.permissions.constants import (
    FALLBACK_APPROVER,
    MAX_CHAIN_LENGTH,
    TERMINAL_ROLES,
    Action,
    FinancialCategory,
    ResourceKind,
    Role,
)
from siteops.permissions.models import Ceiling

logger = logging.getLogger("siteops.bootstrap")


# ══════════════════════════════════════════════════════════════
# CHECK 1: Permission Matrix Is Total
# ══════════════════════════════════════════════════════════════

def check_matrix_totality(facade):
    """
    Every role × resource × action must answer a bool without raising.
    """
    checked = 0
    for role in Role:
        for resource in ResourceKind:
            for action in Action:
                try:
                    answer = facade.has_permission(role, resource, action)
                except Exception as exc:
                    raise SystemBootstrapError(
                        invariant="MATRIX_TOTALITY",
                        detail=(
                            f"has_permission({role.value}, {resource.value}, "
                            f"{action.value}) raised "
                            f"{type(exc).__name__}: {exc}"
                        ),
                    )
                if not isinstance(answer, bool):
                    raise SystemBootstrapError(
                        invariant="MATRIX_TOTALITY",
                        detail=(
                            f"has_permission({role.value}, {resource.value}, "
                            f"{action.value}) returned {answer!r}, not a bool."
                        ),
                    )
                checked += 1

    logger.info(f"✓ Permission matrix total ({checked} entries).")


# ══════════════════════════════════════════════════════════════
# CHECK 2: Threshold Table Is Total
# ══════════════════════════════════════════════════════════════

def check_threshold_totality(facade):
    for role in Role:
        for category in FinancialCategory:
            try:
                ceiling = facade.get_ceiling(role, category)
            except Exception as exc:
                raise SystemBootstrapError(
                    invariant="THRESHOLD_TOTALITY",
                    detail=(
                        f"No ceiling for {role.value}/{category.value}: "
                        f"{type(exc).__name__}: {exc}"
                    ),
                )
            if not isinstance(ceiling, Ceiling):
                raise SystemBootstrapError(
                    invariant="THRESHOLD_TOTALITY",
                    detail=(
                        f"Ceiling for {role.value}/{category.value} is "
                        f"{ceiling!r}, not a Ceiling."
                    ),
                )

    logger.info("✓ Threshold table total.")


# ══════════════════════════════════════════════════════════════
# CHECK 3: Every Role Has A Well-Formed Chain
# ══════════════════════════════════════════════════════════════

def check_chain_totality(facade):
    for role in Role:
        try:
            chain = facade.get_approval_chain(role)
        except Exception as exc:
            raise SystemBootstrapError(
                invariant="CHAIN_TOTALITY",
                detail=(
                    f"No approval chain for {role.value}: "
                    f"{type(exc).__name__}: {exc}"
                ),
            )
        if role in chain or len(set(chain)) != len(chain):
            raise SystemBootstrapError(
                invariant="CHAIN_TOTALITY",
                detail=f"Chain for {role.value} has a cycle: {chain}.",
            )
        if len(chain) > MAX_CHAIN_LENGTH:
            raise SystemBootstrapError(
                invariant="CHAIN_TOTALITY",
                detail=(
                    f"Chain for {role.value} has {len(chain)} steps "
                    f"(max {MAX_CHAIN_LENGTH})."
                ),
            )

    logger.info("✓ Approval chains defined for every role.")


# ══════════════════════════════════════════════════════════════
# CHECK 4: Each Escalation Step Gains Authority
# ══════════════════════════════════════════════════════════════

def check_chain_monotonicity(facade):
    """
    Each successive role on a chain must have a strictly higher ceiling
    than its predecessor in at least one financial category.
    """
    for role in Role:
        chain = facade.get_approval_chain(role)
        for lower, higher in zip(chain, chain[1:]):
            gains = [
                category
                for category in FinancialCategory
                if facade.get_ceiling(higher, category).exceeds(
                    facade.get_ceiling(lower, category)
                )
            ]
            if not gains:
                raise SystemBootstrapError(
                    invariant="CHAIN_MONOTONICITY",
                    detail=(
                        f"In the chain of {role.value}, {higher.value} "
                        f"has no higher ceiling than {lower.value}."
                    ),
                )

    logger.info("✓ Escalation chains strictly gain authority.")


# ══════════════════════════════════════════════════════════════
# CHECK 5: Fallback Approver Is Unlimited
# ══════════════════════════════════════════════════════════════

def check_fallback_unlimited(facade):
    """
    The router sends unmatched requests to the fallback approver without
    checking its ceiling. That is only sound while every ceiling is
    unlimited.
    """
    for category in FinancialCategory:
        ceiling = facade.get_ceiling(FALLBACK_APPROVER, category)
        if not ceiling.is_unlimited:
            raise SystemBootstrapError(
                invariant="PMO_UNLIMITED",
                detail=(
                    f"{FALLBACK_APPROVER.value} {category.value} ceiling is "
                    f"{ceiling}; the routing fallback requires unlimited."
                ),
            )

    logger.info(f"✓ {FALLBACK_APPROVER.value} ceilings unlimited.")


# ══════════════════════════════════════════════════════════════
# CHECK 6: Terminal Roles Do Not Escalate
# ══════════════════════════════════════════════════════════════

def check_terminal_roles(facade):
    for role in sorted(TERMINAL_ROLES, key=lambda r: r.value):
        if not facade.resolver.is_terminal(role):
            chain = facade.get_approval_chain(role)
            raise SystemBootstrapError(
                invariant="TERMINAL_ROLES",
                detail=(
                    f"{role.value} is decision-final but escalates to "
                    f"{[r.value for r in chain]}."
                ),
            )

    logger.info("✓ Terminal roles have empty chains.")


# ══════════════════════════════════════════════════════════════
# CHECK 7: Catalog Scope Matches Matrix Flags
# ══════════════════════════════════════════════════════════════

def check_scope_consistency(facade):
    for role in facade.catalog.roles():
        declared = facade.catalog.scope_of(role)
        flagged = facade.get_role_permissions(role).widest_scope
        if declared is not flagged:
            raise SystemBootstrapError(
                invariant="SCOPE_CONSISTENCY",
                detail=(
                    f"{role.value} is catalogued as {declared.value} but its "
                    f"permission flags give {flagged.value}."
                ),
            )

    logger.info("✓ Role catalog scopes match permission flags.")
