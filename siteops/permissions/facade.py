"""
SiteOps Permissions - Policy Facade
===================================
The query surface every caller goes through.

Simple checks read the matrix / threshold table directly. Escalation
queries go through the chain resolver and router. The module-level
functions are bound to a default facade built once at import time.
"""

from __future__ import annotations

from typing import Optional, Tuple

from siteops.permissions.catalog import RoleCatalog
from siteops.permissions.chain import ChainResolver
from siteops.permissions.config import PolicyConfig
from siteops.permissions.constants import Role
from siteops.permissions.matrix import PermissionMatrix
from siteops.permissions.models import Ceiling, RolePermissions
from siteops.permissions.router import ApprovalQuery, ApprovalRouter, RoutingDecision
from siteops.permissions.thresholds import ThresholdTable
from siteops.permissions.validation import (
    coerce_report_capability,
    coerce_scope,
)


class PolicyFacade:
    """
    Read-only policy queries.

    Usage:
        policy = PolicyFacade()
        policy.has_permission("CASHIER", "safes", "create")           # True
        policy.can_approve_amount("ZONE_MANAGER", 10_000, "expense")  # True
        policy.get_next_approver("ZONE_MANAGER", 15_000, "expense")
        # → Role.PROJECT_MANAGER
    """

    def __init__(
        self,
        config: PolicyConfig | None = None,
        matrix: PermissionMatrix | None = None,
        catalog: RoleCatalog | None = None,
        resolver: ChainResolver | None = None,
    ):
        self._config = config or PolicyConfig()
        self._matrix = matrix or PermissionMatrix()
        self._catalog = catalog or RoleCatalog()
        self._resolver = resolver or ChainResolver()
        self._thresholds = ThresholdTable(self._matrix)
        self._router = ApprovalRouter(
            resolver=self._resolver,
            thresholds=self._thresholds,
            catalog=self._catalog,
            strict_initiation=self._config.strict_initiation,
        )

    # ── Components (read-only) ────────────────────────────────

    @property
    def config(self) -> PolicyConfig:
        return self._config

    @property
    def matrix(self) -> PermissionMatrix:
        return self._matrix

    @property
    def catalog(self) -> RoleCatalog:
        return self._catalog

    @property
    def resolver(self) -> ChainResolver:
        return self._resolver

    @property
    def thresholds(self) -> ThresholdTable:
        return self._thresholds

    # ── Queries ───────────────────────────────────────────────

    def has_permission(self, role, resource, action) -> bool:
        return self._matrix.has_permission(role, resource, action)

    def can_approve_amount(self, role, amount, category) -> bool:
        return self._thresholds.can_approve_amount(role, amount, category)

    def get_ceiling(self, role, category) -> Ceiling:
        return self._thresholds.ceiling(role, category)

    def get_approval_chain(self, role) -> Tuple[Role, ...]:
        return self._resolver.get_approval_chain(role)

    def get_next_approver(self, role, amount=None, category=None) -> Optional[Role]:
        return self._router.next_approver(role, amount, category)

    def route(self, role, amount=None, category=None) -> RoutingDecision:
        return self._router.route(ApprovalQuery(role, amount, category))

    def get_role_permissions(self, role) -> RolePermissions:
        return self._matrix.get(role)

    def can_view_scope(self, role, scope) -> bool:
        return self._matrix.get(role).can_view(coerce_scope(scope))

    def has_report_capability(self, role, capability) -> bool:
        return self._matrix.get(role).has_report_capability(
            coerce_report_capability(capability)
        )


# ══════════════════════════════════════════════════════════════
# DEFAULT FACADE
# ══════════════════════════════════════════════════════════════

_default_facade = PolicyFacade()


def get_default_facade() -> PolicyFacade:
    return _default_facade


def has_permission(role, resource, action) -> bool:
    return _default_facade.has_permission(role, resource, action)


def can_approve_amount(role, amount, category) -> bool:
    return _default_facade.can_approve_amount(role, amount, category)


def get_approval_chain(role) -> Tuple[Role, ...]:
    return _default_facade.get_approval_chain(role)


def get_next_approver(role, amount=None, category=None) -> Optional[Role]:
    return _default_facade.get_next_approver(role, amount, category)


def get_role_permissions(role) -> RolePermissions:
    return _default_facade.get_role_permissions(role)


def can_view_scope(role, scope) -> bool:
    return _default_facade.can_view_scope(role, scope)


def has_report_capability(role, capability) -> bool:
    return _default_facade.has_report_capability(role, capability)
