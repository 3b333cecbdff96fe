"""
SiteOps Permissions - Permission Matrix
=======================================
Static (role, resource, action) → allowed table.

One RolePermissions record per role. The table is built once at import
time and is total over Role × ResourceKind × Action; PermissionMatrix
refuses to construct from a table that is not.

Financial ceilings are in DEFAULT_CURRENCY (LYD).
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Tuple

from siteops.permissions.constants import (
    APPROVABLE_RESOURCES,
    ResourceKind,
    Role,
)
from siteops.permissions.exceptions import PolicyTableError
from siteops.permissions.models import UNLIMITED, Ceiling, RolePermissions
from siteops.permissions.validation import (
    coerce_action,
    coerce_resource,
    coerce_role,
)

R = ResourceKind


def _grant(*allowed: ResourceKind) -> dict[ResourceKind, bool]:
    return {resource: resource in allowed for resource in ResourceKind}


def _approve(*allowed: ResourceKind) -> dict[ResourceKind, bool]:
    return {resource: resource in allowed for resource in APPROVABLE_RESOURCES}


_ALL = tuple(ResourceKind)
_ALL_BUT_REPORTS = tuple(r for r in ResourceKind if r is not R.REPORTS)


# ══════════════════════════════════════════════════════════════
# ROLE PERMISSION TABLE
# ══════════════════════════════════════════════════════════════

ROLE_PERMISSIONS: Tuple[RolePermissions, ...] = (
    RolePermissions(
        role=Role.PMO,
        org_wide=True, area_wide=True, project_wide=True, zone_wide=True,
        site_only=False,
        create=_grant(*_ALL),
        update=_grant(*_ALL_BUT_REPORTS),
        delete=_grant(*_ALL_BUT_REPORTS),
        approve=_approve(*APPROVABLE_RESOURCES),
        expense_limit=UNLIMITED,
        safe_limit=UNLIMITED,
        payroll_limit=UNLIMITED,
        can_generate_reports=True,
        can_view_all_reports=True,
        can_export_reports=True,
    ),
    RolePermissions(
        role=Role.AREA_MANAGER,
        org_wide=False, area_wide=True, project_wide=True, zone_wide=True,
        site_only=False,
        create=_grant(*_ALL),
        update=_grant(*_ALL_BUT_REPORTS),
        delete=_grant(R.SITES, R.TASKS, R.EMPLOYEES, R.EXPENSES, R.REVENUES),
        approve=_approve(*APPROVABLE_RESOURCES),
        expense_limit=Ceiling.of(50_000),
        safe_limit=Ceiling.of(100_000),
        payroll_limit=UNLIMITED,
        can_generate_reports=True,
        can_view_all_reports=True,
        can_export_reports=True,
    ),
    RolePermissions(
        role=Role.PROJECT_MANAGER,
        org_wide=False, area_wide=False, project_wide=True, zone_wide=True,
        site_only=False,
        create=_grant(
            R.SITES, R.TASKS, R.EMPLOYEES, R.EXPENSES, R.REVENUES,
            R.PAYROLL, R.REPORTS,
        ),
        update=_grant(
            R.SITES, R.TASKS, R.EMPLOYEES, R.EXPENSES, R.REVENUES, R.PAYROLL,
        ),
        delete=_grant(R.TASKS, R.EXPENSES, R.REVENUES),
        approve=_approve(R.TASKS, R.EXPENSES, R.REVENUES),
        expense_limit=Ceiling.of(25_000),
        safe_limit=Ceiling.of(10_000),
        payroll_limit=Ceiling.of(50_000),
        can_generate_reports=True,
        can_view_all_reports=False,
        can_export_reports=True,
    ),
    RolePermissions(
        role=Role.ZONE_MANAGER,
        org_wide=False, area_wide=False, project_wide=False, zone_wide=True,
        site_only=False,
        create=_grant(
            R.SITES, R.TASKS, R.EMPLOYEES, R.EXPENSES, R.REVENUES, R.REPORTS,
        ),
        update=_grant(R.SITES, R.TASKS, R.EMPLOYEES, R.EXPENSES, R.REVENUES),
        delete=_grant(R.TASKS),
        approve=_approve(R.TASKS),
        expense_limit=Ceiling.of(10_000),
        safe_limit=Ceiling.of(5_000),
        # No payroll approve flag, but no payroll cap either.
        payroll_limit=UNLIMITED,
        can_generate_reports=True,
        can_view_all_reports=False,
        can_export_reports=False,
    ),
    RolePermissions(
        role=Role.SITE_ENGINEER,
        org_wide=False, area_wide=False, project_wide=False, zone_wide=False,
        site_only=True,
        create=_grant(R.TASKS),
        update=_grant(R.TASKS),
        delete=_grant(),
        approve=_approve(),
        expense_limit=Ceiling.of(0),
        safe_limit=Ceiling.of(0),
        payroll_limit=Ceiling.of(0),
        can_generate_reports=False,
        can_view_all_reports=False,
        can_export_reports=False,
    ),
    RolePermissions(
        role=Role.CASHIER,
        org_wide=False, area_wide=False, project_wide=False, zone_wide=False,
        site_only=True,
        create=_grant(R.EXPENSES, R.REVENUES, R.SAFES),
        update=_grant(R.EXPENSES, R.REVENUES, R.SAFES),
        delete=_grant(),
        approve=_approve(),
        expense_limit=Ceiling.of(5_000),  # receipts
        safe_limit=Ceiling.of(20_000),
        payroll_limit=Ceiling.of(0),
        can_generate_reports=False,
        can_view_all_reports=False,
        can_export_reports=False,
    ),
    RolePermissions(
        role=Role.VIEWER,
        org_wide=False, area_wide=False, project_wide=False, zone_wide=False,
        site_only=True,
        create=_grant(),
        update=_grant(),
        delete=_grant(),
        approve=_approve(),
        expense_limit=Ceiling.of(0),
        safe_limit=Ceiling.of(0),
        payroll_limit=Ceiling.of(0),
        can_generate_reports=False,
        can_view_all_reports=False,
        can_export_reports=False,
    ),
    RolePermissions(
        role=Role.ADMIN,
        org_wide=True, area_wide=True, project_wide=True, zone_wide=True,
        site_only=True,
        create=_grant(*_ALL),
        update=_grant(*_ALL_BUT_REPORTS),
        delete=_grant(*_ALL_BUT_REPORTS),
        approve=_approve(*APPROVABLE_RESOURCES),
        expense_limit=UNLIMITED,
        safe_limit=UNLIMITED,
        payroll_limit=UNLIMITED,
        can_generate_reports=True,
        can_view_all_reports=True,
        can_export_reports=True,
    ),
)


# ══════════════════════════════════════════════════════════════
# MATRIX
# ══════════════════════════════════════════════════════════════

class PermissionMatrix:
    """
    Read-only index of RolePermissions by role.

    Usage:
        matrix = PermissionMatrix()
        matrix.has_permission("ZONE_MANAGER", "tasks", "approve")  # True
    """

    def __init__(self, records=ROLE_PERMISSIONS):
        index: dict[Role, RolePermissions] = {}
        for record in records:
            if not isinstance(record, RolePermissions):
                raise PolicyTableError(
                    "permission_matrix",
                    f"expected RolePermissions, got {type(record).__name__}",
                )
            if record.role in index:
                raise PolicyTableError(
                    "permission_matrix",
                    f"duplicate role '{record.role.value}'",
                )
            index[record.role] = record

        missing = set(Role) - set(index)
        if missing:
            raise PolicyTableError(
                "permission_matrix",
                f"missing roles {sorted(r.value for r in missing)}",
            )
        self._records: Mapping[Role, RolePermissions] = MappingProxyType(index)

    def roles(self) -> Tuple[Role, ...]:
        return tuple(self._records)

    def get(self, role) -> RolePermissions:
        """Frozen snapshot for a role."""
        return self._records[coerce_role(role)]

    def has_permission(self, role, resource, action) -> bool:
        record = self.get(role)
        return record.allows(coerce_resource(resource), coerce_action(action))
