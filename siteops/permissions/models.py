"""
SiteOps Permissions - Immutable Policy Records
==============================================
Ceiling: tagged approval limit (unlimited | finite amount).
RolePermissions: everything one role may do, as a frozen snapshot.

Maps are wrapped in MappingProxyType so a snapshot handed to a caller
cannot be used to rewrite the shared table.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from siteops.permissions.constants import (
    APPROVABLE_RESOURCES,
    SCOPE_RANK,
    Action,
    FinancialCategory,
    ReportCapability,
    ResourceKind,
    Role,
    ViewScope,
)


# ══════════════════════════════════════════════════════════════
# CEILING
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Ceiling:
    """
    Maximum amount a role may approve in one category.

    Unlimited and zero are different things: zero means the role may
    never approve the category, unlimited means no cap at all.
    Use Ceiling.of() / Ceiling.unlimited() rather than the constructor.
    """
    is_unlimited: bool
    amount: int = 0

    def __post_init__(self):
        if not isinstance(self.is_unlimited, bool):
            raise ValueError("is_unlimited must be a bool.")
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise ValueError("amount must be an int.")
        if self.amount < 0:
            raise ValueError("amount must be >= 0.")
        if self.is_unlimited and self.amount != 0:
            raise ValueError("An unlimited ceiling carries no amount.")

    @classmethod
    def of(cls, amount: int) -> Ceiling:
        return cls(is_unlimited=False, amount=amount)

    @classmethod
    def unlimited(cls) -> Ceiling:
        return cls(is_unlimited=True)

    def covers(self, amount) -> bool:
        """Inclusive: an amount exactly at the ceiling is approvable."""
        return self.is_unlimited or amount <= self.amount

    def exceeds(self, other: Ceiling) -> bool:
        """True if this ceiling is strictly higher than `other`."""
        if other.is_unlimited:
            return False
        if self.is_unlimited:
            return True
        return self.amount > other.amount

    def to_limit(self) -> int | None:
        """Legacy wire form: None means unlimited."""
        return None if self.is_unlimited else self.amount

    def __str__(self) -> str:
        return "unlimited" if self.is_unlimited else str(self.amount)


UNLIMITED = Ceiling.unlimited()


# ══════════════════════════════════════════════════════════════
# ROLE PERMISSIONS
# ══════════════════════════════════════════════════════════════

def _freeze_map(
    name: str,
    value: Mapping[ResourceKind, bool],
    expected: frozenset,
) -> Mapping[ResourceKind, bool]:
    if not isinstance(value, Mapping):
        raise ValueError(f"{name} must be a mapping.")
    keys = frozenset(value)
    if keys != expected:
        missing = sorted(r.value for r in expected - keys)
        extra = sorted(str(k) for k in keys - expected)
        raise ValueError(
            f"{name} must cover exactly {sorted(r.value for r in expected)}; "
            f"missing={missing} extra={extra}"
        )
    for resource, allowed in value.items():
        if not isinstance(allowed, bool):
            raise ValueError(f"{name}[{resource.value}] must be a bool.")
    return MappingProxyType(dict(value))


@dataclass(frozen=True)
class RolePermissions:
    """
    Full permission record for one role.

    Fields:
        role:            The role this record describes.
        org_wide .. site_only:
                         Hierarchical view breadth. Flags are not exclusive;
                         a PMO is org-wide and also area/project/zone-wide.
        create, update, delete:
                         ResourceKind → bool, total over every resource.
        approve:         ResourceKind → bool over APPROVABLE_RESOURCES only.
        expense_limit, safe_limit, payroll_limit:
                         Approval ceilings per financial category.
        can_generate_reports, can_view_all_reports, can_export_reports:
                         Reporting capabilities.
    """
    role: Role
    org_wide: bool
    area_wide: bool
    project_wide: bool
    zone_wide: bool
    site_only: bool
    create: Mapping[ResourceKind, bool]
    update: Mapping[ResourceKind, bool]
    delete: Mapping[ResourceKind, bool]
    approve: Mapping[ResourceKind, bool]
    expense_limit: Ceiling
    safe_limit: Ceiling
    payroll_limit: Ceiling
    can_generate_reports: bool
    can_view_all_reports: bool
    can_export_reports: bool

    def __post_init__(self):
        if not isinstance(self.role, Role):
            raise ValueError("role must be Role enum.")

        all_resources = frozenset(ResourceKind)
        for name in ("create", "update", "delete"):
            object.__setattr__(
                self, name, _freeze_map(name, getattr(self, name), all_resources)
            )
        object.__setattr__(
            self,
            "approve",
            _freeze_map("approve", self.approve, APPROVABLE_RESOURCES),
        )

        for name in ("expense_limit", "safe_limit", "payroll_limit"):
            if not isinstance(getattr(self, name), Ceiling):
                raise ValueError(f"{name} must be Ceiling.")

        for name in (
            "org_wide", "area_wide", "project_wide", "zone_wide", "site_only",
            "can_generate_reports", "can_view_all_reports", "can_export_reports",
        ):
            if not isinstance(getattr(self, name), bool):
                raise ValueError(f"{name} must be a bool.")

        if not any((
            self.org_wide, self.area_wide, self.project_wide,
            self.zone_wide, self.site_only,
        )):
            raise ValueError(
                f"Role '{self.role.value}' must have at least one view scope."
            )

    # ── Lookups ───────────────────────────────────────────────

    def allows(self, resource: ResourceKind, action: Action) -> bool:
        if action is Action.APPROVE:
            return self.approve.get(resource, False)
        if action is Action.CREATE:
            return self.create[resource]
        if action is Action.UPDATE:
            return self.update[resource]
        if action is Action.DELETE:
            return self.delete[resource]
        return False

    def ceiling_for(self, category: FinancialCategory) -> Ceiling:
        if category is FinancialCategory.EXPENSE:
            return self.expense_limit
        if category is FinancialCategory.SAFE:
            return self.safe_limit
        return self.payroll_limit

    def has_report_capability(self, capability: ReportCapability) -> bool:
        if capability is ReportCapability.GENERATE:
            return self.can_generate_reports
        if capability is ReportCapability.VIEW_ALL:
            return self.can_view_all_reports
        return self.can_export_reports

    @property
    def widest_scope(self) -> ViewScope:
        if self.org_wide:
            return ViewScope.ORG
        if self.area_wide:
            return ViewScope.AREA
        if self.project_wide:
            return ViewScope.PROJECT
        if self.zone_wide:
            return ViewScope.ZONE
        return ViewScope.SITE

    def can_view(self, scope: ViewScope) -> bool:
        return SCOPE_RANK[scope] <= SCOPE_RANK[self.widest_scope]

    def to_dict(self) -> dict:
        return {
            "role": self.role.value,
            "org_wide": self.org_wide,
            "area_wide": self.area_wide,
            "project_wide": self.project_wide,
            "zone_wide": self.zone_wide,
            "site_only": self.site_only,
            "create": {r.value: v for r, v in self.create.items()},
            "update": {r.value: v for r, v in self.update.items()},
            "delete": {r.value: v for r, v in self.delete.items()},
            "approve": {r.value: v for r, v in self.approve.items()},
            "expense_limit": self.expense_limit.to_limit(),
            "safe_limit": self.safe_limit.to_limit(),
            "payroll_limit": self.payroll_limit.to_limit(),
            "can_generate_reports": self.can_generate_reports,
            "can_view_all_reports": self.can_view_all_reports,
            "can_export_reports": self.can_export_reports,
        }
