"""
SiteOps Permissions - Role Catalog
==================================
The fixed set of roles, the widest scope each may view, and whether the
role may open an approval request at all.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple

from siteops.permissions.constants import Role, ViewScope
from siteops.permissions.exceptions import PolicyTableError
from siteops.permissions.validation import coerce_role


@dataclass(frozen=True)
class RoleProfile:
    role: Role
    scope: ViewScope
    can_initiate_approvals: bool
    description: str

    def __post_init__(self):
        if not isinstance(self.role, Role):
            raise ValueError("role must be Role enum.")
        if not isinstance(self.scope, ViewScope):
            raise ValueError("scope must be ViewScope enum.")
        if not self.description or not isinstance(self.description, str):
            raise ValueError("description must be a non-empty string.")


ROLE_PROFILES: Tuple[RoleProfile, ...] = (
    RoleProfile(Role.PMO, ViewScope.ORG, True,
                "Project management office; final approval authority."),
    RoleProfile(Role.AREA_MANAGER, ViewScope.AREA, True,
                "Manages every project within an area."),
    RoleProfile(Role.PROJECT_MANAGER, ViewScope.PROJECT, True,
                "Manages the zones of a single project."),
    RoleProfile(Role.ZONE_MANAGER, ViewScope.ZONE, True,
                "Supervises the sites of a zone."),
    RoleProfile(Role.SITE_ENGINEER, ViewScope.SITE, True,
                "Runs day-to-day work on one site."),
    RoleProfile(Role.CASHIER, ViewScope.SITE, True,
                "Handles receipts and safe movements for a site."),
    # Read-only role. Nothing it does needs sign-off.
    RoleProfile(Role.VIEWER, ViewScope.SITE, False,
                "Read-only access to a site."),
    RoleProfile(Role.ADMIN, ViewScope.ORG, True,
                "System administrator; approves directly."),
)


class RoleCatalog:
    """Lookup over ROLE_PROFILES, checked total over Role on construction."""

    def __init__(self, profiles=ROLE_PROFILES):
        index: dict[Role, RoleProfile] = {}
        for profile in profiles:
            if profile.role in index:
                raise PolicyTableError(
                    "role_catalog", f"duplicate role '{profile.role.value}'"
                )
            index[profile.role] = profile

        missing = set(Role) - set(index)
        if missing:
            raise PolicyTableError(
                "role_catalog",
                f"missing roles {sorted(r.value for r in missing)}",
            )
        self._profiles: Mapping[Role, RoleProfile] = MappingProxyType(index)

    def roles(self) -> Tuple[Role, ...]:
        return tuple(self._profiles)

    def profile(self, role) -> RoleProfile:
        return self._profiles[coerce_role(role)]

    def scope_of(self, role) -> ViewScope:
        return self.profile(role).scope

    def can_initiate(self, role) -> bool:
        return self.profile(role).can_initiate_approvals
