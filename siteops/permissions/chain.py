"""
SiteOps Permissions - Escalation Chains
=======================================
Hand-authored escalation path per role, nearest superior first.

This does NOT follow the view-scope hierarchy: a cashier only sees its
site but escalates through the full zone → project → area → PMO climb.

Empty chains:
    PMO, ADMIN  - decision-final, nothing above them
    VIEWER      - cannot initiate approvals, so nothing to escalate
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Tuple

from siteops.permissions.constants import MAX_CHAIN_LENGTH, Role
from siteops.permissions.exceptions import PolicyTableError
from siteops.permissions.validation import coerce_role

APPROVAL_CHAINS: Mapping[Role, Tuple[Role, ...]] = MappingProxyType({
    Role.SITE_ENGINEER: (
        Role.ZONE_MANAGER, Role.PROJECT_MANAGER, Role.AREA_MANAGER, Role.PMO,
    ),
    Role.ZONE_MANAGER: (Role.PROJECT_MANAGER, Role.AREA_MANAGER, Role.PMO),
    Role.PROJECT_MANAGER: (Role.AREA_MANAGER, Role.PMO),
    Role.AREA_MANAGER: (Role.PMO,),
    Role.PMO: (),
    Role.CASHIER: (
        Role.ZONE_MANAGER, Role.PROJECT_MANAGER, Role.AREA_MANAGER, Role.PMO,
    ),
    Role.VIEWER: (),
    Role.ADMIN: (),
})


class ChainResolver:

    def __init__(self, chains: Mapping[Role, Tuple[Role, ...]] = APPROVAL_CHAINS):
        missing = set(Role) - set(chains)
        if missing:
            raise PolicyTableError(
                "approval_chains",
                f"missing roles {sorted(r.value for r in missing)}",
            )

        frozen: dict[Role, Tuple[Role, ...]] = {}
        for role, chain in chains.items():
            chain = tuple(chain)
            if role in chain:
                raise PolicyTableError(
                    "approval_chains",
                    f"'{role.value}' escalates to itself",
                )
            if len(set(chain)) != len(chain):
                raise PolicyTableError(
                    "approval_chains",
                    f"'{role.value}' chain repeats a role",
                )
            if len(chain) > MAX_CHAIN_LENGTH:
                raise PolicyTableError(
                    "approval_chains",
                    f"'{role.value}' chain longer than {MAX_CHAIN_LENGTH}",
                )
            frozen[role] = chain
        self._chains: Mapping[Role, Tuple[Role, ...]] = MappingProxyType(frozen)

    def get_approval_chain(self, role) -> Tuple[Role, ...]:
        return self._chains[coerce_role(role)]

    def is_terminal(self, role) -> bool:
        return not self.get_approval_chain(role)
