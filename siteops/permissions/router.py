"""
SiteOps Permissions - Approval Router
=====================================
Decides which role should act next on an approval request.

Two modes:
    No amount   → immediate superior (chain head), or None at the top.
    With amount → first role on the chain whose ceiling covers the
                  amount. First-fit in chain order, not the globally
                  cheapest qualifying role.

If nobody on the chain qualifies the request goes to PMO without
re-checking PMO's ceiling. The bootstrap PMO_UNLIMITED check is what
keeps that fallback honest.

The router only decides who acts next. It records nothing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from siteops.permissions.catalog import RoleCatalog
from siteops.permissions.chain import ChainResolver
from siteops.permissions.constants import (
    FALLBACK_APPROVER,
    FinancialCategory,
    Role,
)
from siteops.permissions.exceptions import NotAuthorizedToInitiate
from siteops.permissions.thresholds import ThresholdTable
from siteops.permissions.validation import (
    coerce_category,
    coerce_role,
    validate_amount,
)

logger = logging.getLogger("siteops.permissions")


# ══════════════════════════════════════════════════════════════
# QUERY / DECISION
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ApprovalQuery:
    """
    Transient routing request.

    role is the requester. amount and category are optional; routing is
    amount-aware only when both are present. A zero amount still counts
    as present.
    """
    role: Role
    amount: Optional[object] = None
    category: Optional[FinancialCategory] = None

    def __post_init__(self):
        object.__setattr__(self, "role", coerce_role(self.role))
        if self.amount is not None:
            object.__setattr__(self, "amount", validate_amount(self.amount))
        if self.category is not None:
            object.__setattr__(self, "category", coerce_category(self.category))

    @property
    def is_amount_aware(self) -> bool:
        return self.amount is not None and self.category is not None


class RoutingReason:
    """Why the router picked (or did not pick) an approver."""
    CHAIN_HEAD = "CHAIN_HEAD"
    FIRST_QUALIFYING = "FIRST_QUALIFYING"
    PMO_FALLBACK = "PMO_FALLBACK"
    NO_ESCALATION = "NO_ESCALATION"

    ALL = frozenset({
        "CHAIN_HEAD", "FIRST_QUALIFYING", "PMO_FALLBACK", "NO_ESCALATION",
    })


@dataclass(frozen=True)
class RoutingDecision:
    """
    Fields:
        query:       The request that was routed.
        approver:    Role that should act next, or None.
        reason:      One of RoutingReason.ALL.
        evaluated:   Chain roles checked against the ceiling, in order.
                     Empty in no-amount mode.
    """
    query: ApprovalQuery
    approver: Optional[Role]
    reason: str
    evaluated: Tuple[Role, ...] = ()

    def __post_init__(self):
        if self.reason not in RoutingReason.ALL:
            raise ValueError(
                f"reason '{self.reason}' not valid. "
                f"Must be one of: {sorted(RoutingReason.ALL)}"
            )
        if self.approver is None and self.reason != RoutingReason.NO_ESCALATION:
            raise ValueError("Only NO_ESCALATION may leave approver empty.")

    def to_dict(self) -> dict:
        return {
            "role": self.query.role.value,
            "amount": None if self.query.amount is None else str(self.query.amount),
            "category": (
                None if self.query.category is None
                else self.query.category.value
            ),
            "approver": None if self.approver is None else self.approver.value,
            "reason": self.reason,
            "evaluated": [role.value for role in self.evaluated],
        }


# ══════════════════════════════════════════════════════════════
# ROUTER
# ══════════════════════════════════════════════════════════════

class ApprovalRouter:

    def __init__(
        self,
        resolver: ChainResolver | None = None,
        thresholds: ThresholdTable | None = None,
        catalog: RoleCatalog | None = None,
        strict_initiation: bool = False,
    ):
        self._resolver = resolver or ChainResolver()
        self._thresholds = thresholds or ThresholdTable()
        self._catalog = catalog or RoleCatalog()
        self._strict_initiation = strict_initiation

    def route(self, query: ApprovalQuery) -> RoutingDecision:
        if self._strict_initiation and not self._catalog.can_initiate(query.role):
            raise NotAuthorizedToInitiate(query.role)

        chain = self._resolver.get_approval_chain(query.role)

        if not query.is_amount_aware:
            if not chain:
                decision = RoutingDecision(query, None, RoutingReason.NO_ESCALATION)
            else:
                decision = RoutingDecision(query, chain[0], RoutingReason.CHAIN_HEAD)
            self._log(decision)
            return decision

        evaluated = []
        for candidate in chain:
            evaluated.append(candidate)
            if self._thresholds.can_approve_amount(
                candidate, query.amount, query.category
            ):
                decision = RoutingDecision(
                    query, candidate, RoutingReason.FIRST_QUALIFYING,
                    tuple(evaluated),
                )
                self._log(decision)
                return decision

        decision = RoutingDecision(
            query, FALLBACK_APPROVER, RoutingReason.PMO_FALLBACK,
            tuple(evaluated),
        )
        self._log(decision)
        return decision

    def next_approver(self, role, amount=None, category=None) -> Optional[Role]:
        return self.route(ApprovalQuery(role, amount, category)).approver

    @staticmethod
    def _log(decision: RoutingDecision) -> None:
        query = decision.query
        logger.debug(
            f"Routed {query.role.value} "
            f"amount={query.amount} "
            f"category={query.category.value if query.category else None} "
            f"→ {decision.approver.value if decision.approver else None} "
            f"[{decision.reason}]"
        )
