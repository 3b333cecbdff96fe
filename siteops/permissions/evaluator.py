"""
SiteOps Permissions - Deterministic Permission Evaluator
========================================================
Combines the matrix, an org-unit scope check and the approval ceiling
into one explained allow/deny decision.

Check order:
0. ADMIN is allowed outright
1. Role permission for (resource, action)
2. Target org unit inside the caller's scope (when a target is given)
3. Approval ceiling (approve actions carrying amount + category)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from siteops.permissions.constants import Action, Role
from siteops.permissions.facade import PolicyFacade, get_default_facade
from siteops.permissions.validation import (
    coerce_action,
    coerce_category,
    coerce_resource,
    coerce_role,
    validate_amount,
)


class ReasonCode:
    PERMISSION_DENIED = "PERMISSION_DENIED"
    OUT_OF_SCOPE = "OUT_OF_SCOPE"
    AMOUNT_EXCEEDS_LIMIT = "AMOUNT_EXCEEDS_LIMIT"


@dataclass(frozen=True)
class PermissionEvaluationResult:
    allowed: bool
    rejection_code: Optional[str] = None
    message: str = ""


class PermissionEvaluator:
    @staticmethod
    def _allow() -> PermissionEvaluationResult:
        return PermissionEvaluationResult(allowed=True)

    @staticmethod
    def _deny(code: str, message: str) -> PermissionEvaluationResult:
        return PermissionEvaluationResult(
            allowed=False,
            rejection_code=code,
            message=message,
        )

    @staticmethod
    def evaluate(
        role,
        resource,
        action,
        *,
        org_unit_id: Optional[str] = None,
        scope_ids: Optional[Iterable[str]] = None,
        amount=None,
        category=None,
        facade: PolicyFacade | None = None,
    ) -> PermissionEvaluationResult:
        """
        Evaluate one request. Invalid enum values still raise
        InvalidArgument; everything else resolves to allow or deny.
        """
        facade = facade or get_default_facade()
        role = coerce_role(role)
        resource = coerce_resource(resource)
        action = coerce_action(action)
        if category is not None:
            category = coerce_category(category)
        if amount is not None:
            amount = validate_amount(amount)

        if role is Role.ADMIN:
            return PermissionEvaluator._allow()

        if not facade.has_permission(role, resource, action):
            return PermissionEvaluator._deny(
                ReasonCode.PERMISSION_DENIED,
                (
                    f"Role '{role.value}' may not {action.value} "
                    f"{resource.value}."
                ),
            )

        if org_unit_id is not None:
            allowed_ids = frozenset(scope_ids or ())
            if org_unit_id not in allowed_ids:
                return PermissionEvaluator._deny(
                    ReasonCode.OUT_OF_SCOPE,
                    (
                        f"Org unit '{org_unit_id}' is outside the scope "
                        f"of role '{role.value}'."
                    ),
                )

        if (
            action is Action.APPROVE
            and amount is not None
            and category is not None
            and not facade.can_approve_amount(role, amount, category)
        ):
            ceiling = facade.get_ceiling(role, category)
            return PermissionEvaluator._deny(
                ReasonCode.AMOUNT_EXCEEDS_LIMIT,
                (
                    f"Amount {amount} exceeds the {category.value} limit "
                    f"of {ceiling} {facade.config.currency} "
                    f"for role '{role.value}'."
                ),
            )

        return PermissionEvaluator._allow()
