"""
SiteOps Permissions - Threshold Table
=====================================
(role, financial category) → Ceiling.

Derived from the permission matrix so the two can never disagree.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Tuple

from siteops.permissions.constants import FinancialCategory, Role
from siteops.permissions.matrix import PermissionMatrix
from siteops.permissions.models import Ceiling
from siteops.permissions.validation import (
    coerce_category,
    coerce_role,
    validate_amount,
)


class ThresholdTable:

    def __init__(self, matrix: PermissionMatrix | None = None):
        matrix = matrix or PermissionMatrix()
        table: dict[Tuple[Role, FinancialCategory], Ceiling] = {}
        for role in matrix.roles():
            record = matrix.get(role)
            for category in FinancialCategory:
                table[(role, category)] = record.ceiling_for(category)
        self._table: Mapping[Tuple[Role, FinancialCategory], Ceiling] = (
            MappingProxyType(table)
        )

    def ceiling(self, role, category) -> Ceiling:
        return self._table[(coerce_role(role), coerce_category(category))]

    def can_approve_amount(self, role, amount, category) -> bool:
        """
        True if the role's ceiling for the category covers `amount`.

        The boundary is inclusive. A zero ceiling only covers a zero
        amount; an unlimited ceiling covers everything.
        """
        ceiling = self.ceiling(role, category)
        return ceiling.covers(validate_amount(amount))
