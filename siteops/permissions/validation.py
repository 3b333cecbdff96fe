"""
SiteOps Permissions - Input Coercion
====================================
Callers may pass enum members or their string values.
Anything else is rejected; there is no default answer.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from numbers import Real
from typing import Type, TypeVar

from siteops.permissions.constants import (
    Action,
    FinancialCategory,
    ReportCapability,
    ResourceKind,
    Role,
    ViewScope,
)
from siteops.permissions.exceptions import InvalidArgument

E = TypeVar("E", bound=Enum)


def _coerce(enum_cls: Type[E], value, argument: str) -> E:
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value)
        except ValueError:
            pass
    raise InvalidArgument(
        argument,
        value,
        f"Must be one of: {sorted(member.value for member in enum_cls)}",
    )


def coerce_role(value) -> Role:
    return _coerce(Role, value, "role")


def coerce_resource(value) -> ResourceKind:
    return _coerce(ResourceKind, value, "resource")


def coerce_action(value) -> Action:
    return _coerce(Action, value, "action")


def coerce_category(value) -> FinancialCategory:
    return _coerce(FinancialCategory, value, "category")


def coerce_scope(value) -> ViewScope:
    return _coerce(ViewScope, value, "scope")


def coerce_report_capability(value) -> ReportCapability:
    return _coerce(ReportCapability, value, "capability")


def validate_amount(value):
    """
    Accept a non-negative int, float or Decimal.

    bool is rejected even though it subclasses int; NaN is rejected
    because it compares false against every ceiling.
    """
    if isinstance(value, bool) or not isinstance(value, (Real, Decimal)):
        raise InvalidArgument("amount", value, "Must be a number.")
    is_nan = value.is_nan() if isinstance(value, Decimal) else value != value
    if is_nan:
        raise InvalidArgument("amount", value, "Must not be NaN.")
    if value < 0:
        raise InvalidArgument("amount", value, "Must be >= 0.")
    return value
