"""
SiteOps Permissions - Closed Vocabularies
=========================================
Every table in this package is keyed by these enums.
Adding a member here without extending every table fails at import time.
"""

from __future__ import annotations

from enum import Enum


# ══════════════════════════════════════════════════════════════
# ROLES
# ══════════════════════════════════════════════════════════════

class Role(Enum):
    """Organizational roles, widest authority first."""
    PMO = "PMO"
    AREA_MANAGER = "AREA_MANAGER"
    PROJECT_MANAGER = "PROJECT_MANAGER"
    ZONE_MANAGER = "ZONE_MANAGER"
    SITE_ENGINEER = "SITE_ENGINEER"
    CASHIER = "CASHIER"
    VIEWER = "VIEWER"
    ADMIN = "ADMIN"


# ══════════════════════════════════════════════════════════════
# RESOURCES / ACTIONS
# ══════════════════════════════════════════════════════════════

class ResourceKind(Enum):
    SITES = "sites"
    TASKS = "tasks"
    EMPLOYEES = "employees"
    EXPENSES = "expenses"
    REVENUES = "revenues"
    SAFES = "safes"
    PAYROLL = "payroll"
    REPORTS = "reports"


class Action(Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    APPROVE = "approve"


# Only these resources carry an approval flag. Anything else is never
# approvable.
APPROVABLE_RESOURCES = frozenset({
    ResourceKind.TASKS,
    ResourceKind.EXPENSES,
    ResourceKind.REVENUES,
    ResourceKind.PAYROLL,
    ResourceKind.SAFES,
})


# ══════════════════════════════════════════════════════════════
# FINANCIAL CATEGORIES
# ══════════════════════════════════════════════════════════════

class FinancialCategory(Enum):
    """Categories that carry a monetary approval ceiling."""
    EXPENSE = "expense"
    SAFE = "safe"
    PAYROLL = "payroll"


# ══════════════════════════════════════════════════════════════
# VIEW SCOPES
# ══════════════════════════════════════════════════════════════

class ViewScope(Enum):
    """Breadth of data a role may view, widest first."""
    ORG = "ORG"
    AREA = "AREA"
    PROJECT = "PROJECT"
    ZONE = "ZONE"
    SITE = "SITE"


# Higher rank = wider breadth. A role that sees a scope sees every
# narrower one.
SCOPE_RANK = {
    ViewScope.SITE: 0,
    ViewScope.ZONE: 1,
    ViewScope.PROJECT: 2,
    ViewScope.AREA: 3,
    ViewScope.ORG: 4,
}


class ReportCapability(Enum):
    GENERATE = "generate"
    VIEW_ALL = "view_all"
    EXPORT = "export"


# ══════════════════════════════════════════════════════════════
# POLICY CONSTANTS
# ══════════════════════════════════════════════════════════════

DEFAULT_CURRENCY = "LYD"

# Escalation never climbs more than four levels (site → zone → project
# → area → PMO).
MAX_CHAIN_LENGTH = 4

# Decision-final roles. Escalation stops here.
TERMINAL_ROLES = frozenset({Role.PMO, Role.ADMIN})

# Target of the router when nobody on the chain covers the amount.
FALLBACK_APPROVER = Role.PMO
