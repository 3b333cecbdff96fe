"""
SiteOps Permissions - Public API
================================
"""

from siteops.permissions.catalog import ROLE_PROFILES, RoleCatalog, RoleProfile
from siteops.permissions.chain import APPROVAL_CHAINS, ChainResolver
from siteops.permissions.config import PolicyConfig
from siteops.permissions.constants import (
    APPROVABLE_RESOURCES,
    DEFAULT_CURRENCY,
    FALLBACK_APPROVER,
    MAX_CHAIN_LENGTH,
    TERMINAL_ROLES,
    Action,
    FinancialCategory,
    ReportCapability,
    ResourceKind,
    Role,
    ViewScope,
)
from siteops.permissions.evaluator import (
    PermissionEvaluationResult,
    PermissionEvaluator,
    ReasonCode,
)
from siteops.permissions.exceptions import (
    InvalidArgument,
    NotAuthorizedToInitiate,
    PermissionPolicyError,
    PolicyTableError,
)
from siteops.permissions.facade import (
    PolicyFacade,
    can_approve_amount,
    can_view_scope,
    get_approval_chain,
    get_default_facade,
    get_next_approver,
    get_role_permissions,
    has_permission,
    has_report_capability,
)
from siteops.permissions.matrix import ROLE_PERMISSIONS, PermissionMatrix
from siteops.permissions.models import UNLIMITED, Ceiling, RolePermissions
from siteops.permissions.router import (
    ApprovalQuery,
    ApprovalRouter,
    RoutingDecision,
    RoutingReason,
)
from siteops.permissions.scope import OrgScopeResolver, OrgUnit, OrgUnitType
from siteops.permissions.thresholds import ThresholdTable

__all__ = [
    # ── Vocabulary ────────────────────────────────────────────
    "Role",
    "ResourceKind",
    "Action",
    "FinancialCategory",
    "ViewScope",
    "ReportCapability",
    "APPROVABLE_RESOURCES",
    "DEFAULT_CURRENCY",
    "FALLBACK_APPROVER",
    "MAX_CHAIN_LENGTH",
    "TERMINAL_ROLES",
    # ── Tables ────────────────────────────────────────────────
    "Ceiling",
    "UNLIMITED",
    "RolePermissions",
    "ROLE_PERMISSIONS",
    "PermissionMatrix",
    "ThresholdTable",
    "RoleProfile",
    "ROLE_PROFILES",
    "RoleCatalog",
    "APPROVAL_CHAINS",
    "ChainResolver",
    # ── Routing ───────────────────────────────────────────────
    "ApprovalQuery",
    "ApprovalRouter",
    "RoutingDecision",
    "RoutingReason",
    # ── Facade ────────────────────────────────────────────────
    "PolicyConfig",
    "PolicyFacade",
    "get_default_facade",
    "has_permission",
    "can_approve_amount",
    "get_approval_chain",
    "get_next_approver",
    "get_role_permissions",
    "can_view_scope",
    "has_report_capability",
    # ── Evaluation / scope ────────────────────────────────────
    "PermissionEvaluator",
    "PermissionEvaluationResult",
    "ReasonCode",
    "OrgUnit",
    "OrgUnitType",
    "OrgScopeResolver",
    # ── Exceptions ────────────────────────────────────────────
    "PermissionPolicyError",
    "InvalidArgument",
    "NotAuthorizedToInitiate",
    "PolicyTableError",
]
