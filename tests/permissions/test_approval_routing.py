"""
Tests for siteops.permissions chain resolution and approval routing.
"""

import logging

import pytest

from siteops.permissions import (
    APPROVAL_CHAINS,
    MAX_CHAIN_LENGTH,
    ApprovalQuery,
    ChainResolver,
    FinancialCategory,
    InvalidArgument,
    NotAuthorizedToInitiate,
    PolicyConfig,
    PolicyFacade,
    PolicyTableError,
    Role,
    RoutingReason,
    get_approval_chain,
    get_default_facade,
    get_next_approver,
)


# ══════════════════════════════════════════════════════════════
# CHAINS
# ══════════════════════════════════════════════════════════════

class TestApprovalChain:
    def test_terminal_roles_have_empty_chains(self):
        assert get_approval_chain("PMO") == ()
        assert get_approval_chain("ADMIN") == ()

    def test_viewer_has_empty_chain(self):
        assert get_approval_chain(Role.VIEWER) == ()

    def test_site_engineer_climbs_to_pmo(self):
        assert get_approval_chain("SITE_ENGINEER") == (
            Role.ZONE_MANAGER, Role.PROJECT_MANAGER, Role.AREA_MANAGER, Role.PMO,
        )

    def test_cashier_mirrors_site_engineer(self):
        assert get_approval_chain("CASHIER") == get_approval_chain("SITE_ENGINEER")

    @pytest.mark.parametrize(
        "role, chain",
        [
            (Role.ZONE_MANAGER, (Role.PROJECT_MANAGER, Role.AREA_MANAGER, Role.PMO)),
            (Role.PROJECT_MANAGER, (Role.AREA_MANAGER, Role.PMO)),
            (Role.AREA_MANAGER, (Role.PMO,)),
        ],
    )
    def test_manager_chains(self, role, chain):
        assert get_approval_chain(role) == chain

    @pytest.mark.parametrize("role", list(Role))
    def test_chains_are_finite_and_acyclic(self, role):
        chain = get_approval_chain(role)
        assert len(chain) <= MAX_CHAIN_LENGTH
        assert role not in chain
        assert len(set(chain)) == len(chain)

    @pytest.mark.parametrize("role", list(Role))
    def test_each_step_gains_authority(self, role):
        facade = get_default_facade()
        chain = get_approval_chain(role)
        for lower, higher in zip(chain, chain[1:]):
            assert any(
                facade.get_ceiling(higher, category).exceeds(
                    facade.get_ceiling(lower, category)
                )
                for category in FinancialCategory
            )

    def test_chain_is_immutable(self):
        chain = get_approval_chain("ZONE_MANAGER")
        assert isinstance(chain, tuple)
        with pytest.raises(TypeError):
            APPROVAL_CHAINS[Role.VIEWER] = (Role.PMO,)

    def test_resolver_refuses_missing_role(self):
        chains = {k: v for k, v in APPROVAL_CHAINS.items() if k is not Role.VIEWER}
        with pytest.raises(PolicyTableError, match="VIEWER"):
            ChainResolver(chains)

    def test_resolver_refuses_self_escalation(self):
        chains = dict(APPROVAL_CHAINS)
        chains[Role.AREA_MANAGER] = (Role.AREA_MANAGER, Role.PMO)
        with pytest.raises(PolicyTableError, match="itself"):
            ChainResolver(chains)

    def test_unknown_role(self):
        with pytest.raises(InvalidArgument):
            get_approval_chain("FOREMAN")

    def test_terminal_roles(self):
        resolver = get_default_facade().resolver
        assert resolver.is_terminal("PMO")
        assert resolver.is_terminal(Role.ADMIN)
        assert not resolver.is_terminal("AREA_MANAGER")


# ══════════════════════════════════════════════════════════════
# ROUTING
# ══════════════════════════════════════════════════════════════

class TestNextApprover:
    def test_zone_manager_routes_to_first_qualifying(self):
        # ZONE_MANAGER's own 10,000 is not enough; PROJECT_MANAGER's
        # 25,000 is the first on the chain that covers 15,000.
        assert get_next_approver("ZONE_MANAGER", 15_000, "expense") is Role.PROJECT_MANAGER

    def test_first_fit_not_best_fit(self):
        assert get_next_approver("SITE_ENGINEER", 100, "expense") is Role.ZONE_MANAGER

    def test_amount_above_every_manager_goes_to_pmo(self):
        assert get_next_approver("SITE_ENGINEER", 10_000_000, "expense") is Role.PMO

    def test_area_manager_payroll_is_unlimited(self):
        assert get_next_approver("PROJECT_MANAGER", 10**9, "payroll") is Role.AREA_MANAGER

    def test_zone_manager_payroll_ceiling_is_unlimited(self):
        assert get_next_approver("CASHIER", 10**9, "payroll") is Role.ZONE_MANAGER

    def test_safe_category(self):
        assert get_next_approver("CASHIER", 7_500, "safe") is Role.PROJECT_MANAGER
        assert get_next_approver("CASHIER", 60_000, "safe") is Role.AREA_MANAGER

    def test_no_amount_mode_returns_chain_head(self):
        assert get_next_approver("PROJECT_MANAGER") is Role.AREA_MANAGER

    def test_missing_category_falls_back_to_chain_head(self):
        assert get_next_approver("SITE_ENGINEER", 10_000_000) is Role.ZONE_MANAGER

    def test_missing_amount_falls_back_to_chain_head(self):
        assert get_next_approver("SITE_ENGINEER", None, "expense") is Role.ZONE_MANAGER

    @pytest.mark.parametrize("role", [Role.PMO, Role.ADMIN, Role.VIEWER])
    def test_no_amount_mode_top_of_chain_is_none(self, role):
        assert get_next_approver(role) is None

    def test_terminal_role_with_amount_falls_back_to_pmo(self):
        assert get_next_approver("ADMIN", 500, "expense") is Role.PMO

    def test_zero_amount_is_amount_aware(self):
        assert get_next_approver("PMO", 0, "expense") is Role.PMO

    def test_negative_amount_rejected(self):
        with pytest.raises(InvalidArgument):
            get_next_approver("ZONE_MANAGER", -1, "expense")

    def test_unknown_category_rejected(self):
        with pytest.raises(InvalidArgument):
            get_next_approver("ZONE_MANAGER", 10, "petty_cash")


class TestRoutingDecision:
    def test_first_qualifying_lists_evaluated_roles(self):
        decision = get_default_facade().route("SITE_ENGINEER", 30_000, "expense")
        assert decision.approver is Role.AREA_MANAGER
        assert decision.reason == RoutingReason.FIRST_QUALIFYING
        assert decision.evaluated == (
            Role.ZONE_MANAGER, Role.PROJECT_MANAGER, Role.AREA_MANAGER,
        )

    def test_fallback_reason(self):
        decision = get_default_facade().route("VIEWER", 1, "expense")
        assert decision.approver is Role.PMO
        assert decision.reason == RoutingReason.PMO_FALLBACK
        assert decision.evaluated == ()

    def test_chain_head_reason(self):
        decision = get_default_facade().route("ZONE_MANAGER")
        assert decision.reason == RoutingReason.CHAIN_HEAD
        assert decision.evaluated == ()

    def test_no_escalation_reason(self):
        decision = get_default_facade().route("PMO")
        assert decision.approver is None
        assert decision.reason == RoutingReason.NO_ESCALATION

    def test_to_dict(self):
        data = get_default_facade().route("ZONE_MANAGER", 15_000, "expense").to_dict()
        assert data == {
            "role": "ZONE_MANAGER",
            "amount": "15000",
            "category": "expense",
            "approver": "PROJECT_MANAGER",
            "reason": "FIRST_QUALIFYING",
            "evaluated": ["PROJECT_MANAGER"],
        }

    def test_routing_is_logged_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="siteops.permissions"):
            get_next_approver("ZONE_MANAGER", 15_000, "expense")
        assert "PROJECT_MANAGER" in caplog.text
        assert "FIRST_QUALIFYING" in caplog.text


class TestApprovalQuery:
    def test_coerces_strings(self):
        query = ApprovalQuery("CASHIER", 10, "safe")
        assert query.role is Role.CASHIER
        assert query.category is FinancialCategory.SAFE
        assert query.is_amount_aware

    def test_partial_query_is_not_amount_aware(self):
        assert not ApprovalQuery("CASHIER", 10).is_amount_aware
        assert not ApprovalQuery("CASHIER", category="safe").is_amount_aware


# ══════════════════════════════════════════════════════════════
# STRICT INITIATION
# ══════════════════════════════════════════════════════════════

class TestStrictInitiation:
    def test_default_viewer_returns_none(self):
        assert get_next_approver("VIEWER") is None

    def test_strict_viewer_raises(self):
        facade = PolicyFacade(PolicyConfig(strict_initiation=True))
        with pytest.raises(NotAuthorizedToInitiate) as excinfo:
            facade.get_next_approver("VIEWER", 100, "expense")
        assert excinfo.value.role is Role.VIEWER

    def test_strict_still_routes_other_roles(self):
        facade = PolicyFacade(PolicyConfig(strict_initiation=True))
        assert facade.get_next_approver("PMO") is None
        assert facade.get_next_approver("ZONE_MANAGER", 15_000, "expense") is Role.PROJECT_MANAGER
