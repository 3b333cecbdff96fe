"""
Tests for siteops.bootstrap - startup invariant checks.

Each check is run against a deliberately broken table to prove it
refuses to boot.
"""

import logging
import sys
from dataclasses import replace
from types import SimpleNamespace

import pytest

from siteops.bootstrap import SystemBootstrapError, run_policy_checks
from siteops.bootstrap.apps import build_policy_facade, self_check_skip_reason
from siteops.bootstrap.invariants import (
    check_chain_monotonicity,
    check_chain_totality,
    check_fallback_unlimited,
    check_matrix_totality,
    check_scope_consistency,
    check_terminal_roles,
    check_threshold_totality,
)
from siteops.permissions import (
    APPROVAL_CHAINS,
    ROLE_PERMISSIONS,
    ROLE_PROFILES,
    Ceiling,
    ChainResolver,
    PermissionMatrix,
    PolicyFacade,
    Role,
    RoleCatalog,
    ViewScope,
)


def _facade_with_chains(**overrides):
    chains = dict(APPROVAL_CHAINS)
    for role_name, chain in overrides.items():
        chains[Role(role_name)] = chain
    return PolicyFacade(resolver=ChainResolver(chains))


# ══════════════════════════════════════════════════════════════
# HAPPY PATH
# ══════════════════════════════════════════════════════════════

def test_default_policy_passes_all_checks(caplog):
    with caplog.at_level(logging.INFO, logger="siteops.bootstrap"):
        run_policy_checks()
    assert "Self-Check PASSED" in caplog.text


# ══════════════════════════════════════════════════════════════
# FAILURES
# ══════════════════════════════════════════════════════════════

def test_pmo_with_finite_ceiling_fails_fallback_check():
    records = tuple(
        replace(r, expense_limit=Ceiling.of(1_000_000))
        if r.role is Role.PMO else r
        for r in ROLE_PERMISSIONS
    )
    facade = PolicyFacade(matrix=PermissionMatrix(records))

    with pytest.raises(SystemBootstrapError) as excinfo:
        check_fallback_unlimited(facade)
    assert excinfo.value.invariant == "PMO_UNLIMITED"

    with pytest.raises(SystemBootstrapError, match="PMO_UNLIMITED"):
        run_policy_checks(facade)


def test_out_of_order_chain_fails_monotonicity():
    facade = _facade_with_chains(
        ZONE_MANAGER=(Role.AREA_MANAGER, Role.PROJECT_MANAGER, Role.PMO),
    )
    with pytest.raises(SystemBootstrapError) as excinfo:
        check_chain_monotonicity(facade)
    assert excinfo.value.invariant == "CHAIN_MONOTONICITY"
    assert "PROJECT_MANAGER" in excinfo.value.detail


def test_escalating_terminal_role_fails():
    facade = _facade_with_chains(PMO=(Role.ADMIN,))
    with pytest.raises(SystemBootstrapError) as excinfo:
        check_terminal_roles(facade)
    assert excinfo.value.invariant == "TERMINAL_ROLES"


def test_catalog_scope_mismatch_fails():
    profiles = tuple(
        replace(p, scope=ViewScope.ZONE) if p.role is Role.CASHIER else p
        for p in ROLE_PROFILES
    )
    facade = PolicyFacade(catalog=RoleCatalog(profiles))
    with pytest.raises(SystemBootstrapError) as excinfo:
        check_scope_consistency(facade)
    assert excinfo.value.invariant == "SCOPE_CONSISTENCY"


def test_non_bool_matrix_answer_fails():
    facade = SimpleNamespace(has_permission=lambda role, resource, action: None)
    with pytest.raises(SystemBootstrapError) as excinfo:
        check_matrix_totality(facade)
    assert excinfo.value.invariant == "MATRIX_TOTALITY"


def test_raising_matrix_lookup_fails():
    def has_permission(role, resource, action):
        raise KeyError(role)

    facade = SimpleNamespace(has_permission=has_permission)
    with pytest.raises(SystemBootstrapError, match="KeyError"):
        check_matrix_totality(facade)


def test_missing_ceiling_fails():
    def get_ceiling(role, category):
        if role is Role.CASHIER:
            raise KeyError(role)
        return Ceiling.unlimited()

    facade = SimpleNamespace(get_ceiling=get_ceiling)
    with pytest.raises(SystemBootstrapError) as excinfo:
        check_threshold_totality(facade)
    assert excinfo.value.invariant == "THRESHOLD_TOTALITY"


def test_self_referencing_chain_fails():
    facade = SimpleNamespace(get_approval_chain=lambda role: (role,))
    with pytest.raises(SystemBootstrapError) as excinfo:
        check_chain_totality(facade)
    assert excinfo.value.invariant == "CHAIN_TOTALITY"


def test_error_message_names_invariant():
    error = SystemBootstrapError(invariant="X", detail="broken")
    assert str(error) == "SITEOPS BOOTSTRAP FAILURE - X: broken"


# ══════════════════════════════════════════════════════════════
# DJANGO APP
# ══════════════════════════════════════════════════════════════

def test_app_config_builds_facade_on_ready():
    from django.apps import apps

    config = apps.get_app_config("siteops_bootstrap")
    assert isinstance(config.facade, PolicyFacade)
    assert config.facade.config.currency == "LYD"


def test_facade_follows_settings(settings):
    settings.SITEOPS_POLICY = {"STRICT_INITIATION": True}
    facade = build_policy_facade()
    assert facade.config.strict_initiation is True


def test_self_check_skipped_under_pytest():
    assert self_check_skip_reason() == "running under pytest"


def test_self_check_runs_for_server_process(monkeypatch):
    monkeypatch.delenv("PYTEST_CURRENT_TEST", raising=False)
    monkeypatch.delitem(sys.modules, "pytest")
    monkeypatch.setattr(sys, "argv", ["manage.py", "runserver"])
    assert self_check_skip_reason() is None


def test_self_check_skipped_for_tooling_command(monkeypatch):
    monkeypatch.delenv("PYTEST_CURRENT_TEST", raising=False)
    monkeypatch.delitem(sys.modules, "pytest")
    monkeypatch.setattr(sys, "argv", ["manage.py", "migrate"])
    assert "migrate" in self_check_skip_reason()
