"""
SiteOps Permissions - Exceptions
================================
Structured errors for policy queries and table construction.

A valid query against a valid table never raises. Everything here is
either a caller passing a value outside the closed sets, or a table that
was defined incompletely.
"""

from __future__ import annotations

from typing import Any


class PermissionPolicyError(Exception):
    """Base error for the permission policy."""
    pass


class InvalidArgument(PermissionPolicyError, ValueError):
    """A caller passed a value outside the accepted domain."""

    def __init__(self, argument: str, value: Any, detail: str = ""):
        self.argument = argument
        self.value = value
        message = f"Invalid {argument}: {value!r}."
        if detail:
            message = f"{message} {detail}"
        super().__init__(message)


class NotAuthorizedToInitiate(PermissionPolicyError):
    """Role may not open an approval request (strict initiation only)."""

    def __init__(self, role):
        self.role = role
        super().__init__(
            f"Role '{role.value}' cannot initiate approval requests."
        )


class PolicyTableError(PermissionPolicyError):
    """A policy table is not total over its key set."""

    def __init__(self, table: str, detail: str):
        self.table = table
        self.detail = detail
        super().__init__(f"Policy table '{table}' is invalid: {detail}")
