"""
SiteOps Permissions - Policy Configuration
==========================================
Deployment knobs for the policy facade. The tables themselves are not
configurable; only how the facade behaves around them.

Django projects set these through the SITEOPS_POLICY setting:

    SITEOPS_POLICY = {
        "CURRENCY": "LYD",
        "STRICT_INITIATION": False,
    }
"""

from __future__ import annotations

from dataclasses import dataclass

from siteops.permissions.constants import DEFAULT_CURRENCY
from siteops.permissions.exceptions import InvalidArgument

SETTINGS_NAME = "SITEOPS_POLICY"

_SETTING_FIELDS = {
    "CURRENCY": "currency",
    "STRICT_INITIATION": "strict_initiation",
}


@dataclass(frozen=True)
class PolicyConfig:
    """
    Fields:
        currency:           Label of the single unit all ceilings use.
        strict_initiation:  Raise NotAuthorizedToInitiate when a role that
                            cannot initiate approvals is routed, instead of
                            returning None.
    """
    currency: str = DEFAULT_CURRENCY
    strict_initiation: bool = False

    def __post_init__(self):
        if not self.currency or not isinstance(self.currency, str):
            raise InvalidArgument(
                "currency", self.currency, "Must be a non-empty string."
            )
        if not isinstance(self.strict_initiation, bool):
            raise InvalidArgument(
                "strict_initiation", self.strict_initiation, "Must be a bool."
            )

    @classmethod
    def from_settings(cls, settings) -> PolicyConfig:
        """Build from a settings object (django.conf.settings or similar)."""
        raw = getattr(settings, SETTINGS_NAME, None) or {}
        if not isinstance(raw, dict):
            raise InvalidArgument(SETTINGS_NAME, raw, "Must be a dict.")

        unknown = set(raw) - set(_SETTING_FIELDS)
        if unknown:
            raise InvalidArgument(
                SETTINGS_NAME,
                sorted(unknown),
                f"Unknown keys. Allowed: {sorted(_SETTING_FIELDS)}",
            )
        return cls(**{_SETTING_FIELDS[key]: value for key, value in raw.items()})
