"""
SiteOps Permissions - Org Unit Scope
====================================
Resolves the set of org units a user may see.

Org units form a tree: PMO → AREA → PROJECT → ZONE. A user sees their
primary unit and everything below it, plus the subtree of every
additional assignment. ADMIN sees every unit. A user without a primary
unit sees nothing.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import FrozenSet, Iterable, Optional, Tuple

from siteops.permissions.constants import Role
from siteops.permissions.exceptions import InvalidArgument
from siteops.permissions.validation import coerce_role


class OrgUnitType(Enum):
    PMO = "PMO"
    AREA = "AREA"
    PROJECT = "PROJECT"
    ZONE = "ZONE"


@dataclass(frozen=True)
class OrgUnit:
    unit_id: str
    unit_type: OrgUnitType
    name: str
    parent_id: Optional[str] = None

    def __post_init__(self):
        if not self.unit_id or not isinstance(self.unit_id, str):
            raise InvalidArgument(
                "unit_id", self.unit_id, "Must be a non-empty string."
            )
        if not isinstance(self.unit_type, OrgUnitType):
            raise InvalidArgument(
                "unit_type", self.unit_type, "Must be OrgUnitType enum."
            )
        if self.parent_id == self.unit_id:
            raise InvalidArgument(
                "parent_id", self.parent_id, "A unit cannot be its own parent."
            )


class OrgScopeResolver:
    """
    Immutable index over a set of org units.

    Usage:
        resolver = OrgScopeResolver(units)
        resolver.resolve("ZONE_MANAGER", "zone-1")
        # → frozenset({"zone-1"})
    """

    def __init__(self, units: Iterable[OrgUnit]):
        index: dict[str, OrgUnit] = {}
        for unit in units:
            if unit.unit_id in index:
                raise InvalidArgument(
                    "unit_id", unit.unit_id, "Duplicate org unit."
                )
            index[unit.unit_id] = unit

        children: dict[str, list[str]] = {unit_id: [] for unit_id in index}
        for unit in index.values():
            if unit.parent_id is None:
                continue
            if unit.parent_id not in index:
                raise InvalidArgument(
                    "parent_id",
                    unit.parent_id,
                    f"Unknown parent of org unit '{unit.unit_id}'.",
                )
            children[unit.parent_id].append(unit.unit_id)

        self._units = MappingProxyType(index)
        self._children = MappingProxyType(
            {key: tuple(sorted(value)) for key, value in children.items()}
        )
        self._check_acyclic()

    def _check_acyclic(self) -> None:
        for unit_id in self._units:
            seen = {unit_id}
            parent = self._units[unit_id].parent_id
            while parent is not None:
                if parent in seen:
                    raise InvalidArgument(
                        "parent_id", parent, "Org unit hierarchy has a cycle."
                    )
                seen.add(parent)
                parent = self._units[parent].parent_id

    def get(self, unit_id: str) -> Optional[OrgUnit]:
        return self._units.get(unit_id)

    def all_unit_ids(self) -> FrozenSet[str]:
        return frozenset(self._units)

    def subtree(self, unit_id: str) -> FrozenSet[str]:
        """Unit plus all descendants. Unknown ids resolve to empty."""
        if unit_id not in self._units:
            return frozenset()
        collected = []
        stack = [unit_id]
        while stack:
            current = stack.pop()
            collected.append(current)
            stack.extend(self._children[current])
        return frozenset(collected)

    def ancestors(self, unit_id: str) -> Tuple[str, ...]:
        """Parent chain, nearest first."""
        unit = self._units.get(unit_id)
        path = []
        while unit is not None and unit.parent_id is not None:
            path.append(unit.parent_id)
            unit = self._units.get(unit.parent_id)
        return tuple(path)

    def resolve(
        self,
        role,
        primary_unit_id: Optional[str],
        assignments: Iterable[str] = (),
    ) -> FrozenSet[str]:
        role = coerce_role(role)
        if role is Role.ADMIN:
            return self.all_unit_ids()
        if not primary_unit_id:
            return frozenset()

        scope = set(self.subtree(primary_unit_id))
        for unit_id in assignments:
            scope |= self.subtree(unit_id)
        return frozenset(scope)
