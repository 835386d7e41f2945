"""Static Competency Catalogs

Read-only tables built once at startup (see definitions.loader) and injected
into the engine through an EngineConfig. Nothing here is mutated after
construction.
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from skillbadge.competency.canonical import (
    EMPTY_ALIASES,
    AliasTable,
    resolve_badge_key,
)
from skillbadge.competency.schemas.badge import (
    BadgeDescriptor,
    BadgeLevel,
    BadgeSeries,
    Competency,
    FallbackCompetency,
)
from skillbadge.competency.schemas.policy import ValidationPolicy

logger = logging.getLogger(__name__)


def _freeze(mapping: Mapping) -> Mapping:
    return MappingProxyType(dict(mapping))


def _as_fallback(competencies) -> tuple[FallbackCompetency, ...]:
    """Revalidate hand-built entries, rejecting ids in the backend range"""
    return tuple(
        FallbackCompetency.model_validate(c, from_attributes=True) for c in competencies
    )


class RuleCatalog:
    """Validation policies keyed by badge name, with a per-level override layer"""

    def __init__(
        self,
        base: Mapping[str, ValidationPolicy] | None = None,
        overrides: Mapping[str, Mapping[BadgeLevel, ValidationPolicy]] | None = None,
        aliases: AliasTable = EMPTY_ALIASES,
    ):
        self._base = _freeze(base or {})
        self._overrides = _freeze(
            {name: _freeze(levels) for name, levels in (overrides or {}).items()}
        )
        self.aliases = aliases

    @property
    def base(self) -> Mapping[str, ValidationPolicy]:
        return self._base

    @property
    def overrides(self) -> Mapping[str, Mapping[BadgeLevel, ValidationPolicy]]:
        return self._overrides

    def get_policy(
        self, badge_name: str, level: BadgeLevel | None = None
    ) -> ValidationPolicy | None:
        """Resolve the policy for a badge, the level override winning over base.

        Returns None when neither table has an entry: no enforced policy.
        """
        if level is not None:
            key = resolve_badge_key(badge_name, self._overrides, self.aliases)
            if key is not None and level in self._overrides[key]:
                return self._overrides[key][level]

        key = resolve_badge_key(badge_name, self._base, self.aliases)
        if key is not None:
            return self._base[key]
        return None

    def badge_names(self) -> set[str]:
        return set(self._base) | set(self._overrides)

    def __len__(self) -> int:
        return len(self.badge_names())


class MandatoryOverrideTable:
    """(badge name, level) -> mandatory set that replaces the resolved policy's.

    Applied after policy resolution. Holds the named exceptions to a badge
    family's shared policy, e.g. ACTING at level 1 has no mandatory
    competency although its base policy (written for level 2+) has one.
    """

    def __init__(
        self,
        overrides: Mapping[str, Mapping[BadgeLevel, tuple[str, ...]]] | None = None,
        aliases: AliasTable = EMPTY_ALIASES,
    ):
        self._overrides = _freeze(
            {
                name: _freeze({lvl: tuple(names) for lvl, names in levels.items()})
                for name, levels in (overrides or {}).items()
            }
        )
        self.aliases = aliases

    def lookup(self, badge_name: str, level: BadgeLevel) -> tuple[str, ...] | None:
        key = resolve_badge_key(badge_name, self._overrides, self.aliases)
        if key is None:
            return None
        return self._overrides[key].get(level)

    def apply(
        self, policy: ValidationPolicy, badge_name: str, level: BadgeLevel
    ) -> ValidationPolicy:
        """Return `policy` with its mandatory set replaced when an exception exists"""
        mandatory = self.lookup(badge_name, level)
        if mandatory is None:
            return policy
        logger.debug(
            "Mandatory set override for %r at %s: %r",
            badge_name,
            level.value,
            mandatory,
        )
        return policy.model_copy(update={"mandatory_competency_names": mandatory})

    def entries(self) -> list[tuple[str, BadgeLevel, tuple[str, ...]]]:
        return [
            (name, level, mandatory)
            for name, levels in self._overrides.items()
            for level, mandatory in levels.items()
        ]

    def __len__(self) -> int:
        return len(self.entries())


class FallbackCompetencyCatalog:
    """Curated competency lists, generic per badge and per badge + level"""

    def __init__(
        self,
        generic: Mapping[str, list[Competency]] | None = None,
        by_level: Mapping[str, Mapping[BadgeLevel, list[Competency]]] | None = None,
        aliases: AliasTable = EMPTY_ALIASES,
    ):
        self._generic = _freeze(
            {name: _as_fallback(comps) for name, comps in (generic or {}).items()}
        )
        self._by_level = _freeze(
            {
                name: _freeze(
                    {lvl: _as_fallback(comps) for lvl, comps in levels.items()}
                )
                for name, levels in (by_level or {}).items()
            }
        )
        self.aliases = aliases

    def level_entry(
        self, badge_name: str, level: BadgeLevel
    ) -> tuple[Competency, ...] | None:
        key = resolve_badge_key(badge_name, self._by_level, self.aliases)
        if key is None:
            return None
        return self._by_level[key].get(level)

    def generic_entry(self, badge_name: str) -> tuple[Competency, ...] | None:
        key = resolve_badge_key(badge_name, self._generic, self.aliases)
        if key is None:
            return None
        return self._generic[key]

    def get_competencies(
        self, badge: BadgeDescriptor, backend_supplied: list[Competency] | None
    ) -> list[Competency]:
        """Selectable competencies for a badge.

        Trust order, first hit wins: curated per-level list, backend list,
        curated generic list, nothing. The per-level list beats backend data
        on purpose: it exists only where the backend has been wrong.
        """
        curated = self.level_entry(badge.name, badge.level)
        if curated:
            return list(curated)

        if backend_supplied:
            return list(backend_supplied)

        generic = self.generic_entry(badge.name)
        if generic:
            return list(generic)

        return []

    def badge_names(self) -> set[str]:
        return set(self._generic) | set(self._by_level)

    def __len__(self) -> int:
        return len(self.badge_names())


@dataclass(frozen=True)
class ApplicabilityPolicy:
    """Which badge variants go through competency validation at all"""

    always_gated_levels: frozenset[BadgeLevel] = frozenset({BadgeLevel.LEVEL_1})
    level_2_gated_series: frozenset[BadgeSeries] = frozenset()
    always_gated_series: frozenset[BadgeSeries] = frozenset()

    def requires_validation(self, badge: BadgeDescriptor) -> bool:
        if badge.level in self.always_gated_levels:
            return True
        if (
            badge.level == BadgeLevel.LEVEL_2
            and badge.series in self.level_2_gated_series
        ):
            return True
        return badge.series in self.always_gated_series


@dataclass(frozen=True)
class EngineConfig:
    """Everything the engine needs, passed explicitly to each entry point"""

    rules: RuleCatalog = field(default_factory=RuleCatalog)
    competencies: FallbackCompetencyCatalog = field(
        default_factory=FallbackCompetencyCatalog
    )
    mandatory_overrides: MandatoryOverrideTable = field(
        default_factory=MandatoryOverrideTable
    )
    applicability: ApplicabilityPolicy = field(default_factory=ApplicabilityPolicy)
    aliases: AliasTable = EMPTY_ALIASES
    warn_on_missing_policy: bool = True
