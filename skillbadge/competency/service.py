"""Competency Validation Service"""

import logging
from typing import Any, Iterable, Mapping

from skillbadge.competency.canonical import normalize_trimmed
from skillbadge.competency.catalogs import EngineConfig
from skillbadge.competency.definitions.loader import load_config_on_startup
from skillbadge.competency.evaluator import (
    evaluate,
    get_effective_policy,
    requires_validation,
)
from skillbadge.competency.result import ValidationResult
from skillbadge.competency.schemas.badge import BadgeDescriptor, Competency

logger = logging.getLogger(__name__)


class CompetencyValidationService:
    """Entry point for the badge assignment form.

    Binds one EngineConfig so callers do not pass the catalogs around.
    """

    def __init__(self, config: EngineConfig):
        self.config = config

    def requires_validation(self, badge: BadgeDescriptor) -> bool:
        return requires_validation(badge, self.config)

    def get_competencies(
        self,
        badge: BadgeDescriptor,
        backend_supplied: Iterable[Competency | Mapping[str, Any]] | None = None,
    ) -> list[Competency]:
        """Competencies the user may pick for this badge"""
        backend = [self._to_competency(c) for c in backend_supplied or ()]
        return self.config.competencies.get_competencies(badge, backend)

    def evaluate(
        self,
        selected_ids: Iterable[int],
        badge: BadgeDescriptor | Mapping[str, Any],
        catalog: Iterable[Competency | Mapping[str, Any]],
    ) -> ValidationResult:
        return evaluate(selected_ids, badge, catalog, self.config)

    def check_assignment(
        self,
        badge: BadgeDescriptor,
        selected_ids: Iterable[int],
        backend_supplied: Iterable[Competency | Mapping[str, Any]] | None = None,
    ) -> ValidationResult:
        """Resolve the offered competencies, then check the selection against them"""
        catalog = self.get_competencies(badge, backend_supplied)
        return self.evaluate(selected_ids, badge, catalog)

    def is_mandatory(
        self, badge: BadgeDescriptor, competency: Competency | str
    ) -> bool:
        """Whether a competency (or bare name) is mandatory for this badge and level"""
        if not self.requires_validation(badge):
            return False
        policy = get_effective_policy(badge, self.config)
        if policy is None:
            return False
        name = competency.name if isinstance(competency, Competency) else competency
        wanted = normalize_trimmed(name)
        return any(
            normalize_trimmed(n) == wanted for n in policy.mandatory_competency_names
        )

    def get_hint(self, badge: BadgeDescriptor) -> str | None:
        """Hint shown next to the competency picker, if any"""
        if not self.requires_validation(badge):
            return None
        policy = get_effective_policy(badge, self.config)
        if policy is None or not policy.hint_text:
            return None
        return policy.hint_text

    def submittable_ids(
        self, selected_ids: Iterable[int], catalog: Iterable[Competency]
    ) -> list[int]:
        """Ids safe to send to the assignment API.

        Fallback competencies (negative ids) do not exist server side and
        ids outside the offered catalog are not trusted; both are dropped.
        """
        offered = {c.id for c in catalog}
        kept = []
        for competency_id in sorted(set(selected_ids)):
            if competency_id < 0:
                logger.debug("Dropping fallback competency %s", competency_id)
                continue
            if competency_id not in offered:
                logger.debug("Dropping unknown competency %s", competency_id)
                continue
            kept.append(competency_id)
        return kept

    @staticmethod
    def _to_competency(value: Competency | Mapping[str, Any]) -> Competency:
        if isinstance(value, Competency):
            return value
        return Competency.from_payload(value)


# Singleton instance
_service: CompetencyValidationService | None = None


def get_validation_service() -> CompetencyValidationService:
    """Get the process-wide service, loading the packaged catalogs on first use"""
    global _service  # pylint: disable=global-statement
    if _service is None:
        _service = CompetencyValidationService(load_config_on_startup())
    return _service
