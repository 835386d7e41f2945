"""Competency Engine Schemas"""

from skillbadge.competency.schemas.badge import (
    BadgeDescriptor,
    BadgeLevel,
    BadgeSeries,
    Competency,
    FallbackCompetency,
)
from skillbadge.competency.schemas.policy import (
    AliasFileSchema,
    ApplicabilitySchema,
    BadgeCompetenciesSchema,
    BadgeRuleSchema,
    CompetencyFileSchema,
    MandatoryOverrideFileSchema,
    MandatoryOverrideSchema,
    RuleFileSchema,
    ValidationPolicy,
)

__all__ = [
    "BadgeDescriptor",
    "BadgeLevel",
    "BadgeSeries",
    "Competency",
    "FallbackCompetency",
    "ValidationPolicy",
    "BadgeRuleSchema",
    "RuleFileSchema",
    "BadgeCompetenciesSchema",
    "CompetencyFileSchema",
    "AliasFileSchema",
    "MandatoryOverrideSchema",
    "MandatoryOverrideFileSchema",
    "ApplicabilitySchema",
]
