"""Badge Competency Validation Engine"""

from skillbadge.competency.canonical import (
    AliasTable,
    canonicalize,
    normalize_trimmed,
    resolve_badge_key,
)
from skillbadge.competency.catalogs import (
    ApplicabilityPolicy,
    EngineConfig,
    FallbackCompetencyCatalog,
    MandatoryOverrideTable,
    RuleCatalog,
)
from skillbadge.competency.evaluator import (
    evaluate,
    get_effective_policy,
    requires_validation,
)
from skillbadge.competency.result import ValidationResult
from skillbadge.competency.schemas import (
    BadgeDescriptor,
    BadgeLevel,
    BadgeSeries,
    Competency,
    ValidationPolicy,
)
from skillbadge.competency.service import (
    CompetencyValidationService,
    get_validation_service,
)

__all__ = [
    "AliasTable",
    "canonicalize",
    "normalize_trimmed",
    "resolve_badge_key",
    "ApplicabilityPolicy",
    "EngineConfig",
    "FallbackCompetencyCatalog",
    "MandatoryOverrideTable",
    "RuleCatalog",
    "evaluate",
    "get_effective_policy",
    "requires_validation",
    "ValidationResult",
    "BadgeDescriptor",
    "BadgeLevel",
    "BadgeSeries",
    "Competency",
    "ValidationPolicy",
    "CompetencyValidationService",
    "get_validation_service",
]
