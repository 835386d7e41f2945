"""Validation Policy and Definition File Schemas"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from skillbadge.competency.schemas.badge import (
    BadgeLevel,
    BadgeSeries,
    FallbackCompetency,
)


class ValidationPolicy(BaseModel):
    """Acceptance rule for a badge, or for one level of a badge"""

    model_config = ConfigDict(frozen=True)

    mandatory_competency_names: tuple[str, ...] = Field(default_factory=tuple)
    minimum_required: int = Field(ge=0, default=0)
    hint_text: str = ""

    @field_validator("mandatory_competency_names", mode="before")
    @classmethod
    def dedupe_names(cls, v):
        """Keep declaration order, drop duplicates"""
        if v is None:
            return ()
        if isinstance(v, str):
            v = [v]
        return tuple(dict.fromkeys(v))


class BadgeRuleSchema(BaseModel):
    """Validates one badge entry of a rules YAML file"""

    name: str = Field(min_length=1, max_length=200)
    policy: ValidationPolicy | None = None
    levels: dict[BadgeLevel, ValidationPolicy] = Field(default_factory=dict)


class RuleFileSchema(BaseModel):
    """Validates a rules YAML file"""

    series: BadgeSeries | None = None
    badges: list[BadgeRuleSchema] = Field(default_factory=list)


class BadgeCompetenciesSchema(BaseModel):
    """Validates one badge entry of a fallback competencies YAML file"""

    name: str = Field(min_length=1, max_length=200)
    competencies: list[FallbackCompetency] = Field(default_factory=list)
    levels: dict[BadgeLevel, list[FallbackCompetency]] = Field(default_factory=dict)


class CompetencyFileSchema(BaseModel):
    """Validates a fallback competencies YAML file"""

    badges: list[BadgeCompetenciesSchema] = Field(default_factory=list)

    @field_validator("badges")
    @classmethod
    def validate_unique_ids(
        cls, v: list[BadgeCompetenciesSchema]
    ) -> list[BadgeCompetenciesSchema]:
        """A fallback id must identify a single competency within a file"""
        seen: dict[int, str] = {}
        for badge in v:
            groups = [badge.competencies, *badge.levels.values()]
            for competency in (c for group in groups for c in group):
                name = seen.setdefault(competency.id, competency.name)
                if name != competency.name:
                    raise ValueError(
                        f"Fallback id {competency.id} used for both "
                        f"{name!r} and {competency.name!r}"
                    )
        return v


class AliasFileSchema(BaseModel):
    """Validates the alias YAML file (canonical name -> alternate spellings)"""

    aliases: dict[str, list[str]] = Field(default_factory=dict)


class MandatoryOverrideSchema(BaseModel):
    """One (badge, level) -> mandatory set exception"""

    name: str = Field(min_length=1, max_length=200)
    level: BadgeLevel
    mandatory_competency_names: tuple[str, ...] = Field(default_factory=tuple)
    reason: str | None = None


class MandatoryOverrideFileSchema(BaseModel):
    """Validates the mandatory override YAML file"""

    overrides: list[MandatoryOverrideSchema] = Field(default_factory=list)


class ApplicabilitySchema(BaseModel):
    """Validates the applicability YAML file"""

    always_gated_levels: list[BadgeLevel] = Field(
        default_factory=lambda: [BadgeLevel.LEVEL_1]
    )
    level_2_gated_series: list[BadgeSeries] = Field(default_factory=list)
    always_gated_series: list[BadgeSeries] = Field(default_factory=list)
