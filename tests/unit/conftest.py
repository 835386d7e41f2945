"""
Unit test configuration.
"""

import pytest

from skillbadge.competency.canonical import AliasTable
from skillbadge.competency.catalogs import (
    ApplicabilityPolicy,
    EngineConfig,
    FallbackCompetencyCatalog,
    MandatoryOverrideTable,
    RuleCatalog,
)
from skillbadge.competency.definitions.loader import DefinitionLoader
from skillbadge.competency.schemas.badge import (
    BadgeDescriptor,
    BadgeLevel,
    BadgeSeries,
    Competency,
)
from skillbadge.competency.schemas.policy import ValidationPolicy
from skillbadge.competency.service import CompetencyValidationService
from skillbadge.config import PACKAGED_DEFINITIONS_PATH


@pytest.fixture
def make_badge():
    """Factory for badge descriptors with test defaults."""

    def _make(
        name: str,
        level: BadgeLevel | str = BadgeLevel.LEVEL_1,
        series: BadgeSeries | str = BadgeSeries.SOFT_SKILLS_4LAB,
    ) -> BadgeDescriptor:
        return BadgeDescriptor(name=name, level=level, series=series)

    return _make


@pytest.fixture(scope="session")
def packaged_config() -> EngineConfig:
    """EngineConfig loaded from the YAML definitions shipped with the package"""
    return DefinitionLoader(PACKAGED_DEFINITIONS_PATH).load_all()


@pytest.fixture
def service(packaged_config) -> CompetencyValidationService:
    return CompetencyValidationService(packaged_config)


@pytest.fixture
def small_config() -> EngineConfig:
    """Hand-built substitute tables, independent of the packaged YAML.

    - "Quiz": base policy needs 3 with no mandatory name, level 2 override
      needs 1 mandatory name.
    - "Tri & Recyclage": only a level 3 override.
    - "Quiz" level 4 drops its mandatory set through the override table.
    """
    aliases = AliasTable.from_mapping({"Quiz": ["Questionnaire"]})
    rules = RuleCatalog(
        base={
            "Quiz": ValidationPolicy(minimum_required=3, hint_text="Trois au moins."),
        },
        overrides={
            "Quiz": {
                BadgeLevel.LEVEL_2: ValidationPolicy(
                    mandatory_competency_names=["Répond seul"],
                    minimum_required=1,
                    hint_text="Réponse autonome obligatoire.",
                ),
                BadgeLevel.LEVEL_4: ValidationPolicy(
                    mandatory_competency_names=["Répond seul"],
                    minimum_required=1,
                ),
            },
            "Tri & Recyclage": {
                BadgeLevel.LEVEL_3: ValidationPolicy(minimum_required=1),
            },
        },
        aliases=aliases,
    )
    competencies = FallbackCompetencyCatalog(
        generic={
            "Quiz": [
                Competency(id=-1, name="Répond seul"),
                Competency(id=-2, name="Explique sa réponse"),
                Competency(id=-3, name="Aide un camarade"),
            ]
        },
        by_level={
            "Quiz": {BadgeLevel.LEVEL_3: [Competency(id=-31, name="Crée un quiz")]}
        },
        aliases=aliases,
    )
    overrides = MandatoryOverrideTable(
        overrides={"Quiz": {BadgeLevel.LEVEL_4: ()}}, aliases=aliases
    )
    applicability = ApplicabilityPolicy(
        always_gated_levels=frozenset(BadgeLevel),
    )
    return EngineConfig(
        rules=rules,
        competencies=competencies,
        mandatory_overrides=overrides,
        applicability=applicability,
        aliases=aliases,
    )


@pytest.fixture
def backend_competencies() -> list[Competency]:
    """Competencies as the backend would send them for Communication level 1"""
    return [
        Competency(id=12, name="Écoute et prend en compte ses interlocuteurs."),
        Competency(
            id=14, name="Parle et argumente à l'oral de façon claire et organisée"
        ),
        Competency(id=15, name="Présente un projet devant un groupe."),
    ]
