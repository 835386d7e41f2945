"""YAML Definition Loader for Competency Rules and Catalogs"""

import logging
from pathlib import Path
from typing import Any, TypeVar

import yaml
from pydantic import BaseModel

from skillbadge.competency.canonical import EMPTY_ALIASES, AliasTable
from skillbadge.competency.catalogs import (
    ApplicabilityPolicy,
    EngineConfig,
    FallbackCompetencyCatalog,
    MandatoryOverrideTable,
    RuleCatalog,
)
from skillbadge.competency.schemas.badge import BadgeLevel, Competency
from skillbadge.competency.schemas.policy import (
    AliasFileSchema,
    ApplicabilitySchema,
    CompetencyFileSchema,
    MandatoryOverrideFileSchema,
    RuleFileSchema,
    ValidationPolicy,
)
from skillbadge.config import settings

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class DefinitionLoader:
    """Loads the competency catalogs from YAML into an EngineConfig"""

    def __init__(self, definitions_path: Path | None = None):
        self.definitions_path = definitions_path or settings.get_definitions_path()

    def load_all(self) -> EngineConfig:
        """Load every catalog and bundle them into one EngineConfig"""
        aliases = self.load_aliases()
        return EngineConfig(
            rules=self.load_rules(aliases),
            competencies=self.load_competencies(aliases),
            mandatory_overrides=self.load_mandatory_overrides(aliases),
            applicability=self.load_applicability(),
            aliases=aliases,
            warn_on_missing_policy=settings.WARN_ON_MISSING_POLICY,
        )

    def load_aliases(self) -> AliasTable:
        """Load the alias table (canonical name -> alternate spellings)"""
        aliases_file = self.definitions_path / "aliases.yaml"
        if not aliases_file.exists():
            logger.warning("Alias file not found: %s", aliases_file)
            return EMPTY_ALIASES

        try:
            schema = self._load_yaml(aliases_file, AliasFileSchema)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Failed to load aliases from %s: %s", aliases_file, e)
            return EMPTY_ALIASES
        return AliasTable.from_mapping(schema.aliases)

    def load_rules(self, aliases: AliasTable = EMPTY_ALIASES) -> RuleCatalog:
        """Load all rules YAML files into a RuleCatalog"""
        base: dict[str, ValidationPolicy] = {}
        overrides: dict[str, dict[BadgeLevel, ValidationPolicy]] = {}

        for yaml_file in self._yaml_files("rules"):
            try:
                rule_file = self._load_yaml(yaml_file, RuleFileSchema)
            except Exception as e:  # pylint: disable=broad-exception-caught
                logger.error("Failed to load rules from %s: %s", yaml_file, e)
                continue

            for badge in rule_file.badges:
                if badge.name in base or badge.name in overrides:
                    logger.warning(
                        "Overwriting rules for badge %r from %s", badge.name, yaml_file
                    )
                    base.pop(badge.name, None)
                    overrides.pop(badge.name, None)
                if badge.policy is not None:
                    base[badge.name] = badge.policy
                if badge.levels:
                    overrides[badge.name] = dict(badge.levels)
            logger.debug(
                "Loaded %d badge rules from %s", len(rule_file.badges), yaml_file
            )

        return RuleCatalog(base=base, overrides=overrides, aliases=aliases)

    def load_competencies(
        self, aliases: AliasTable = EMPTY_ALIASES
    ) -> FallbackCompetencyCatalog:
        """Load all fallback competency YAML files"""
        generic: dict[str, list[Competency]] = {}
        by_level: dict[str, dict[BadgeLevel, list[Competency]]] = {}

        for yaml_file in self._yaml_files("competencies"):
            try:
                competency_file = self._load_yaml(yaml_file, CompetencyFileSchema)
            except Exception as e:  # pylint: disable=broad-exception-caught
                logger.error("Failed to load competencies from %s: %s", yaml_file, e)
                continue

            for badge in competency_file.badges:
                if badge.name in generic or badge.name in by_level:
                    logger.warning(
                        "Overwriting fallback competencies for badge %r from %s",
                        badge.name,
                        yaml_file,
                    )
                    generic.pop(badge.name, None)
                    by_level.pop(badge.name, None)
                if badge.competencies:
                    generic[badge.name] = list(badge.competencies)
                if badge.levels:
                    by_level[badge.name] = {
                        level: list(comps) for level, comps in badge.levels.items()
                    }

        return FallbackCompetencyCatalog(
            generic=generic, by_level=by_level, aliases=aliases
        )

    def load_mandatory_overrides(
        self, aliases: AliasTable = EMPTY_ALIASES
    ) -> MandatoryOverrideTable:
        """Load the (badge, level) -> mandatory set exceptions"""
        overrides_file = self.definitions_path / "mandatory_overrides.yaml"
        if not overrides_file.exists():
            logger.warning("Mandatory override file not found: %s", overrides_file)
            return MandatoryOverrideTable(aliases=aliases)

        try:
            schema = self._load_yaml(overrides_file, MandatoryOverrideFileSchema)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error(
                "Failed to load mandatory overrides from %s: %s", overrides_file, e
            )
            return MandatoryOverrideTable(aliases=aliases)

        table: dict[str, dict[BadgeLevel, tuple[str, ...]]] = {}
        for entry in schema.overrides:
            levels = table.setdefault(entry.name, {})
            if entry.level in levels:
                logger.warning(
                    "Duplicate mandatory override for %r at %s, keeping the last one",
                    entry.name,
                    entry.level.value,
                )
            levels[entry.level] = entry.mandatory_competency_names
        return MandatoryOverrideTable(overrides=table, aliases=aliases)

    def load_applicability(self) -> ApplicabilityPolicy:
        """Load which badge variants require validation"""
        applicability_file = self.definitions_path / "applicability.yaml"
        if not applicability_file.exists():
            logger.warning(
                "Applicability file not found, gating level 1 only: %s",
                applicability_file,
            )
            return ApplicabilityPolicy()

        try:
            schema = self._load_yaml(applicability_file, ApplicabilitySchema)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error(
                "Failed to load applicability from %s: %s", applicability_file, e
            )
            return ApplicabilityPolicy()

        return ApplicabilityPolicy(
            always_gated_levels=frozenset(schema.always_gated_levels),
            level_2_gated_series=frozenset(schema.level_2_gated_series),
            always_gated_series=frozenset(schema.always_gated_series),
        )

    def _yaml_files(self, subdir: str) -> list[Path]:
        directory = self.definitions_path / subdir
        if not directory.exists():
            logger.warning("Definitions directory not found: %s", directory)
            return []
        # sorted so that "last definition wins" is deterministic
        return sorted(directory.rglob("*.yaml"))

    def _load_yaml(self, path: Path, schema: type[SchemaT]) -> SchemaT:
        """Load and validate a YAML file"""
        with open(path, encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
        return schema(**(data or {}))


# Singleton instance
_loader: DefinitionLoader | None = None


def get_loader() -> DefinitionLoader:
    """Get singleton loader instance"""
    global _loader  # pylint: disable=global-statement
    if _loader is None:
        _loader = DefinitionLoader()
    return _loader


def load_config_on_startup() -> EngineConfig:
    """Load the catalogs once at startup - call from the host application"""
    config = get_loader().load_all()
    logger.info(
        "Competency catalogs loaded: %d rules, %d fallback catalogs, "
        "%d mandatory overrides, %d aliases",
        len(config.rules),
        len(config.competencies),
        len(config.mandatory_overrides),
        len(config.aliases),
    )
    return config
