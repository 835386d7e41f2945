"""Competency Selection Evaluator

Decides whether a selection of competencies satisfies a badge's admission
policy. Single pass, no side effects besides logging, never raises.
"""

import logging
from typing import Any, Iterable, Mapping

from pydantic import ValidationError

from skillbadge.competency.canonical import normalize_trimmed
from skillbadge.competency.catalogs import EngineConfig
from skillbadge.competency.result import ValidationResult
from skillbadge.competency.schemas.badge import BadgeDescriptor, Competency
from skillbadge.competency.schemas.policy import ValidationPolicy

logger = logging.getLogger(__name__)

MISSING_MANDATORY_MESSAGE = (
    "Compétence(s) obligatoire(s) manquante(s) : {names}. "
    "Veuillez les sélectionner avant d'attribuer ce badge."
)
INSUFFICIENT_COUNT_MESSAGE = (
    "Vous devez sélectionner au moins {required} compétence(s) pour ce badge "
    "({actual} sélectionnée(s))."
)


def requires_validation(badge: BadgeDescriptor, config: EngineConfig) -> bool:
    """Whether competency validation runs at all for this badge variant"""
    return config.applicability.requires_validation(badge)


def get_effective_policy(
    badge: BadgeDescriptor, config: EngineConfig
) -> ValidationPolicy | None:
    """Resolve the effective policy, mandatory-set exceptions applied"""
    policy = config.rules.get_policy(badge.name, badge.level)
    if policy is None:
        return None
    return config.mandatory_overrides.apply(policy, badge.name, badge.level)


def _coerce_badge(badge: BadgeDescriptor | Mapping[str, Any]) -> BadgeDescriptor | None:
    if isinstance(badge, BadgeDescriptor):
        return badge
    try:
        return BadgeDescriptor.from_payload(badge)
    except (ValidationError, TypeError, AttributeError) as e:
        logger.warning("Malformed badge payload, skipping competency check: %s", e)
        return None


def _coerce_selection(selected_ids: Iterable[int] | None) -> tuple[int, ...] | None:
    """Sorted distinct ids, or None when the selection is not a set of ints"""
    try:
        ids = set(selected_ids or ())
    except TypeError as e:
        logger.warning("Malformed selection, skipping competency check: %s", e)
        return None
    if not all(isinstance(i, int) and not isinstance(i, bool) for i in ids):
        logger.warning("Malformed selection, skipping competency check: %r", ids)
        return None
    return tuple(sorted(ids))


def _coerce_catalog(
    catalog: Iterable[Competency | Mapping[str, Any]] | None,
) -> list[Competency]:
    try:
        entries = list(catalog or ())
    except TypeError as e:
        logger.warning("Catalog is not iterable, treating it as empty: %s", e)
        return []

    competencies = []
    for entry in entries:
        if isinstance(entry, Competency):
            competencies.append(entry)
            continue
        try:
            competencies.append(Competency.from_payload(entry))
        except (ValidationError, TypeError, ValueError, KeyError) as e:
            # dropping an entry can only under-count
            logger.warning("Skipping malformed catalog entry %r: %s", entry, e)
    return competencies


def _selected_names(
    selected_ids: Iterable[int], catalog: Iterable[Competency]
) -> set[str]:
    names_by_id: dict[int, str] = {}
    for competency in catalog:
        names_by_id.setdefault(competency.id, competency.name)

    selected = set()
    for competency_id in selected_ids:
        name = names_by_id.get(competency_id)
        if name is None:
            # can only under-count, never satisfy a mandatory name
            logger.debug(
                "Selected competency %s not in catalog, ignored", competency_id
            )
            continue
        selected.add(normalize_trimmed(name))
    return selected


def evaluate(
    selected_ids: Iterable[int],
    badge: BadgeDescriptor | Mapping[str, Any],
    catalog: Iterable[Competency | Mapping[str, Any]],
    config: EngineConfig,
) -> ValidationResult:
    """Check a competency selection against the badge's policy.

    Args:
        selected_ids: Ids of the competencies the user ticked
        badge: The badge being assigned (descriptor or raw backend payload)
        catalog: Competencies offered for this badge (see get_competencies)
        config: Catalog tables to evaluate against
    Returns:
        ValidationResult; rejections carry a French message for the user
    """
    # FAIL-OPEN: a badge we cannot read is accepted unchecked, so a
    # malformed payload bypasses every competency rule.
    descriptor = _coerce_badge(badge)
    if descriptor is None or not descriptor.name.strip():
        return ValidationResult.accepted(reason="malformed_badge")

    if not requires_validation(descriptor, config):
        return ValidationResult.accepted(reason="not_gated")

    policy = get_effective_policy(descriptor, config)
    if policy is None:
        # FAIL-OPEN: no policy means nothing is enforced, so a misspelled
        # badge name disables validation for that badge.
        if config.warn_on_missing_policy:
            logger.warning(
                "No competency policy for badge %r (%s, %s), accepting selection",
                descriptor.name,
                descriptor.level.value,
                descriptor.series.value,
            )
        return ValidationResult.accepted(reason="no_policy")

    # FAIL-OPEN: like an unreadable badge, an unreadable selection is
    # accepted unchecked.
    selected_ids_seen = _coerce_selection(selected_ids)
    if selected_ids_seen is None:
        return ValidationResult.accepted(reason="malformed_selection")
    selected = _selected_names(selected_ids_seen, _coerce_catalog(catalog))

    mandatory = [normalize_trimmed(n) for n in policy.mandatory_competency_names]
    missing = tuple(dict.fromkeys(n for n in mandatory if n not in selected))
    if missing:
        logger.info(
            "Badge %r (%s) rejected, missing mandatory competencies: %s",
            descriptor.name,
            descriptor.level.value,
            missing,
        )
        return ValidationResult(
            valid=False,
            error_message=MISSING_MANDATORY_MESSAGE.format(
                names=", ".join(f"« {n} »" for n in missing)
            ),
            missing_mandatory=missing,
            evidence={"selected_ids": selected_ids_seen, "hint": policy.hint_text},
        )

    if len(selected) < policy.minimum_required:
        logger.info(
            "Badge %r (%s) rejected, %d/%d competencies selected",
            descriptor.name,
            descriptor.level.value,
            len(selected),
            policy.minimum_required,
        )
        return ValidationResult(
            valid=False,
            error_message=INSUFFICIENT_COUNT_MESSAGE.format(
                required=policy.minimum_required, actual=len(selected)
            ),
            evidence={
                "selected_ids": selected_ids_seen,
                "selected_count": len(selected),
                "required_count": policy.minimum_required,
                "hint": policy.hint_text,
            },
        )

    return ValidationResult.accepted(
        selected_count=len(selected), required_count=policy.minimum_required
    )
