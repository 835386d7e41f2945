"""Applicability Gate Tests"""

import pytest

from skillbadge.competency.catalogs import ApplicabilityPolicy
from skillbadge.competency.evaluator import requires_validation
from skillbadge.competency.schemas.badge import BadgeLevel, BadgeSeries


@pytest.mark.parametrize(
    "level, series, expected",
    [
        # level 1 is always checked
        (BadgeLevel.LEVEL_1, BadgeSeries.SOFT_SKILLS_4LAB, True),
        (BadgeLevel.LEVEL_1, BadgeSeries.PSYCHOSOCIALE, True),
        (BadgeLevel.LEVEL_1, BadgeSeries.OTHER, True),
        # level 2 only for the listed series
        (BadgeLevel.LEVEL_2, BadgeSeries.SOFT_SKILLS_4LAB, True),
        (BadgeLevel.LEVEL_2, BadgeSeries.AUDIOVISUELLE, True),
        (BadgeLevel.LEVEL_2, BadgeSeries.PSYCHOSOCIALE, False),
        (BadgeLevel.LEVEL_2, BadgeSeries.PARCOURS_DES_POSSIBLES, False),
        (BadgeLevel.LEVEL_2, BadgeSeries.OTHER, False),
        # higher levels
        (BadgeLevel.LEVEL_3, BadgeSeries.SOFT_SKILLS_4LAB, False),
        (BadgeLevel.LEVEL_4, BadgeSeries.AUDIOVISUELLE, False),
        (BadgeLevel.LEVEL_3, BadgeSeries.PARCOURS_PROFESSIONNEL, True),
        (BadgeLevel.LEVEL_4, BadgeSeries.PARCOURS_PROFESSIONNEL, True),
    ],
)
def test_packaged_applicability(packaged_config, make_badge, level, series, expected):
    badge = make_badge("Communication", level, series)
    assert requires_validation(badge, packaged_config) is expected


def test_series_label_drives_the_gate(packaged_config, make_badge):
    assert requires_validation(
        make_badge("ACTING", "level_3", "Série Parcours professionnel"),
        packaged_config,
    )
    assert not requires_validation(
        make_badge("Communication", "level_2", "Série CPS"), packaged_config
    )


def test_default_policy_gates_level_1_only(make_badge):
    policy = ApplicabilityPolicy()
    assert policy.requires_validation(make_badge("Communication", "level_1"))
    for level in ("level_2", "level_3", "level_4"):
        assert not policy.requires_validation(make_badge("Communication", level))
