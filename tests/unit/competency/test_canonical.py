"""Name Canonicalization Test Suite"""

import logging

import pytest

from skillbadge.competency.canonical import (
    AliasTable,
    canonicalize,
    normalize_trimmed,
    resolve_badge_key,
)


# ============================================================================
# canonicalize
# ============================================================================
@pytest.mark.parametrize(
    "raw",
    ["A & B", "A&B", "A  &  B", "  a\t&\nb  ", "A &B"],
)
def test_ampersand_spellings_fold_to_one_form(raw):
    assert canonicalize(raw) == "a b"


def test_whitespace_runs_collapse():
    assert canonicalize("Gestion   de\tProjet ") == "gestion de projet"


def test_informatique_spelling_drift():
    assert canonicalize("Informatique & Numérique") == "information numérique"
    assert canonicalize("INFORMATION NUMÉRIQUE") == "information numérique"


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "   ",
        "A &",
        "& x",
        "INFORMATIQUE&&NUMÉRIQUE",
        "Organisation  Opérationnelle",
        "informatiqueinformatique",
        "Esprit Critique ",
    ],
)
def test_canonicalize_is_idempotent(raw):
    once = canonicalize(raw)
    assert canonicalize(once) == once


def test_normalize_trimmed_keeps_case_and_punctuation():
    assert normalize_trimmed("  Aide celui qui ne sait pas.  ") == (
        "Aide celui qui ne sait pas."
    )
    assert normalize_trimmed("A & B") == "A & B"


# ============================================================================
# resolve_badge_key
# ============================================================================
class TestResolveBadgeKey:
    """Resolution order: alias, exact, case-insensitive, canonical form"""

    def test_exact_match(self, packaged_config):
        table = packaged_config.rules.base
        assert resolve_badge_key("Communication", table) == "Communication"

    def test_case_insensitive_match(self, packaged_config):
        table = packaged_config.rules.base
        assert resolve_badge_key("esprit critique", table) == "Esprit Critique"
        assert resolve_badge_key("  COMMUNICATION ", table) == "Communication"

    def test_information_numerique_resolves_through_normalization(
        self, packaged_config
    ):
        table = packaged_config.rules.base
        assert (
            resolve_badge_key("INFORMATION NUMÉRIQUE", table)
            == "Informatique & Numérique"
        )

    def test_alias_substitution(self, packaged_config):
        table = packaged_config.rules.base
        aliases = packaged_config.aliases
        assert (
            resolve_badge_key("Inform Numérique", table, aliases)
            == "Informatique & Numérique"
        )
        assert resolve_badge_key("Organisation Opé", table, aliases) == (
            "Organisation Opérationnelle"
        )

    def test_alias_symmetry(self, packaged_config):
        table = packaged_config.rules.base
        aliases = packaged_config.aliases
        pairs = [(c, a) for c, a in aliases.pairs() if c in table]
        assert pairs, "packaged alias table should cover rule badges"
        for canonical, alias in pairs:
            assert resolve_badge_key(alias, table, aliases) == resolve_badge_key(
                canonical, table, aliases
            )

    def test_exact_beats_case_insensitive(self):
        table = {"abc": 1, "ABC": 2}
        assert resolve_badge_key("ABC", table) == "ABC"
        assert resolve_badge_key("abc", table) == "abc"

    def test_case_insensitive_beats_canonical_form(self):
        table = {"A & B": 1, "a&b": 2}
        assert resolve_badge_key("A&B", table) == "a&b"

    def test_canonical_form_returns_first_matching_key(self):
        table = {"Tri & Recyclage": 1, "Tri et Recyclage": 2}
        assert resolve_badge_key("tri&recyclage", table) == "Tri & Recyclage"

    @pytest.mark.parametrize("name", ["Not A Real Badge", "", "Communicatio"])
    def test_unresolvable_names_return_none(self, packaged_config, name):
        assert resolve_badge_key(name, packaged_config.rules.base) is None

    def test_empty_table_returns_none(self):
        assert resolve_badge_key("Communication", {}) is None


# ============================================================================
# AliasTable
# ============================================================================
class TestAliasTable:
    def test_canonical_for_trims_input(self):
        aliases = AliasTable.from_mapping({"Créativité": ["Creativite"]})
        assert aliases.canonical_for("  Creativite ") == "Créativité"
        assert aliases.canonical_for("creativite") is None

    def test_pairs_and_len(self):
        aliases = AliasTable.from_mapping({"A": ["a1", "a2"], "B": ["b1"]})
        assert sorted(aliases.pairs()) == [("A", "a1"), ("A", "a2"), ("B", "b1")]
        assert len(aliases) == 3

    def test_conflicting_alias_warns_and_keeps_last(self, caplog):
        with caplog.at_level(logging.WARNING):
            aliases = AliasTable.from_mapping({"A": ["shared"], "B": ["shared"]})
        assert aliases.canonical_for("shared") == "B"
        assert "registered for both" in caplog.text
