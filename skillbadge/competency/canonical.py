"""Badge and Competency Name Canonicalization

Backend badge names drift over time ("Informatique & Numérique",
"Information Numérique", "INFORMATION  NUMÉRIQUE"...). Everything here maps
free-form names to keys of the static catalogs. Canonical forms are only
compared, never displayed.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Mapping, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_AMPERSAND = re.compile(r"\s*&\s*")
_WHITESPACE = re.compile(r"\s+")


def canonicalize(name: str) -> str:
    """Normalize a name for equality comparison.

    Lower-cases, folds "A & B" / "A&B" / "A  &  B" to "a b", collapses
    whitespace and rewrites "informatique" to "information".
    Idempotent: canonicalize(canonicalize(x)) == canonicalize(x).
    """
    text = name.strip().lower()
    text = _AMPERSAND.sub(" ", text)
    text = _WHITESPACE.sub(" ", text)
    text = text.replace("informatique", "information")
    # an ampersand at either end leaves a stray space behind
    return text.strip()


def normalize_trimmed(name: str) -> str:
    """Trim-only normalization used for mandatory-name matching"""
    return name.strip()


@dataclass(frozen=True)
class AliasTable:
    """Canonical badge name -> accepted alternate spellings"""

    aliases: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    _reverse: Mapping[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        reverse: dict[str, str] = {}
        for canonical, variants in self.aliases.items():
            for variant in variants:
                key = variant.strip()
                if key in reverse and reverse[key] != canonical:
                    logger.warning(
                        "Alias %r registered for both %r and %r, keeping %r",
                        key,
                        reverse[key],
                        canonical,
                        canonical,
                    )
                reverse[key] = canonical
        object.__setattr__(self, "_reverse", reverse)

    @classmethod
    def from_mapping(cls, aliases: Mapping[str, list[str]]) -> "AliasTable":
        return cls(aliases={k: tuple(v) for k, v in aliases.items()})

    def canonical_for(self, name: str) -> str | None:
        """Return the canonical name if `name` is a registered alias"""
        return self._reverse.get(name.strip())

    def pairs(self) -> list[tuple[str, str]]:
        """All (canonical, alias) pairs"""
        return [(c, a) for c, variants in self.aliases.items() for a in variants]

    def __len__(self) -> int:
        return len(self._reverse)


EMPTY_ALIASES = AliasTable()


def resolve_badge_key(
    name: str, table: Mapping[str, T], aliases: AliasTable = EMPTY_ALIASES
) -> str | None:
    """Resolve a free-form name to a key of `table`.

    Order: alias substitution, exact key, case-insensitive key, canonical
    form. Returns None when nothing matches; callers treat that as "no
    entry", not as an error.
    """
    if not name or not table:
        return None

    candidate = aliases.canonical_for(name) or name.strip()

    if candidate in table:
        return candidate

    lowered = candidate.lower()
    for key in table:
        if key.lower() == lowered:
            return key

    wanted = canonicalize(candidate)
    for key in table:
        if canonicalize(key) == wanted:
            logger.debug("Resolved %r to %r by canonical form", name, key)
            return key

    return None
