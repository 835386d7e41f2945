"""Badge and Competency Schemas"""

import re
from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_LEVEL_PATTERN = re.compile(r"(?:level_|niveau\s*)?([1-4])")


class BadgeLevel(str, Enum):
    """Badge level identifiers as the backend spells them"""

    LEVEL_1 = "level_1"
    LEVEL_2 = "level_2"
    LEVEL_3 = "level_3"
    LEVEL_4 = "level_4"

    @property
    def number(self) -> int:
        return int(self.value.rsplit("_", 1)[1])

    @classmethod
    def parse(cls, value: Any) -> "BadgeLevel":
        """Parse a level from "level_2", "2", 2 or "Niveau 2".
        Raises ValueError for anything else.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            text = str(value)
        elif isinstance(value, str):
            text = value.strip().lower()
        else:
            raise ValueError(f"Invalid badge level: {value!r}")

        match = _LEVEL_PATTERN.fullmatch(text)
        if not match:
            raise ValueError(f"Invalid badge level: {value!r}")
        return cls(f"level_{match.group(1)}")


class BadgeSeries(str, Enum):
    """Closed set of badge series known to the engine"""

    SOFT_SKILLS_4LAB = "soft_skills_4lab"
    PSYCHOSOCIALE = "psychosociale"
    AUDIOVISUELLE = "audiovisuelle"
    PARCOURS_DES_POSSIBLES = "parcours_des_possibles"
    PARCOURS_PROFESSIONNEL = "parcours_professionnel"
    OTHER = "other"

    @classmethod
    def from_label(cls, label: str | None) -> "BadgeSeries":
        """Fold a backend series label to its series.

        The backend has shipped several spellings for the same series over
        time ("Série TouKouLeur", "universelle", "Série Soft Skills 4LAB").
        Unknown labels map to OTHER rather than failing.
        """
        if not label:
            return cls.OTHER
        lower = label.strip().lower()
        try:
            return cls(lower)
        except ValueError:
            pass

        if "toukouleur" in lower or "universelle" in lower or "soft skills" in lower:
            return cls.SOFT_SKILLS_4LAB
        if "psychosociale" in lower or "cps" in lower.split():
            return cls.PSYCHOSOCIALE
        if "audiovisuelle" in lower:
            return cls.AUDIOVISUELLE
        if "parcours professionnel" in lower:
            return cls.PARCOURS_PROFESSIONNEL
        if "parcours des possibles" in lower:
            return cls.PARCOURS_DES_POSSIBLES
        return cls.OTHER


class BadgeDescriptor(BaseModel):
    """Identifies one badge variant (name + level + series)"""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    level: BadgeLevel
    series: BadgeSeries = BadgeSeries.OTHER
    # raw backend label, kept for display only
    series_label: str = ""
    description: str | None = None

    @model_validator(mode="before")
    @classmethod
    def derive_series_label(cls, data: Any) -> Any:
        """Keep the raw series string as series_label when one is given"""
        if isinstance(data, Mapping):
            raw = data.get("series")
            if (
                isinstance(raw, str)
                and not isinstance(raw, BadgeSeries)
                and not data.get("series_label")
            ):
                data = {**data, "series_label": raw}
        return data

    @field_validator("level", mode="before")
    @classmethod
    def parse_level(cls, v: Any) -> BadgeLevel:
        return BadgeLevel.parse(v)

    @field_validator("series", mode="before")
    @classmethod
    def parse_series(cls, v: Any) -> BadgeSeries:
        if isinstance(v, BadgeSeries):
            return v
        return BadgeSeries.from_label(v)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "BadgeDescriptor":
        """Build a descriptor from a backend badge payload"""
        return cls(
            name=str(payload.get("name") or "").strip(),
            level=payload.get("level"),
            series=payload.get("series") or "",
            description=payload.get("description"),
        )


class Competency(BaseModel):
    """A competency (expertise) that can be attached to an assignment.

    Positive ids reference backend competencies; negative ids are local
    fallback competencies and must never be submitted to the backend.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    name: str = Field(min_length=1)

    @property
    def is_fallback(self) -> bool:
        return self.id < 0

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Competency":
        """Build a competency from a backend expertise payload"""
        return cls(id=int(payload["id"]), name=str(payload["name"]))


class FallbackCompetency(Competency):
    """Competency defined locally in the fallback catalog"""

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: int) -> int:
        if v >= 0:
            raise ValueError("Fallback competency ids must be negative")
        return v

