"""Validation Result Model"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a competency selection check"""

    valid: bool
    error_message: str | None = None  # shown to the user verbatim
    missing_mandatory: tuple[str, ...] = ()
    evidence: Mapping[str, Any] = field(default_factory=dict)  # audit trail

    def __post_init__(self):
        object.__setattr__(self, "missing_mandatory", tuple(self.missing_mandatory))
        object.__setattr__(self, "evidence", MappingProxyType(dict(self.evidence)))

    def __bool__(self) -> bool:
        return self.valid

    @classmethod
    def accepted(cls, **evidence: Any) -> "ValidationResult":
        return cls(valid=True, evidence=evidence)

    def to_dict(self) -> dict[str, Any]:
        """Shape consumed by the assignment form"""
        return {"valid": self.valid, "errorMessage": self.error_message}
