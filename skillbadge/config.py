"""Configuration management for the Skill Badge competency engine
- Handles environment variables and engine settings.
"""

from pathlib import Path

from pydantic import ConfigDict, model_validator
from pydantic_settings import BaseSettings

PACKAGED_DEFINITIONS_PATH = Path(__file__).parent / "competency" / "definitions"


class Settings(BaseSettings):
    """Engine settings with env variable support"""

    # Definitions Config
    # None means the YAML definitions shipped with the package
    DEFINITIONS_PATH: str | None = None

    # Validation Config
    # Warn when a gated badge has no configured policy (fail-open drift)
    WARN_ON_MISSING_POLICY: bool = True

    # Development Config
    DEBUG: bool = False
    LOG_LEVEL: str = "info"

    model_config = ConfigDict(
        env_prefix="SKILLBADGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @model_validator(mode="after")
    def validate_model(self):
        """Post initialization hook using Pydantic v2 model validator"""
        if self.DEBUG and self.LOG_LEVEL.lower() == "info":
            self.LOG_LEVEL = "debug"  # pylint: disable=C0103
        return self

    def get_definitions_path(self) -> Path:
        """Get the directory the catalog definitions are loaded from"""
        if self.DEFINITIONS_PATH:
            return Path(self.DEFINITIONS_PATH).expanduser().resolve()
        return PACKAGED_DEFINITIONS_PATH


# Global settings instance
settings = Settings()
