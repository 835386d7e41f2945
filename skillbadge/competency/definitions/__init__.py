"""Competency Catalog Definition Loader"""

from skillbadge.competency.definitions.loader import (
    DefinitionLoader,
    get_loader,
    load_config_on_startup,
)

__all__ = ["DefinitionLoader", "get_loader", "load_config_on_startup"]
