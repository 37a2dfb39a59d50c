from .Config import config, ConfigRepository, CollectionSettings, env
from .Collection import Collection

__all__ = [
    "config",
    "ConfigRepository",
    "CollectionSettings",
    "env",
    "Collection"
]
