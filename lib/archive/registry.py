"""
Archive source registry - Plugin system for archive backends.
"""

from typing import Callable, Dict, List, Optional, Type, TYPE_CHECKING

from lib.archive.errors import UnknownSourceError

if TYPE_CHECKING:
    from lib.archive.sources import BaseArchiveSource


# Global registry of archive sources
_REGISTRY: Dict[str, Type["BaseArchiveSource"]] = {}


def register(name: str) -> Callable[[Type["BaseArchiveSource"]], Type["BaseArchiveSource"]]:
    """
    Decorator to register an archive source class.

    Usage:
        @register("my_archive")
        class MyArchiveSource(BaseArchiveSource):
            ...
    """

    def decorator(cls: Type["BaseArchiveSource"]) -> Type["BaseArchiveSource"]:
        if name in _REGISTRY:
            raise ValueError(f"Source '{name}' is already registered")
        cls.name = name
        _REGISTRY[name] = cls
        return cls

    return decorator


def get_source(name: str) -> Type["BaseArchiveSource"]:
    """
    Get an archive source class by name.

    Raises:
        UnknownSourceError: If source is not registered
    """
    if name not in _REGISTRY:
        raise UnknownSourceError(name, list_sources())
    return _REGISTRY[name]


def get_source_or_none(name: str) -> Optional[Type["BaseArchiveSource"]]:
    """Get an archive source class by name, or None if not found."""
    return _REGISTRY.get(name)


def list_sources() -> List[str]:
    """List all registered source names."""
    return list(_REGISTRY.keys())


def is_registered(name: str) -> bool:
    """Check if a source is registered."""
    return name in _REGISTRY
