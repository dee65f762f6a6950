"""
Settings Registry

Maps a settings namespace to its schema class. Settings managers resolve
their schema through the registry by NAMESPACE, so a schema module only has
to be imported (and decorated) for its manager to find it.

Usage:
    @register_settings("snapping")
    @dataclass
    class SnapSettings(BaseSettings):
        snap_threshold_px: int = 25

    class SnapSettingsManager(BaseSettingsManager):
        NAMESPACE = "snapping"   # schema resolved from the registry
"""
import threading
from typing import Dict, List, Type


class SettingsRegistry:
    """
    Class-level namespace -> settings schema table.

    Every operation holds the class lock; modules may register while other
    threads import.
    """

    _lock = threading.Lock()
    _schemas: Dict[str, Type] = {}

    @classmethod
    def register(cls, namespace: str, settings_class: Type) -> None:
        """
        Register the schema for a namespace.

        Registering the same class again is a no-op (module reloads).

        Raises:
            ValueError: If the namespace already has a different schema
        """
        with cls._lock:
            existing = cls._schemas.get(namespace)
            if existing is not None and existing is not settings_class:
                raise ValueError(
                    f"Settings namespace '{namespace}' already uses {existing.__name__}; "
                    f"cannot register {settings_class.__name__}"
                )
            cls._schemas[namespace] = settings_class

    @classmethod
    def schema_for(cls, namespace: str) -> Type:
        """
        Schema class registered for a namespace.

        Raises:
            KeyError: If nothing is registered under the namespace
        """
        with cls._lock:
            try:
                return cls._schemas[namespace]
            except KeyError:
                raise KeyError(f"No settings schema registered for namespace '{namespace}'") from None

    @classmethod
    def namespaces(cls) -> List[str]:
        with cls._lock:
            return sorted(cls._schemas)


def register_settings(namespace: str):
    """Class decorator registering a settings schema under `namespace`."""
    def decorator(cls):
        SettingsRegistry.register(namespace, cls)
        return cls
    return decorator
