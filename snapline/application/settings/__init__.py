"""
Settings - validated, persisted user preferences.

Contents:
- base_settings.py: validation framework, BaseSettings, BaseSettingsManager
- settings_registry.py: namespace -> schema lookup used by the managers
- snap_settings.py: snapping preferences
"""
from snapline.application.settings.base_settings import (
    BaseSettings,
    BaseSettingsManager,
    FieldValidator,
    ValidationResult,
    validated_field,
)
from snapline.application.settings.settings_registry import (
    SettingsRegistry,
    register_settings,
)
from snapline.application.settings.snap_settings import SnapSettings, SnapSettingsManager

__all__ = [
    'BaseSettings',
    'BaseSettingsManager',
    'FieldValidator',
    'ValidationResult',
    'validated_field',
    'SettingsRegistry',
    'register_settings',
    'SnapSettings',
    'SnapSettingsManager',
]
