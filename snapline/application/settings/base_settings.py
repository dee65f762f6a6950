"""
Base Settings Manager

Foundation for settings managers: a validated dataclass schema persisted
under one namespaced key of a preferences repository.

Features:
- Dataclass-based schema with field validation (ValidationResult)
- Persistence via any repository exposing get(key, default) / set(key, value)
- Immediate save on change
- Signal emission for UI reactivity
- Backwards-compatible loading (missing fields take defaults, unknown keys
  are dropped, invalid stored values fall back to defaults)

Usage:
    1. Create a dataclass for your settings schema (inherit BaseSettings)
    2. Register it with @register_settings("<namespace>")
    3. Inherit from BaseSettingsManager and set NAMESPACE to the same name
    4. Add typed property accessors
"""
from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Protocol, Type, Union

from PyQt6.QtCore import QObject, pyqtSignal

from snapline.application.settings.settings_registry import SettingsRegistry
from snapline.utils.message import Log


class PreferencesStore(Protocol):
    """What a settings manager needs from a preferences repository."""

    def get(self, key: str, default: Any = None) -> Any:
        ...

    def set(self, key: str, value: Any) -> None:
        ...


# =============================================================================
# Validation Framework
# =============================================================================

@dataclass
class ValidationResult:
    """
    Result of validating settings.

    Attributes:
        valid: True if all validations passed
        errors: Validation failures
        warnings: Non-blocking issues
    """
    valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, message: str):
        self.errors.append(message)
        self.valid = False

    def add_warning(self, message: str):
        """Add a warning (doesn't affect validity)."""
        self.warnings.append(message)

    def merge(self, other: 'ValidationResult'):
        if not other.valid:
            self.valid = False
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)

    def __bool__(self) -> bool:
        return self.valid


@dataclass
class FieldValidator:
    """
    Validation rules for a settings field.

    Example:
        @dataclass
        class MySettings(BaseSettings):
            threshold: int = field(default=25, metadata={
                'validator': FieldValidator(min_value=1, max_value=500)
            })
    """
    # Range validation (numbers)
    min_value: Optional[Union[int, float]] = None
    max_value: Optional[Union[int, float]] = None

    # Choice validation (enum names / strings)
    choices: Optional[List[Any]] = None

    # Value cannot be None or empty
    required: bool = False

    # Signature: (value, field_name) -> Optional[str] (error message or None)
    custom: Optional[Callable[[Any, str], Optional[str]]] = None

    allow_none: bool = True

    def validate(self, value: Any, field_name: str) -> ValidationResult:
        """
        Validate a value against this validator's rules.

        Args:
            value: The value to validate
            field_name: Name of the field (for error messages)

        Returns:
            ValidationResult with any errors
        """
        result = ValidationResult()

        if value is None:
            if not self.allow_none:
                result.add_error(f"{field_name}: Cannot be None")
            elif self.required:
                result.add_error(f"{field_name}: Required field cannot be empty")
            return result

        if self.required and isinstance(value, str) and not value.strip():
            result.add_error(f"{field_name}: Required field cannot be empty")
            return result

        # bool is an int subclass but never a meaningful number here
        is_number = isinstance(value, (int, float)) and not isinstance(value, bool)

        if self.min_value is not None and is_number and value < self.min_value:
            result.add_error(f"{field_name}: Value {value} is below minimum {self.min_value}")

        if self.max_value is not None and is_number and value > self.max_value:
            result.add_error(f"{field_name}: Value {value} is above maximum {self.max_value}")

        if self.choices is not None:
            check_value = value.value if isinstance(value, Enum) else value
            valid_choices = [c.value if isinstance(c, Enum) else c for c in self.choices]
            if check_value not in valid_choices:
                result.add_error(f"{field_name}: Value '{value}' not in allowed choices: {self.choices}")

        if self.custom is not None:
            error = self.custom(value, field_name)
            if error:
                result.add_error(error)

        return result


def validated_field(
    default: Any = None,
    *,
    min_value: Optional[Union[int, float]] = None,
    max_value: Optional[Union[int, float]] = None,
    choices: Optional[List[Any]] = None,
    required: bool = False,
    allow_none: bool = True,
    custom: Optional[Callable[[Any, str], Optional[str]]] = None,
    **kwargs
):
    """
    Create a dataclass field with validation metadata.

    Example:
        @dataclass
        class MySettings(BaseSettings):
            threshold: int = validated_field(25, min_value=1, max_value=500)
            edit_point: str = validated_field('MOUSE', choices=['MOUSE', 'PLAYHEAD'])

    Args:
        default: Default value for the field
        min_value: Minimum allowed value (numbers)
        max_value: Maximum allowed value (numbers)
        choices: Allowed values
        required: If True, value cannot be None or empty
        allow_none: If False, None values are not allowed
        custom: Custom validation function
        **kwargs: Additional arguments passed to dataclasses.field()

    Returns:
        A dataclass field with validation metadata
    """
    validator = FieldValidator(
        min_value=min_value,
        max_value=max_value,
        choices=choices,
        required=required,
        allow_none=allow_none,
        custom=custom,
    )

    metadata = dict(kwargs.pop('metadata', {}))
    metadata['validator'] = validator

    return field(default=default, metadata=metadata, **kwargs)


@dataclass
class BaseSettings:
    """
    Base class for all settings dataclasses.

    Subclasses define every field with a default so that stored data from
    older versions still loads.
    """

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary for storage."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BaseSettings':
        """
        Create settings from dictionary.

        Missing keys take their defaults; unknown keys are ignored.
        """
        valid_keys = {f.name for f in fields(cls)}
        merged = asdict(cls())
        merged.update({k: v for k, v in data.items() if k in valid_keys})
        return cls(**merged)

    def validate(self) -> ValidationResult:
        """
        Validate all fields that carry a validator.

        Returns:
            ValidationResult with valid=True if all validations pass
        """
        result = ValidationResult()
        for f in fields(self):
            validator = f.metadata.get('validator') if f.metadata else None
            if isinstance(validator, FieldValidator):
                result.merge(validator.validate(getattr(self, f.name), f.name))
        return result

    def validate_field(self, field_name: str) -> ValidationResult:
        """
        Validate a single field by name.

        Raises:
            AttributeError: If field doesn't exist
        """
        for f in fields(self):
            if f.name == field_name:
                validator = f.metadata.get('validator') if f.metadata else None
                if isinstance(validator, FieldValidator):
                    return validator.validate(getattr(self, field_name), field_name)
                return ValidationResult()

        raise AttributeError(f"Field '{field_name}' not found in {self.__class__.__name__}")

    def is_valid(self) -> bool:
        return self.validate().valid

    @classmethod
    def get_field_validators(cls) -> Dict[str, FieldValidator]:
        """Map of field name to validator, for fields that have one."""
        validators = {}
        for f in fields(cls):
            validator = f.metadata.get('validator') if f.metadata else None
            if isinstance(validator, FieldValidator):
                validators[f.name] = validator
        return validators


class BaseSettingsManager(QObject):
    """
    Base class for settings managers.

    Provides:
    - Persistence to a preferences repository under "<NAMESPACE>.settings"
    - Signal emission when settings change
    - Validation support via BaseSettings.validate()

    Subclasses must define NAMESPACE; the schema class is the one registered
    for that namespace in SettingsRegistry.

    Example:
        @register_settings("my_component")
        @dataclass
        class MySettings(BaseSettings):
            threshold: int = 10

        class MySettingsManager(BaseSettingsManager):
            NAMESPACE = "my_component"

            @property
            def threshold(self) -> int:
                return self._settings.threshold
    """

    # Signals
    settings_changed = pyqtSignal(str)  # Setting name that changed
    settings_loaded = pyqtSignal()
    validation_failed = pyqtSignal(object)  # ValidationResult
    settings_save_failed = pyqtSignal(str)  # Error message

    NAMESPACE: str = ""

    def __init__(self, preferences_repo: Optional[PreferencesStore] = None, parent=None):
        """
        Initialize the settings manager.

        Args:
            preferences_repo: Repository for persistence (None keeps settings in memory)
            parent: Parent QObject
        """
        super().__init__(parent)

        if not self.NAMESPACE:
            raise ValueError(f"{self.__class__.__name__} must define NAMESPACE")

        self._settings_class: Type[BaseSettings] = SettingsRegistry.schema_for(self.NAMESPACE)
        self._preferences_repo = preferences_repo
        self._settings: BaseSettings = self._settings_class()
        self._loaded = False

        self._load_from_storage()

    @property
    def _storage_key(self) -> str:
        return f"{self.NAMESPACE}.settings"

    # =========================================================================
    # Generic Access
    # =========================================================================

    def get(self, key: str, default: Any = None) -> Any:
        return getattr(self._settings, key, default)

    def set(self, key: str, value: Any) -> bool:
        """
        Set a setting value by key, without validation.

        Returns True if the setting was changed.
        """
        if hasattr(self._settings, key):
            if getattr(self._settings, key) != value:
                setattr(self._settings, key, value)
                self._save_setting(key)
                return True
        return False

    def get_all(self) -> Dict[str, Any]:
        return self._settings.to_dict()

    def reset_to_defaults(self):
        self._settings = self._settings_class()
        self._do_save()
        self.settings_loaded.emit()

    # =========================================================================
    # Persistence
    # =========================================================================

    def _load_from_storage(self):
        if not self._preferences_repo:
            self._loaded = True
            return

        stored_data = self._preferences_repo.get(self._storage_key, {})

        if stored_data and isinstance(stored_data, dict):
            try:
                candidate = self._settings_class.from_dict(stored_data)
            except TypeError as e:
                Log.warning(f"{self.__class__.__name__}: Ignoring malformed stored settings: {e}")
                candidate = self._settings_class()

            result = candidate.validate()
            if result.valid:
                self._settings = candidate
            else:
                Log.warning(
                    f"{self.__class__.__name__}: Stored settings invalid, using defaults: "
                    f"{'; '.join(result.errors)}"
                )
                self.validation_failed.emit(result)

        self._loaded = True
        self.settings_loaded.emit()

    def _save_setting(self, key: str):
        self._do_save()
        self.settings_changed.emit(key)

    def _do_save(self):
        if not self._preferences_repo:
            return

        try:
            self._preferences_repo.set(self._storage_key, self._settings.to_dict())
        except (OSError, TypeError, ValueError) as e:
            Log.error(f"{self.__class__.__name__}: Failed to save settings: {e}")
            self.settings_save_failed.emit(str(e))

    def is_loaded(self) -> bool:
        return self._loaded

    # =========================================================================
    # Validation
    # =========================================================================

    def validate(self) -> ValidationResult:
        return self._settings.validate()

    def validate_field(self, field_name: str) -> ValidationResult:
        return self._settings.validate_field(field_name)

    def is_valid(self) -> bool:
        return self._settings.is_valid()

    def set_validated(self, key: str, value: Any) -> ValidationResult:
        """
        Set a setting value with validation.

        If validation fails, the value is NOT saved and validation_failed is
        emitted.

        Args:
            key: Setting name
            value: New value

        Returns:
            ValidationResult - check result.valid to see if it was saved
        """
        if not hasattr(self._settings, key):
            result = ValidationResult()
            result.add_error(f"Unknown setting: {key}")
            return result

        old_value = getattr(self._settings, key)
        setattr(self._settings, key, value)

        result = self._settings.validate_field(key)

        if result.valid:
            if old_value != value:
                self._save_setting(key)
        else:
            setattr(self._settings, key, old_value)
            self.validation_failed.emit(result)

        return result

    def get_validation_errors(self) -> List[str]:
        return self.validate().errors
