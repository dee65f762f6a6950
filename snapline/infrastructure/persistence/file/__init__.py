"""File-backed persistence."""
from snapline.infrastructure.persistence.file.json_preferences_repository import JsonPreferencesRepository

__all__ = ['JsonPreferencesRepository']
