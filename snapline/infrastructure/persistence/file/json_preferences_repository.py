"""
JSON file implementation of PreferencesRepository

Handles persistence of user preferences that apply across sessions.
All keys live in one JSON object in the user data directory.
"""
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from snapline.utils.message import Log
from snapline.utils.paths import get_preferences_path


class JsonPreferencesRepository:
    """
    Repository for user preferences persistence.

    The file is read once on first access and rewritten on every set/remove.
    A missing or unreadable file behaves as an empty store.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        """
        Initialize repository.

        Args:
            path: Preferences file (default: preferences.json in the user data dir)
        """
        self._path = Path(path) if path is not None else get_preferences_path()
        self._data: Optional[Dict[str, Any]] = None

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a preference value.

        Args:
            key: Preference key
            default: Default value if preference not found

        Returns:
            Preference value or default
        """
        return self._load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        """
        Set a preference value.

        Args:
            key: Preference key
            value: JSON-serializable value

        Raises:
            OSError: If the file cannot be written
            TypeError: If the value is not JSON-serializable
        """
        data = self._load()
        data[key] = value
        self._write(data)
        Log.debug(f"Updated preference: {key}")

    def remove(self, key: str) -> bool:
        data = self._load()
        if key not in data:
            return False
        del data[key]
        self._write(data)
        return True

    def get_all(self) -> Dict[str, Any]:
        return dict(self._load())

    def keys(self) -> List[str]:
        return list(self._load().keys())

    # =========================================================================
    # File access
    # =========================================================================

    def _load(self) -> Dict[str, Any]:
        if self._data is None:
            self._data = self._read()
        return self._data

    def _read(self) -> Dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            Log.warning(f"JsonPreferencesRepository: Could not read {self._path}: {e}")
            return {}
        if not isinstance(data, dict):
            Log.warning(f"JsonPreferencesRepository: Ignoring non-object preferences file {self._path}")
            return {}
        return data

    def _write(self, data: Dict[str, Any]) -> None:
        payload = json.dumps(data, indent=2, sort_keys=True)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(payload, encoding="utf-8")
