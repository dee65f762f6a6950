"""
Path management for snapline

Handles platform-specific user data directories following standard conventions:
- macOS: ~/Library/Application Support/snapline/
- Linux: ~/.local/share/snapline/
- Windows: %APPDATA%/snapline/
"""
import os
import sys
from pathlib import Path


# Application name
APP_NAME = "snapline"


def get_user_data_dir() -> Path:
    """
    Get platform-specific user data directory.

    Returns:
        Path to user data directory where preferences and logs are stored.
    """
    override = os.getenv("SNAPLINE_DATA_DIR")
    if override:
        user_data_dir = Path(override)
    else:
        system = sys.platform

        if system == "darwin":  # macOS
            base = Path.home() / "Library" / "Application Support"
        elif system == "win32":  # Windows
            base = Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming"))
        else:  # Linux and other Unix-like
            base = Path.home() / ".local" / "share"

        user_data_dir = base / APP_NAME

    user_data_dir.mkdir(parents=True, exist_ok=True)
    return user_data_dir


def get_logs_dir() -> Path:
    """
    Get directory for application logs.

    Returns:
        Path to logs directory (stored in user data directory).
    """
    logs_dir = get_user_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    return logs_dir


def get_preferences_path() -> Path:
    """
    Get path to the preferences file.

    Returns:
        Path to preferences.json in the user data directory.
    """
    return get_user_data_dir() / "preferences.json"
