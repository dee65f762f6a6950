"""
Utils module - Logging and paths.

Contents:
- message.py: Log class for application logging
- paths.py: Platform-specific path utilities
"""
