"""
Shared test fixtures.

Log files and preferences are redirected into a temporary directory before
anything from snapline is imported.
"""
import os
import tempfile

os.environ.setdefault("SNAPLINE_FILE_LOGGING", "0")
os.environ.setdefault("SNAPLINE_DATA_DIR", tempfile.mkdtemp(prefix="snapline-tests-"))

import pytest
from PyQt6.QtCore import QCoreApplication


@pytest.fixture(scope="session", autouse=True)
def qt_app():
    """QObject signals need a QCoreApplication instance."""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app
