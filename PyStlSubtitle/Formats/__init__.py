"""
PyStlSubtitle.Formats - Format-specific file handlers

This module contains all file format handling logic, isolating format-specific
dependencies from the format-agnostic subtitle model.
"""

# Explicitly import all format handler modules to ensure they're registered
# This is required for pip-installed packages where dynamic discovery may fail
from . import DvdStudioProFileHandler
from . import SrtFileHandler
