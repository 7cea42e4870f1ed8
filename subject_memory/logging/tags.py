# subject_memory/logging/tags.py
"""
Logging subsystem tags.

Prefixed to log messages so output stays searchable per subsystem.
Changing a tag here updates it project-wide.
"""

INDEX = "[INDEX]"
EXTRACTION = "[EXTRACTION]"
STORAGE = "[STORAGE]"
MEMORY = "[MEMORY]"
CONFIG = "[CONFIG]"
