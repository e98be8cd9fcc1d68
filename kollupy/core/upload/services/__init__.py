"""Upload services module."""
from .file_service import (
    FileValidator,
    AsyncFileReader,
    VALID_MIME_TYPES,
    VALID_EXTENSIONS
)

__all__ = [
    'FileValidator',
    'AsyncFileReader',
    'VALID_MIME_TYPES',
    'VALID_EXTENSIONS',
]
