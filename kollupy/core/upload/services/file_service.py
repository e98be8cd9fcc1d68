"""
File validation and reading services.

Used by callers before a transfer; the upload client itself never
opens or validates files.
"""
from pathlib import Path
from typing import Tuple, Optional, Union
import logging
import mimetypes
import aiofiles


VIDEO_MIME_TYPES = frozenset({
    'video/mp4', 'video/avi', 'video/mov', 'video/quicktime', 'video/wmv', 'video/flv',
    'video/webm', 'video/mkv', 'video/m4v', 'video/3gp', 'video/ts',
    'video/mts', 'video/m2ts', 'video/vob', 'video/ogv', 'video/asf',
    'video/rm', 'video/rmvb', 'video/dv', 'video/mxf', 'video/xvid',
    'video/x-msvideo', 'video/x-ms-wmv', 'video/x-flv', 'video/x-matroska',
})

AUDIO_MIME_TYPES = frozenset({
    'audio/mp3', 'audio/wav', 'audio/aac', 'audio/ogg', 'audio/flac',
    'audio/m4a', 'audio/wma', 'audio/ra', 'audio/amr', 'audio/ape',
    'audio/opus', 'audio/webm', 'audio/mp4', 'audio/3gpp', 'audio/3gpp2',
    'audio/x-wav', 'audio/x-aiff', 'audio/x-m4a', 'audio/x-ms-wma',
})

VALID_MIME_TYPES = VIDEO_MIME_TYPES | AUDIO_MIME_TYPES

VIDEO_EXTENSIONS = frozenset({
    '.mp4', '.avi', '.mov', '.wmv', '.flv', '.webm', '.mkv', '.m4v',
    '.3gp', '.ts', '.mts', '.m2ts', '.vob', '.ogv', '.asf', '.rm',
    '.rmvb', '.dv', '.mxf', '.xvid', '.divx', '.f4v', '.f4p', '.f4a',
    '.f4b', '.m4b', '.m4p', '.m4r', '.3g2', '.3gp2', '.3gpp',
    '.3gpp2', '.3ga', '.3ga2', '.3gpa', '.3gpp3', '.3gpp4',
})

AUDIO_EXTENSIONS = frozenset({
    '.mp3', '.wav', '.aac', '.ogg', '.flac', '.m4a', '.wma', '.ra',
    '.amr', '.ape', '.opus', '.webm', '.mp4', '.3gpp', '.3gpp2', '.3ga',
    '.3ga2', '.3gpa', '.3gpp3', '.3gpp4', '.m4b', '.m4p', '.m4r', '.f4a',
    '.f4b', '.f4p', '.f4v', '.f4r', '.f4s', '.f4t', '.f4u', '.f4w',
    '.f4x', '.f4y', '.f4z',
})

VALID_EXTENSIONS = VIDEO_EXTENSIONS | AUDIO_EXTENSIONS


class FileValidator:
    """
    Validates media files before upload.

    Responsibilities:
    - Check file existence and size
    - Check the MIME type / extension whitelist
    """

    def validate(self, file_path: Union[str, Path]) -> Tuple[Path, int]:
        """
        Validate a file for upload.

        Args:
            file_path: Path to the file

        Returns:
            Tuple of (validated Path, file size in bytes)

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If path is not a regular file
        """
        path = Path(file_path) if isinstance(file_path, str) else file_path

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        if not path.is_file():
            raise ValueError(f"Path is not a file: {path}")

        return path, path.stat().st_size

    def validate_size(self, file_size: int, max_size: Optional[int] = None) -> None:
        """
        Validate file size.

        Raises:
            ValueError: If file is empty or exceeds max size
        """
        if file_size == 0:
            raise ValueError("Cannot upload empty file")

        if max_size and file_size > max_size:
            raise ValueError(
                f"File size {file_size} exceeds maximum {max_size}"
            )

    def is_valid_file_type(
        self,
        file_path: Union[str, Path],
        mime_type: Optional[str] = None
    ) -> bool:
        """
        Check whether a file is an accepted video/audio type.

        The MIME type is checked first (guessed from the name when not
        given); the extension whitelist is the fallback.

        Args:
            file_path: File path or name
            mime_type: Optional MIME type reported by the caller

        Returns:
            True if the file type is accepted
        """
        name = Path(file_path).name.lower()

        if mime_type is None:
            mime_type, _ = mimetypes.guess_type(name)

        if mime_type and mime_type.lower() in VALID_MIME_TYPES:
            return True

        return any(name.endswith(ext) for ext in VALID_EXTENSIONS)

    def validate_media(
        self,
        file_path: Union[str, Path],
        max_size: Optional[int] = None
    ) -> Tuple[Path, int]:
        """
        Run every check needed before a file may be uploaded.

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If the file is not a non-empty accepted media file
        """
        path, size = self.validate(file_path)
        self.validate_size(size, max_size)

        if not self.is_valid_file_type(path):
            raise ValueError(f"Unsupported media type: {path.name}")

        return path, size


class AsyncFileReader:
    """
    Asynchronous file reader.

    Uses aiofiles for non-blocking I/O operations.
    """

    def __init__(self):
        """Initialize file reader."""
        self._logger = logging.getLogger('kollupy.upload.file')

    async def read_file(self, file_path: Path) -> bytes:
        """
        Read entire file.

        Args:
            file_path: Path to the file

        Returns:
            File data

        Raises:
            OSError: If the file cannot be read
        """
        async with aiofiles.open(file_path, 'rb') as f:
            data = await f.read()
        self._logger.debug(f"Read {file_path} ({len(data)} bytes)")
        return data
