"""
Protocol definitions for upload module.

The progress monitor depends only on these interfaces, not on the
HTTP client.
"""
from typing import Protocol

from .models import ProgressSnapshot


class ProgressSource(Protocol):
    """Protocol for anything that can be polled for upload progress."""
    
    async def fetch_progress(self, progress_url: str) -> ProgressSnapshot:
        """
        Fetch one progress snapshot.
        
        Args:
            progress_url: Status address to poll
            
        Returns:
            ProgressSnapshot
            
        Raises:
            TransportError: If the snapshot could not be fetched or parsed
        """
        ...


class LoggerProtocol(Protocol):
    """Protocol for logger objects."""
    
    def debug(self, msg: str) -> None: ...
    def info(self, msg: str) -> None: ...
    def warning(self, msg: str) -> None: ...
    def error(self, msg: str) -> None: ...
    def exception(self, msg: str) -> None: ...
