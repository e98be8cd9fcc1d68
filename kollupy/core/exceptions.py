"""
Custom exceptions for Kollus upload operations.

Three failure kinds exist: a bad request combination caught before any
network I/O, a transport failure, and a server-side rejection.
"""
from typing import Optional, Any, Dict


class KollusException(Exception):
    """Base exception for all Kollus-related errors."""
    
    def __init__(self, message: str, error_code: Optional[Any] = None) -> None:
        """
        Initialize the exception.
        
        Args:
            message: Error message
            error_code: Error code reported by the server (if available)
        """
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class ConfigurationError(KollusException):
    """Raised when the caller supplies an invalid combination of request fields."""
    pass


class TransportError(KollusException):
    """Raised on network, timeout or response parsing failures."""
    pass


class RemoteRejection(KollusException):
    """Exception raised when the server responds but signals failure."""
    
    def __init__(
        self,
        message: str,
        error_code: Optional[Any] = None,
        status: Optional[str] = None,
        response: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Initialize the exception.
        
        Args:
            message: Server-supplied message, verbatim
            error_code: Server-supplied error code, verbatim
            status: Server-supplied status label (if any)
            response: Raw response body
        """
        self.status = status
        self.response = response or {}
        super().__init__(message, error_code)
