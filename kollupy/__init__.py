"""
kollupy - Async Python client for Kollus media uploads.

Usage:
    >>> from kollupy import KollusClient
    >>> 
    >>> async with KollusClient("access-token") as kollus:
    ...     session = await kollus.upload("video.mp4", category_key="cat123")
    ...     print(session.destination.upload_file_key)
"""
import logging
from .client import KollusClient

# Configuration
from .core.api import (
    APIConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    AsyncUploadClient,
    UploadClient
)

# Upload protocol
from .core.upload import (
    ProgressMonitor,
    UploadVariant,
    DestinationRequest,
    DestinationDescriptor,
    ProgressSnapshot,
    UploadOutcome,
    MonitorOptions,
    MonitorState,
    UploadSession,
    FileValidator
)

# Errors
from .core.exceptions import (
    KollusException,
    ConfigurationError,
    TransportError,
    RemoteRejection
)

from .core.utils import format_expire_time, format_file_size

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for kollupy modules.
    
    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'kollupy',
        'kollupy.api',
        'kollupy.client',
        'kollupy.monitor',
        'kollupy.upload.file',
    ]
    
    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'KollusClient',
    'AsyncUploadClient',
    'UploadClient',
    'ProgressMonitor',
    'UploadVariant',
    'DestinationRequest',
    'DestinationDescriptor',
    'ProgressSnapshot',
    'UploadOutcome',
    'MonitorOptions',
    'MonitorState',
    'UploadSession',
    'FileValidator',
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'KollusException',
    'ConfigurationError',
    'TransportError',
    'RemoteRejection',
    'format_expire_time',
    'format_file_size',
    'setup_logging',
]
