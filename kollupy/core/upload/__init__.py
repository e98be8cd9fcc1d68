"""
Upload module for Kollus media uploads.

Models, the progress monitor and the file helpers used around the
three-phase upload protocol.
"""
from .monitor import ProgressMonitor
from .models import (
    UploadVariant,
    DestinationRequest,
    DestinationDescriptor,
    ProgressSnapshot,
    UploadOutcome,
    MonitorOptions,
    MonitorState,
    UploadSession
)
from .protocols import ProgressSource, LoggerProtocol
from .services import FileValidator, AsyncFileReader

__all__ = [
    # Main classes
    'ProgressMonitor',
    
    # Models
    'UploadVariant',
    'DestinationRequest',
    'DestinationDescriptor',
    'ProgressSnapshot',
    'UploadOutcome',
    'MonitorOptions',
    'MonitorState',
    'UploadSession',
    
    # Protocols
    'ProgressSource',
    'LoggerProtocol',
    
    # Services
    'FileValidator',
    'AsyncFileReader',
]
