"""Upload models."""
from .upload_models import (
    UploadVariant,
    DestinationRequest,
    DestinationDescriptor,
    ProgressSnapshot,
    UploadOutcome,
    MonitorOptions,
    MonitorState,
    UploadSession
)

__all__ = [
    'UploadVariant',
    'DestinationRequest',
    'DestinationDescriptor',
    'ProgressSnapshot',
    'UploadOutcome',
    'MonitorOptions',
    'MonitorState',
    'UploadSession'
]
