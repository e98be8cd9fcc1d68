"""
Data models for upload module.

Uses dataclasses for immutable, type-safe data structures.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, Optional, Union, Callable

from ...exceptions import ConfigurationError


Number = Union[int, float]


class UploadVariant(str, Enum):
    """
    Upload mode.

    Decides which host receives the destination request and which
    payload fields are required.
    """
    NORMAL = 'normal'
    PASSTHROUGH = 'passthrough'
    FILELIVE = 'filelive'

    @classmethod
    def parse(cls, value: Union[str, 'UploadVariant']) -> 'UploadVariant':
        """Normalize a string or enum member into an UploadVariant."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            choices = ', '.join(v.value for v in cls)
            raise ConfigurationError(
                f"Unknown upload variant: {value!r} (expected one of: {choices})"
            )

    @property
    def uses_upload_host(self) -> bool:
        """True when the destination is requested from the upload subdomain."""
        return self is not UploadVariant.NORMAL


@dataclass(frozen=True)
class DestinationRequest:
    """
    Parameters for one destination request.

    Attributes:
        expire_time: Seconds until the upload URL expires
        category_key: Optional category identifier
        title: Optional human-readable title
        variant: Upload variant (normal, passthrough, filelive)
        profile_key: Encoding profile, required for passthrough uploads
    """
    expire_time: int
    category_key: Optional[str] = None
    title: Optional[str] = None
    variant: UploadVariant = UploadVariant.NORMAL
    profile_key: Optional[str] = None

    def __post_init__(self):
        # frozen: bypass __setattr__ to normalize plain strings
        object.__setattr__(self, 'variant', UploadVariant.parse(self.variant))


@dataclass(frozen=True)
class DestinationDescriptor:
    """
    Upload destination issued by the server.

    Attributes:
        upload_url: Where the file bytes are posted
        progress_url: Where processing progress is polled
        upload_file_key: Opaque file key
        expired_at: Expiry instant as Unix timestamp
        response: Raw API response
    """
    upload_url: str
    progress_url: str
    upload_file_key: str
    expired_at: int
    response: Dict[str, Any] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class ProgressSnapshot:
    """
    One polled read of upload processing progress.

    Attributes:
        error: Server error indicator (0 means no error)
        progress: Progress value 0-100, present only with a result
        status: Server status label
        response: Raw API response
    """
    error: Optional[int] = None
    progress: Optional[Number] = None
    status: Optional[str] = None
    response: Dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def has_result(self) -> bool:
        """True when the server reported no error and carried a progress value."""
        return self.error == 0 and self.progress is not None

    @property
    def is_complete(self) -> bool:
        """True when progress reached 100."""
        return self.has_result and self.progress >= 100


@dataclass(frozen=True)
class UploadOutcome:
    """
    Result of a byte transfer, as returned by the upload server.

    Only byte transfer is covered here; processing completion is
    observed through the progress URL.
    """
    success: Optional[bool] = None
    message: Optional[str] = None
    error: Optional[Any] = None
    result: Optional[str] = None
    status: Optional[str] = None
    response: Dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'UploadOutcome':
        """Create from the raw JSON body."""
        return cls(
            success=data.get('success'),
            message=data.get('message'),
            error=data.get('error'),
            result=data.get('result'),
            status=data.get('status'),
            response=dict(data)
        )


def _noop(*args, **kwargs) -> None:
    return None


@dataclass
class MonitorOptions:
    """
    Observer callbacks and timing for a progress monitor.

    Missing callbacks default to no-ops.

    Attributes:
        on_progress: Called with each progress value
        on_complete: Called once when progress reaches 100
        on_error: Called once with the fetch failure
        interval: Seconds between polls
    """
    on_progress: Optional[Callable[[Number], None]] = None
    on_complete: Optional[Callable[[], None]] = None
    on_error: Optional[Callable[[Exception], None]] = None
    interval: float = 1.0

    def __post_init__(self):
        if self.on_progress is None:
            self.on_progress = _noop
        if self.on_complete is None:
            self.on_complete = _noop
        if self.on_error is None:
            self.on_error = _noop
        if self.interval is None or self.interval <= 0:
            raise ConfigurationError(f"Poll interval must be positive, got {self.interval!r}")


class MonitorState(str, Enum):
    """Progress monitor lifecycle state."""
    IDLE = 'idle'
    ACTIVE = 'active'


@dataclass(frozen=True)
class UploadSession:
    """
    Outcome of a full create-transfer-monitor flow.

    Attributes:
        destination: Destination issued by the server
        outcome: Byte transfer result
        completed: True when processing was observed to reach 100
    """
    destination: DestinationDescriptor
    outcome: UploadOutcome
    completed: bool = False
