"""Response handler for upload API responses."""
import json
from typing import Dict, Any, Optional, Tuple

from ...exceptions import TransportError, RemoteRejection
from ...upload.models import DestinationDescriptor, ProgressSnapshot, UploadOutcome


# Shape A nests under 'data' and reports a string status;
# shape B nests under 'result' and reports a numeric error.
_DESTINATION_SHAPES: Tuple[Tuple[str, str], ...] = (
    ('data', 'expired_at'),
    ('result', 'will_be_expired_at'),
)

_SUCCESS_STATUSES = ('success', 'ok')


class ResponseHandler:
    """Parses and normalizes upload API responses."""

    @staticmethod
    def parse_json(response_text: str) -> Any:
        """
        Parses a JSON response body.

        Raises:
            TransportError: If the body is not valid JSON
        """
        try:
            return json.loads(response_text)
        except (TypeError, ValueError) as e:
            preview = (response_text or '')[:200]
            raise TransportError(f"Invalid JSON response: {e}: {preview!r}")

    @staticmethod
    def _shape_a_ok(body: Dict[str, Any]) -> bool:
        status = body.get('status')
        if status is None:
            return body.get('error') in (None, 0)
        return str(status).lower() in _SUCCESS_STATUSES

    @staticmethod
    def _shape_b_ok(body: Dict[str, Any]) -> bool:
        return body.get('error') in (None, 0)

    @classmethod
    def _try_shape(
        cls,
        body: Dict[str, Any],
        container: str,
        expiry_key: str
    ) -> Optional[DestinationDescriptor]:
        payload = body.get(container)
        if not isinstance(payload, dict):
            return None

        ok = cls._shape_a_ok(body) if container == 'data' else cls._shape_b_ok(body)
        if not ok:
            return None

        try:
            return DestinationDescriptor(
                upload_url=payload['upload_url'],
                progress_url=payload['progress_url'],
                upload_file_key=payload['upload_file_key'],
                expired_at=int(payload[expiry_key]),
                response=body
            )
        except (KeyError, TypeError, ValueError):
            return None

    @classmethod
    def parse_destination(cls, body: Any) -> DestinationDescriptor:
        """
        Normalizes a create-url response into a DestinationDescriptor.

        Tries each known response shape in turn and fails closed when
        none matches.

        Raises:
            RemoteRejection: If the server signaled failure or the shape is unknown
        """
        if not isinstance(body, dict):
            raise RemoteRejection(f"Unexpected create-url response: {body!r}")

        for container, expiry_key in _DESTINATION_SHAPES:
            descriptor = cls._try_shape(body, container, expiry_key)
            if descriptor is not None:
                return descriptor

        message = body.get('message') or "Upload URL creation failed"
        raise RemoteRejection(
            message,
            error_code=body.get('error'),
            status=body.get('status'),
            response=body
        )

    @staticmethod
    def parse_progress(body: Any) -> ProgressSnapshot:
        """
        Parses a progress response into a ProgressSnapshot.

        Raises:
            TransportError: If the body is not a progress object
        """
        if not isinstance(body, dict):
            raise TransportError(f"Unexpected progress response: {body!r}")

        error = body.get('error')
        result = body.get('result')
        progress = None
        status = None

        if isinstance(result, dict):
            status = result.get('status')
            raw = result.get('progress')
            if raw is not None:
                try:
                    value = float(raw)
                except (TypeError, ValueError):
                    raise TransportError(f"Invalid progress value: {raw!r}")
                progress = int(value) if value.is_integer() else value

        return ProgressSnapshot(
            error=error,
            progress=progress,
            status=status,
            response=body
        )

    @staticmethod
    def parse_outcome(body: Any) -> UploadOutcome:
        """
        Parses a transfer response into an UploadOutcome.

        Raises:
            TransportError: If the body is not an object
        """
        if not isinstance(body, dict):
            raise TransportError(f"Unexpected upload response: {body!r}")
        return UploadOutcome.from_dict(body)
