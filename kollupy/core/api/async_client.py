"""
Async Kollus upload client.

Issues the three requests of the upload protocol: destination creation,
file transfer and progress fetch. Each call is a single attempt.
"""
import asyncio
import logging
from typing import Optional, Any, Union, BinaryIO
import aiohttp

from .config import APIConfig
from .request import RequestBuilder, ResponseHandler
from ..exceptions import TransportError, RemoteRejection
from ..logging import get_logger
from ..upload.models import (
    DestinationRequest,
    DestinationDescriptor,
    ProgressSnapshot,
    UploadOutcome
)


FileInput = Union[bytes, bytearray, BinaryIO]


class AsyncUploadClient:
    """
    Asynchronous Kollus upload API client.

    Holds only connection configuration (credential and hosts) and a
    lazily created HTTP session. No polling, no retries, no file
    validation.

    Example:
        >>> async with AsyncUploadClient("token") as client:
        ...     dest = await client.create_destination(
        ...         DestinationRequest(expire_time=600, category_key="cat")
        ...     )
        ...     await client.transfer_file(dest.upload_url, open("a.mp4", "rb"))
    """

    def __init__(
        self,
        access_token: str,
        config: Optional[APIConfig] = None,
        *,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize async upload client.

        Args:
            access_token: Kollus API access token
            config: API configuration (uses defaults if not provided)
            session: Optional shared session (not closed by this client)
        """
        self._access_token = access_token
        self._config = config or APIConfig.default()
        self._builder = RequestBuilder(self._config, access_token)
        self._session = session
        self._owns_session = session is None
        self._connector: Optional[aiohttp.TCPConnector] = None

        self._logger = get_logger('kollupy.api')
        if not logging.getLogger().handlers:
            self._logger.setLevel(self._config.log_level)

    @property
    def config(self) -> APIConfig:
        """Get current configuration."""
        return self._config

    @property
    def builder(self) -> RequestBuilder:
        """Get the request builder bound to this client."""
        return self._builder

    async def __aenter__(self) -> 'AsyncUploadClient':
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure session is created and open."""
        if self._session is None or (self._owns_session and self._session.closed):
            self._connector = aiohttp.TCPConnector(
                **self._config.get_connector_kwargs()
            )
            self._session = aiohttp.ClientSession(
                connector=self._connector,
                **self._config.get_session_kwargs()
            )
            self._owns_session = True
        return self._session

    async def close(self):
        """Close client and release resources it owns."""
        if not self._owns_session:
            return

        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

        if self._connector and not self._connector.closed:
            await self._connector.close()
        self._connector = None

    def _proxy(self) -> Optional[str]:
        return self._config.proxy.to_aiohttp_proxy() if self._config.proxy else None

    @staticmethod
    def _to_form(fields) -> aiohttp.FormData:
        # Kollus expects multipart/form-data even without a file part
        form = aiohttp.FormData(default_to_multipart=True)
        for key, value in fields.items():
            form.add_field(key, value)
        return form

    async def _send(self, method: str, url: str, **kwargs) -> Any:
        """
        Sends one request and decodes its JSON body.

        Raises:
            TransportError: On connection, timeout or decoding failure
        """
        session = await self._ensure_session()

        try:
            async with session.request(method, url, proxy=self._proxy(), **kwargs) as response:
                response_text = await response.text()
        except asyncio.TimeoutError as e:
            self._logger.error(f"Timeout on {method} {url}")
            raise TransportError(f"Request timed out: {method} {url}") from e
        except aiohttp.ClientError as e:
            self._logger.error(f"Network error on {method} {url}: {e}")
            raise TransportError(f"Network error: {e}") from e
        except UnicodeDecodeError as e:
            self._logger.error(f"Undecodable response from {method} {url}: {e}")
            raise TransportError(f"Invalid response encoding: {e}") from e

        self._logger.debug(
            f"Response data: {response_text[:1000] if len(response_text) > 1000 else response_text}"
        )
        return ResponseHandler.parse_json(response_text)

    async def create_destination(self, request: DestinationRequest) -> DestinationDescriptor:
        """
        Request a signed upload destination.

        Args:
            request: Destination parameters

        Returns:
            DestinationDescriptor with upload and progress URLs

        Raises:
            ConfigurationError: If the variant's required keys are missing
                (raised before any network call)
            TransportError: On network or parse failure
            RemoteRejection: If the server signals failure
        """
        fields = self._builder.build_destination_fields(request)
        endpoint = self._builder.destination_endpoint(request.variant)

        self._logger.debug(f"Creating {request.variant.value} upload URL at {endpoint}")
        self._logger.debug(f"Request data: {fields}")

        body = await self._send(
            'POST',
            self._builder.destination_url(request.variant),
            data=self._to_form(fields)
        )

        try:
            destination = ResponseHandler.parse_destination(body)
        except RemoteRejection as e:
            self._logger.warning(f"Upload URL creation rejected: {e}")
            raise

        self._logger.info(f"Upload URL created (file key {destination.upload_file_key})")
        return destination

    async def transfer_file(
        self,
        upload_url: str,
        file: FileInput,
        *,
        filename: Optional[str] = None,
        content_type: Optional[str] = None,
        return_url: Optional[str] = None
    ) -> UploadOutcome:
        """
        Transfer file bytes to an upload URL.

        Args:
            upload_url: Transfer address from the destination
            file: File contents or an open binary file object
            filename: File name reported to the server
            content_type: Optional MIME type of the file part
            return_url: Optional callback URL; the server redirects there
                after processing

        Returns:
            UploadOutcome with the server's raw response

        Raises:
            TransportError: On network or parse failure
        """
        if filename is None:
            filename = getattr(file, 'name', None) or 'upload'
            filename = str(filename).replace('\\', '/').rsplit('/', 1)[-1]

        form = aiohttp.FormData(default_to_multipart=True)
        form.add_field('upload-file', file, filename=filename, content_type=content_type)
        for key, value in self._builder.build_transfer_fields(return_url).items():
            form.add_field(key, value)

        self._logger.debug(f"Transferring {filename} to {upload_url}")

        body = await self._send('POST', upload_url, data=form)
        outcome = ResponseHandler.parse_outcome(body)

        self._logger.info(f"Transfer of {filename} finished: {outcome.message or outcome.status or 'ok'}")
        return outcome

    async def fetch_progress(self, progress_url: str) -> ProgressSnapshot:
        """
        Fetch one progress snapshot (unauthenticated GET).

        Args:
            progress_url: Status address from the destination

        Returns:
            ProgressSnapshot

        Raises:
            TransportError: On network or parse failure
        """
        body = await self._send('GET', progress_url)
        return ResponseHandler.parse_progress(body)


UploadClient = AsyncUploadClient
