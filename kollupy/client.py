"""
KollusClient - High-level async client for Kollus uploads.

Example:
    >>> async with KollusClient("access-token") as kollus:
    ...     session = await kollus.upload("video.mp4", category_key="cat123")
    ...     print(session.destination.upload_file_key)
"""
import mimetypes
from pathlib import Path
from typing import Optional, Union, Callable

from .core.api import (
    AsyncUploadClient,
    APIConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig
)
from .core.logging import get_logger
from .core.upload import (
    ProgressMonitor,
    FileValidator,
    AsyncFileReader,
    DestinationRequest,
    DestinationDescriptor,
    UploadOutcome,
    UploadSession,
    UploadVariant
)
from .core.upload.models.upload_models import Number


class KollusClient:
    """
    High-level async client composing the upload protocol.

    Wraps one AsyncUploadClient and hands out ProgressMonitors bound to
    it. The three steps stay individually callable:

        >>> async with KollusClient("token") as kollus:
        ...     dest = await kollus.create_destination(category_key="cat")
        ...     await kollus.transfer(dest.upload_url, "clip.mp4")
        ...     monitor = kollus.monitor(dest.progress_url)
        ...     monitor.start(on_progress=print)
        ...     await monitor.wait()
    """

    def __init__(
        self,
        access_token: str,
        *,
        config: Optional[APIConfig] = None,
        validator: Optional[FileValidator] = None,
        session=None
    ):
        """
        Initialize Kollus client.

        Args:
            access_token: Kollus API access token
            config: Optional API configuration
            validator: Optional file validator (type whitelist)
            session: Optional shared aiohttp session
        """
        self._config = config or APIConfig.default()
        self._api = AsyncUploadClient(access_token, self._config, session=session)
        self._validator = validator or FileValidator()
        self._reader = AsyncFileReader()
        self._logger = get_logger('kollupy.client')

    @staticmethod
    def create_config(
        proxy: Optional[str] = None,
        proxy_user: Optional[str] = None,
        proxy_pass: Optional[str] = None,
        timeout: float = 300,
        verify_ssl: bool = True,
        user_agent: Optional[str] = None,
        api_base_url: Optional[str] = None,
        upload_base_url: Optional[str] = None
    ) -> APIConfig:
        """
        Create API configuration with common options.

        Args:
            proxy: Proxy URL (e.g., "http://proxy:8080")
            proxy_user: Proxy username
            proxy_pass: Proxy password
            timeout: Total request timeout in seconds
            verify_ssl: Whether to verify SSL certificates
            user_agent: Custom user agent string
            api_base_url: Host for normal uploads
            upload_base_url: Host for passthrough and filelive uploads

        Returns:
            APIConfig instance
        """
        proxy_config = None
        if proxy:
            proxy_config = ProxyConfig(url=proxy, username=proxy_user, password=proxy_pass)

        config = APIConfig(
            proxy=proxy_config,
            timeout=TimeoutConfig(total=timeout),
            ssl=SSLConfig(verify=verify_ssl),
            user_agent=user_agent or 'kollupy/1.0.0'
        )
        if api_base_url:
            config.api_base_url = api_base_url.rstrip('/')
        if upload_base_url:
            config.upload_base_url = upload_base_url.rstrip('/')
        return config

    @property
    def api(self) -> AsyncUploadClient:
        """Returns the underlying upload client."""
        return self._api

    async def __aenter__(self) -> 'KollusClient':
        await self._api.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the client and release resources."""
        await self._api.close()

    async def create_destination(
        self,
        expire_time: int = 600,
        category_key: Optional[str] = None,
        title: Optional[str] = None,
        variant: Union[str, UploadVariant] = UploadVariant.NORMAL,
        profile_key: Optional[str] = None
    ) -> DestinationDescriptor:
        """
        Request an upload destination.

        Raises:
            ConfigurationError: If the variant's required keys are missing
            TransportError: On network or parse failure
            RemoteRejection: If the server signals failure
        """
        request = DestinationRequest(
            expire_time=expire_time,
            category_key=category_key,
            title=title,
            variant=variant,
            profile_key=profile_key
        )
        return await self._api.create_destination(request)

    async def transfer(
        self,
        upload_url: str,
        file_path: Union[str, Path],
        return_url: Optional[str] = None
    ) -> UploadOutcome:
        """
        Validate a local media file and transfer it.

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If the file is empty or not an accepted media type
            TransportError: On network or parse failure
        """
        path, _ = self._validator.validate_media(file_path)
        content_type, _ = mimetypes.guess_type(path.name)

        data = await self._reader.read_file(path)
        return await self._api.transfer_file(
            upload_url,
            data,
            filename=path.name,
            content_type=content_type,
            return_url=return_url
        )

    def monitor(self, progress_url: str) -> ProgressMonitor:
        """Create a ProgressMonitor polling through this client."""
        return ProgressMonitor(progress_url, self._api)

    async def upload(
        self,
        file_path: Union[str, Path],
        expire_time: int = 600,
        category_key: Optional[str] = None,
        title: Optional[str] = None,
        variant: Union[str, UploadVariant] = UploadVariant.NORMAL,
        profile_key: Optional[str] = None,
        return_url: Optional[str] = None,
        wait: bool = True,
        on_progress: Optional[Callable[[Number], None]] = None,
        interval: float = 1.0
    ) -> UploadSession:
        """
        Run the full upload flow for one file.

        Creates a destination, transfers the file and, when ``wait`` is
        true, polls progress until processing completes.

        Args:
            file_path: Local media file
            expire_time: Upload URL lifetime in seconds
            category_key: Optional category
            title: Optional title (defaults to the file stem)
            variant: Upload variant
            profile_key: Encoding profile (passthrough only)
            return_url: Optional redirect target after processing
            wait: Whether to wait for processing to complete
            on_progress: Optional progress callback
            interval: Seconds between progress polls

        Returns:
            UploadSession

        Raises:
            ConfigurationError, TransportError, RemoteRejection,
            FileNotFoundError, ValueError
        """
        # Validate before spending a destination on an unusable file
        path, _ = self._validator.validate_media(file_path)

        destination = await self.create_destination(
            expire_time=expire_time,
            category_key=category_key,
            title=title or path.stem,
            variant=variant,
            profile_key=profile_key
        )
        outcome = await self.transfer(destination.upload_url, path, return_url=return_url)

        if not wait:
            return UploadSession(destination=destination, outcome=outcome)

        failures = []
        completed = []
        monitor = self.monitor(destination.progress_url)
        monitor.start(
            on_progress=on_progress,
            on_complete=lambda: completed.append(True),
            on_error=failures.append,
            interval=interval
        )
        try:
            await monitor.wait()
        finally:
            monitor.stop()

        if failures:
            raise failures[0]

        self._logger.info(f"Upload of {path.name} processed (file key {destination.upload_file_key})")
        return UploadSession(destination=destination, outcome=outcome, completed=bool(completed))
