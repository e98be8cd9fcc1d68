"""Pytest fixtures for kollupy tests."""
import asyncio
import json
import pytest
import aiohttp

from kollupy.core.api import AsyncUploadClient, APIConfig
from kollupy.core.exceptions import TransportError
from kollupy.core.upload.models import ProgressSnapshot


class FakeResponse:
    """Minimal stand-in for aiohttp.ClientResponse."""

    def __init__(self, body, status: int = 200):
        self.status = status
        self._body = body if isinstance(body, (str, bytes)) else json.dumps(body)

    async def text(self) -> str:
        if isinstance(self._body, bytes):
            return self._body.decode('utf-8')
        return self._body

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return False


class FakeSession:
    """
    Records requests and replays queued responses.

    Queue entries are response bodies (dict/str/bytes) or exceptions to raise.
    """

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []
        self.closed = False

    def queue(self, *responses):
        self.responses.extend(responses)

    def request(self, method, url, **kwargs):
        self.calls.append({'method': method, 'url': url, **kwargs})
        item = self.responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        return FakeResponse(item)

    async def close(self):
        self.closed = True


class ScriptedSource:
    """
    ProgressSource replaying a script of snapshots.

    Entries are ProgressSnapshot, plain progress numbers, or exceptions.
    Once exhausted it keeps answering with a server-error snapshot.
    """

    def __init__(self, *script):
        self.script = list(script)
        self.calls = 0
        self.urls = []

    async def fetch_progress(self, progress_url):
        self.calls += 1
        self.urls.append(progress_url)
        if not self.script:
            return ProgressSnapshot(error=1)
        item = self.script.pop(0)
        if isinstance(item, BaseException):
            raise item
        if isinstance(item, ProgressSnapshot):
            return item
        return ProgressSnapshot(error=0, progress=item, status='processing')


class BlockingSource:
    """ProgressSource whose fetch waits until released."""

    def __init__(self, progress=50):
        self.progress = progress
        self.started = asyncio.Event()
        self.release = asyncio.Event()
        self.calls = 0

    async def fetch_progress(self, progress_url):
        self.calls += 1
        self.started.set()
        await self.release.wait()
        return ProgressSnapshot(error=0, progress=self.progress)


@pytest.fixture
def fake_session():
    """Returns an empty FakeSession."""
    return FakeSession()


@pytest.fixture
def api_config():
    """Returns a config pointing at test hosts."""
    return APIConfig(
        api_base_url='https://api.test',
        upload_base_url='https://upload.test'
    )


@pytest.fixture
def upload_client(fake_session, api_config):
    """Returns an AsyncUploadClient backed by the fake session."""
    return AsyncUploadClient('test-token', api_config, session=fake_session)


@pytest.fixture
def destination_body_data():
    """Create-url response nested under 'data'."""
    return {
        'status': 'success',
        'data': {
            'upload_url': 'https://upload.test/upload/abc',
            'progress_url': 'https://upload.test/progress/abc',
            'upload_file_key': 'abc',
            'expired_at': 1700000600,
        }
    }


@pytest.fixture
def destination_body_result():
    """Create-url response nested under 'result'."""
    return {
        'error': 0,
        'message': 'ok',
        'result': {
            'upload_url': 'https://upload.test/upload/xyz',
            'progress_url': 'https://upload.test/progress/xyz',
            'upload_file_key': 'xyz',
            'will_be_expired_at': 1700000900,
        }
    }


@pytest.fixture
def network_error():
    """Returns an aiohttp connection error."""
    return aiohttp.ClientConnectionError("connection refused")


@pytest.fixture
def transport_error():
    """Returns a TransportError as raised by a failed fetch."""
    return TransportError("Network error: connection reset")


@pytest.fixture
def scripted_source():
    """Factory for ScriptedSource instances."""
    return ScriptedSource


@pytest.fixture
def blocking_source():
    """Returns a BlockingSource."""
    return BlockingSource()
