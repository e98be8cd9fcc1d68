"""Tests for the command line interface."""
from unittest.mock import patch, AsyncMock, MagicMock
import pytest
from typer.testing import CliRunner

from kollupy.cli.main import app
from kollupy.core.exceptions import RemoteRejection
from kollupy.core.upload.models import DestinationDescriptor, UploadVariant


runner = CliRunner()


@pytest.fixture
def destination():
    """Sample destination."""
    return DestinationDescriptor(
        upload_url='https://upload.test/upload/abc',
        progress_url='https://upload.test/progress/abc',
        upload_file_key='abc',
        expired_at=1700000600
    )


@pytest.fixture
def mock_client(destination):
    """Patch KollusClient with an async mock."""
    client = MagicMock()
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    client.create_destination = AsyncMock(return_value=destination)
    with patch('kollupy.cli.main.make_client', return_value=client):
        yield client


def test_create_url(mock_client):
    """Test create-url prints the destination."""
    result = runner.invoke(app, ['create-url', '--token', 'tok', '--category', 'cat123'])

    assert result.exit_code == 0
    assert 'https://upload.test/upload/abc' in result.output
    kwargs = mock_client.create_destination.call_args.kwargs
    assert kwargs['category_key'] == 'cat123'
    assert kwargs['variant'] == UploadVariant.NORMAL


def test_create_url_variant(mock_client):
    """Test variant option is parsed."""
    result = runner.invoke(
        app, ['create-url', '-t', 'tok', '--variant', 'passthrough', '--profile', 'hd']
    )

    assert result.exit_code == 0
    kwargs = mock_client.create_destination.call_args.kwargs
    assert kwargs['variant'] == UploadVariant.PASSTHROUGH
    assert kwargs['profile_key'] == 'hd'


def test_create_url_rejected(mock_client):
    """Test server rejections exit with status 1."""
    mock_client.create_destination.side_effect = RemoteRejection('Invalid access token', 1)

    result = runner.invoke(app, ['create-url', '--token', 'tok'])

    assert result.exit_code == 1
    assert 'Invalid access token' in result.output


def test_token_from_environment(mock_client):
    """Test token is read from KOLLUS_ACCESS_TOKEN."""
    result = runner.invoke(app, ['create-url'], env={'KOLLUS_ACCESS_TOKEN': 'env-token'})

    assert result.exit_code == 0


def test_upload_missing_file(mock_client):
    """Test uploading a missing file exits with status 1."""
    result = runner.invoke(app, ['upload', '/nonexistent/video.mp4', '--token', 'tok'])

    assert result.exit_code == 1
    assert 'File not found' in result.output
    mock_client.create_destination.assert_not_called()


def test_upload_rejects_non_media_before_create(mock_client, tmp_path):
    """Test unsupported files fail before an upload URL is requested."""
    notes = tmp_path / "notes.txt"
    notes.write_text("hello")

    result = runner.invoke(app, ['upload', str(notes), '--token', 'tok'])

    assert result.exit_code == 1
    assert 'Unsupported media type' in result.output
    mock_client.create_destination.assert_not_called()


@pytest.mark.parametrize("interval", ['0', '-1'])
def test_upload_rejects_bad_interval(mock_client, tmp_path, interval):
    """Test a non-positive interval exits cleanly before any request."""
    video = tmp_path / "clip.mp4"
    video.write_bytes(b"\x00\x00\x00\x18ftypmp42")

    result = runner.invoke(app, ['upload', str(video), '-t', 'tok', '--interval', interval])

    assert result.exit_code == 1
    assert 'Interval must be positive' in result.output
    assert result.exception is None or isinstance(result.exception, SystemExit)
    mock_client.create_destination.assert_not_called()


def test_progress_rejects_bad_interval():
    """Test the progress command validates its interval."""
    result = runner.invoke(app, ['progress', 'https://upload.test/progress/abc', '--interval', '0'])

    assert result.exit_code == 1
    assert 'Interval must be positive' in result.output
