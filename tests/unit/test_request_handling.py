"""Tests for request building and response normalization."""
import pytest

from kollupy.core.api import APIConfig
from kollupy.core.api.request import RequestBuilder, ResponseHandler
from kollupy.core.exceptions import ConfigurationError, TransportError, RemoteRejection
from kollupy.core.upload.models import DestinationRequest, UploadVariant


class TestRequestBuilder:
    """Test suite for RequestBuilder."""

    @pytest.fixture
    def builder(self):
        """Create builder with default hosts."""
        return RequestBuilder(APIConfig(), 'token')

    def test_default_endpoints(self, builder):
        """Test endpoints on the default hosts."""
        assert builder.destination_endpoint(UploadVariant.NORMAL) == \
            'https://c-api-kr.kollus.com/api/upload/create-url'
        assert builder.destination_endpoint(UploadVariant.PASSTHROUGH) == \
            'https://upload.kr.kollus.com/api/v1/create_url'
        assert builder.destination_endpoint(UploadVariant.FILELIVE) == \
            'https://upload.kr.kollus.com/api/v1/create_url'

    def test_normal_fields(self, builder):
        """Test normal upload payload."""
        request = DestinationRequest(expire_time=600, category_key='cat123', title='Demo')

        fields = builder.build_destination_fields(request)

        assert fields == {
            'expire_time': '600',
            'category_key': 'cat123',
            'title': 'Demo',
            'is_encryption_upload': '0',
            'is_audio_upload': '0',
            'is_passthrough': '0',
        }

    def test_empty_optional_fields_omitted(self, builder):
        """Test empty category and title are not sent."""
        request = DestinationRequest(expire_time=600, category_key='', title=None)

        fields = builder.build_destination_fields(request)

        assert 'category_key' not in fields
        assert 'title' not in fields
        assert fields['expire_time'] == '600'

    def test_passthrough_fields(self, builder):
        """Test passthrough sends profile key and the passthrough flag."""
        request = DestinationRequest(
            expire_time=600,
            variant=UploadVariant.PASSTHROUGH,
            profile_key='profile-hd'
        )

        fields = builder.build_destination_fields(request)

        assert fields['is_passthrough'] == '1'
        assert fields['profile_key'] == 'profile-hd'
        assert 'selected_profile_key' not in fields

    def test_passthrough_requires_profile(self, builder):
        """Test passthrough without profile key raises."""
        request = DestinationRequest(expire_time=600, variant=UploadVariant.PASSTHROUGH)

        with pytest.raises(ConfigurationError, match="Profile Key required for passthrough upload"):
            builder.build_destination_fields(request)

    def test_filelive_fields(self, builder):
        """Test filelive derives the selected profile key."""
        request = DestinationRequest(
            expire_time=600,
            category_key='cat123',
            variant=UploadVariant.FILELIVE
        )

        fields = builder.build_destination_fields(request)

        assert fields['selected_profile_key'] == 'cat123-filelive'
        assert fields['is_passthrough'] == '0'
        assert 'profile_key' not in fields

    def test_filelive_requires_category(self, builder):
        """Test filelive without category key raises."""
        request = DestinationRequest(expire_time=600, variant=UploadVariant.FILELIVE)

        with pytest.raises(ConfigurationError, match="Category Key required"):
            builder.build_destination_fields(request)

    def test_non_passthrough_ignores_profile(self, builder):
        """Test profile key is only sent for passthrough."""
        request = DestinationRequest(expire_time=600, profile_key='profile-hd')

        fields = builder.build_destination_fields(request)

        assert 'profile_key' not in fields

    def test_transfer_fields(self):
        """Test auxiliary transfer fields."""
        assert RequestBuilder.build_transfer_fields() == {
            'disable_alert': '1',
            'accept': 'application/json',
        }

    def test_transfer_fields_with_return_url(self):
        """Test return URL adds the outer redirection scope."""
        fields = RequestBuilder.build_transfer_fields('https://example.com/done')

        assert fields['return_url'] == 'https://example.com/done'
        assert fields['redirection_scope'] == 'outer'


class TestResponseHandler:
    """Test suite for ResponseHandler."""

    def test_parse_json_invalid(self):
        """Test invalid JSON raises TransportError."""
        with pytest.raises(TransportError):
            ResponseHandler.parse_json("")

    def test_destination_data_shape(self, destination_body_data):
        """Test shape with 'data' and 'expired_at'."""
        destination = ResponseHandler.parse_destination(destination_body_data)

        assert destination.upload_url == 'https://upload.test/upload/abc'
        assert destination.progress_url == 'https://upload.test/progress/abc'
        assert destination.expired_at == 1700000600

    def test_destination_result_shape(self, destination_body_result):
        """Test shape with 'result' and 'will_be_expired_at'."""
        destination = ResponseHandler.parse_destination(destination_body_result)

        assert destination.upload_file_key == 'xyz'
        assert destination.expired_at == 1700000900

    def test_destination_data_shape_failure_status(self, destination_body_data):
        """Test a failure status in the 'data' shape is rejected."""
        body = dict(destination_body_data, status='fail', message='Quota exceeded')

        with pytest.raises(RemoteRejection) as exc_info:
            ResponseHandler.parse_destination(body)

        assert exc_info.value.message == 'Quota exceeded'
        assert exc_info.value.status == 'fail'

    def test_destination_result_shape_error_code(self, destination_body_result):
        """Test a non-zero error in the 'result' shape is rejected."""
        body = dict(destination_body_result, error=403, message='Forbidden')

        with pytest.raises(RemoteRejection) as exc_info:
            ResponseHandler.parse_destination(body)

        assert exc_info.value.error_code == 403
        assert exc_info.value.response == body

    def test_destination_missing_nested_object(self):
        """Test a body with neither shape fails closed."""
        with pytest.raises(RemoteRejection, match="Upload URL creation failed"):
            ResponseHandler.parse_destination({'status': 'success'})

    def test_destination_missing_field(self, destination_body_result):
        """Test an incomplete nested object fails closed."""
        body = {'error': 0, 'result': {'upload_url': 'https://upload.test/u'}}

        with pytest.raises(RemoteRejection):
            ResponseHandler.parse_destination(body)

    def test_destination_not_an_object(self):
        """Test a non-object body fails closed."""
        with pytest.raises(RemoteRejection):
            ResponseHandler.parse_destination(['unexpected'])

    def test_progress_with_result(self):
        """Test progress snapshot with result."""
        snapshot = ResponseHandler.parse_progress(
            {'error': 0, 'result': {'progress': 100, 'status': 'done'}}
        )

        assert snapshot.has_result
        assert snapshot.is_complete
        assert snapshot.progress == 100
        assert snapshot.status == 'done'

    def test_progress_numeric_string(self):
        """Test string progress values are coerced."""
        snapshot = ResponseHandler.parse_progress({'error': 0, 'result': {'progress': '42.5'}})

        assert snapshot.progress == 42.5

    def test_progress_server_error(self):
        """Test server error snapshot carries no result."""
        snapshot = ResponseHandler.parse_progress({'error': 1, 'message': 'pending'})

        assert snapshot.error == 1
        assert snapshot.progress is None
        assert not snapshot.has_result

    def test_progress_invalid_value(self):
        """Test non-numeric progress raises TransportError."""
        with pytest.raises(TransportError):
            ResponseHandler.parse_progress({'error': 0, 'result': {'progress': 'n/a'}})

    def test_progress_not_an_object(self):
        """Test non-object progress body raises TransportError."""
        with pytest.raises(TransportError):
            ResponseHandler.parse_progress(42)

    def test_outcome(self):
        """Test transfer outcome keeps the raw body."""
        body = {'result': 'ok', 'status': 'success', 'extra': 1}

        outcome = ResponseHandler.parse_outcome(body)

        assert outcome.result == 'ok'
        assert outcome.status == 'success'
        assert outcome.response == body
