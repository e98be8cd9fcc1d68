"""Request builder for upload API requests."""
from urllib.parse import quote
from typing import Dict, Optional, Any

from ..config import APIConfig
from ...exceptions import ConfigurationError
from ...upload.models import DestinationRequest, UploadVariant


FILELIVE_PROFILE_SUFFIX = '-filelive'


class RequestBuilder:
    """Builds endpoints and form fields for the upload protocol."""
    
    def __init__(self, config: APIConfig, access_token: str):
        """Initializes request builder."""
        self.config = config
        self.access_token = access_token
    
    def destination_endpoint(self, variant: UploadVariant) -> str:
        """Returns the create-url endpoint for an upload variant."""
        if variant.uses_upload_host:
            return f"{self.config.upload_base_url}/api/v1/create_url"
        return f"{self.config.api_base_url}/api/upload/create-url"
    
    def destination_url(self, variant: UploadVariant) -> str:
        """Returns the create-url endpoint with the access token attached."""
        token = quote(self.access_token, safe="-_.!~*'()")
        return f"{self.destination_endpoint(variant)}?access_token={token}"
    
    def build_destination_fields(self, request: DestinationRequest) -> Dict[str, str]:
        """
        Builds destination form fields.
        
        Raises:
            ConfigurationError: If the variant's required keys are missing
        """
        variant = request.variant
        
        if variant is UploadVariant.PASSTHROUGH and not request.profile_key:
            raise ConfigurationError("Profile Key required for passthrough upload")
        if variant is UploadVariant.FILELIVE and not request.category_key:
            raise ConfigurationError("Category Key required for filelive upload")
        
        fields: Dict[str, Any] = {
            'expire_time': request.expire_time,
            'category_key': request.category_key,
            'title': request.title,
            'is_encryption_upload': 0,
            'is_audio_upload': 0,
            'is_passthrough': 1 if variant is UploadVariant.PASSTHROUGH else 0,
        }
        
        if variant is UploadVariant.PASSTHROUGH:
            fields['profile_key'] = request.profile_key
        elif variant is UploadVariant.FILELIVE:
            fields['selected_profile_key'] = request.category_key + FILELIVE_PROFILE_SUFFIX
        
        return {
            key: str(value) for key, value in fields.items()
            if value is not None and value != ''
        }
    
    @staticmethod
    def build_transfer_fields(return_url: Optional[str] = None) -> Dict[str, str]:
        """Builds the auxiliary form fields sent alongside the file."""
        fields = {
            'disable_alert': '1',
            'accept': 'application/json',
        }
        if return_url:
            fields['return_url'] = return_url
            fields['redirection_scope'] = 'outer'
        return fields
