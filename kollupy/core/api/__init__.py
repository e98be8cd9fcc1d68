"""Kollus upload API module."""
from .config import APIConfig, ProxyConfig, SSLConfig, TimeoutConfig
from .async_client import AsyncUploadClient, UploadClient
from .request import RequestBuilder, ResponseHandler

__all__ = [
    # Client
    'AsyncUploadClient',
    'UploadClient',
    
    # Request handling
    'RequestBuilder',
    'ResponseHandler',
    
    # Configuration
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
]
