"""
API configuration module.

Connection settings for the Kollus upload client: service hosts,
proxy, SSL and transport timeouts.
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
import os
import ssl

import aiohttp


DEFAULT_API_BASE_URL = 'https://c-api-kr.kollus.com'
DEFAULT_UPLOAD_BASE_URL = 'https://upload.kr.kollus.com'


@dataclass
class ProxyConfig:
    """
    Proxy configuration.

    Supports HTTP and HTTPS proxies.
    """
    url: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None

    def to_aiohttp_proxy(self) -> Optional[str]:
        """Convert to aiohttp proxy format."""
        if not self.url:
            return None

        if self.username and self.password and '://' in self.url:
            protocol, rest = self.url.split('://', 1)
            return f"{protocol}://{self.username}:{self.password}@{rest}"

        return self.url


@dataclass
class SSLConfig:
    """TLS verification settings for both Kollus hosts."""
    verify: bool = True
    ca_file: Optional[str] = None

    def create_ssl_context(self):
        """Returns an SSL context, or False when verification is off."""
        if not self.verify:
            return False

        context = ssl.create_default_context(cafile=self.ca_file)
        return context


@dataclass
class TimeoutConfig:
    """
    Transport timeouts, in seconds.

    These are the only timeouts applied to requests; a stalled status
    fetch holds its polling tick until one of them fires.
    """
    total: Optional[float] = 300.0
    connect: Optional[float] = 30.0

    def to_aiohttp_timeout(self) -> aiohttp.ClientTimeout:
        return aiohttp.ClientTimeout(total=self.total, connect=self.connect)


@dataclass
class APIConfig:
    """
    Complete API configuration for the upload client.

    ``api_base_url`` serves normal uploads; ``upload_base_url`` serves
    passthrough and filelive uploads.
    """
    api_base_url: str = DEFAULT_API_BASE_URL
    upload_base_url: str = DEFAULT_UPLOAD_BASE_URL

    user_agent: str = 'kollupy/1.0.0'

    proxy: Optional[ProxyConfig] = None
    ssl: SSLConfig = field(default_factory=SSLConfig)
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)

    extra_headers: Dict[str, str] = field(default_factory=dict)

    log_level: int = 20  # logging.INFO

    limit_per_host: int = 10
    limit: int = 100

    def __post_init__(self):
        self.api_base_url = self.api_base_url.rstrip('/')
        self.upload_base_url = self.upload_base_url.rstrip('/')

    @classmethod
    def default(cls) -> 'APIConfig':
        """Create default configuration."""
        return cls()

    @classmethod
    def with_proxy(cls, proxy_url: str, **kwargs) -> 'APIConfig':
        """Create configuration with proxy."""
        return cls(proxy=ProxyConfig(url=proxy_url), **kwargs)

    @classmethod
    def insecure(cls, **kwargs) -> 'APIConfig':
        """Create configuration with SSL verification disabled."""
        return cls(ssl=SSLConfig(verify=False), **kwargs)

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None, **kwargs) -> 'APIConfig':
        """
        Create configuration from environment variables.

        Reads KOLLUS_API_URL, KOLLUS_UPLOAD_URL, KOLLUS_PROXY and
        KOLLUS_CA_FILE; unset variables keep their defaults. Explicit kwargs win.

        Args:
            environ: Mapping to read from (defaults to os.environ)
        """
        env = os.environ if environ is None else environ

        values: Dict[str, Any] = {}
        if env.get('KOLLUS_API_URL'):
            values['api_base_url'] = env['KOLLUS_API_URL']
        if env.get('KOLLUS_UPLOAD_URL'):
            values['upload_base_url'] = env['KOLLUS_UPLOAD_URL']
        if env.get('KOLLUS_PROXY'):
            values['proxy'] = ProxyConfig(url=env['KOLLUS_PROXY'])
        if env.get('KOLLUS_CA_FILE'):
            values['ssl'] = SSLConfig(ca_file=env['KOLLUS_CA_FILE'])

        values.update(kwargs)
        return cls(**values)

    def get_connector_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp TCPConnector."""
        return {
            'limit': self.limit,
            'limit_per_host': self.limit_per_host,
            'ssl': self.ssl.create_ssl_context(),
        }

    def get_session_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp ClientSession."""
        headers = {
            'User-Agent': self.user_agent,
            **self.extra_headers
        }

        return {
            'headers': headers,
            'timeout': self.timeout.to_aiohttp_timeout(),
        }
