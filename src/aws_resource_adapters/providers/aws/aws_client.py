import logging
import threading
from typing import Any, Dict, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from aws_resource_adapters.config.schemas import AWSConfig
from aws_resource_adapters.infrastructure.exceptions import CredentialsError

logger = logging.getLogger(__name__)


class AWSClient:
    """
    Centralized AWS client management.

    Constructed once per process/session and injected into every adapter.
    Service clients are created lazily and cached.
    """

    def __init__(self, config: Optional[AWSConfig] = None, session: Optional[boto3.Session] = None):
        """
        Initialize AWS client with configuration.

        Args:
            config: AWS configuration section
            session: Optional pre-built boto3 session

        Raises:
            CredentialsError: If credential validation is enabled and fails
        """
        self.aws_config = config or AWSConfig()
        self.region_name = self.aws_config.region
        self.session = session or boto3.Session(
            profile_name=self.aws_config.profile,
            region_name=self.aws_config.region,
        )
        self.config = Config(
            region_name=self.aws_config.region,
            retries={
                'max_attempts': self.aws_config.max_attempts,
                'mode': self.aws_config.retry_mode,
            },
            connect_timeout=self.aws_config.connect_timeout_ms / 1000,
            read_timeout=self.aws_config.read_timeout_ms / 1000,
            proxies=self._proxy_settings(),
        )
        self._clients: Dict[str, Any] = {}
        self._lock = threading.Lock()

        if self.aws_config.validate_credentials:
            self.validate_credentials()

    def _proxy_settings(self) -> Optional[Dict[str, str]]:
        """Configure proxy settings for AWS clients."""
        if self.aws_config.proxy_host and self.aws_config.proxy_port:
            return {
                'http': f"http://{self.aws_config.proxy_host}:{self.aws_config.proxy_port}",
                'https': f"https://{self.aws_config.proxy_host}:{self.aws_config.proxy_port}",
            }
        return None

    def validate_credentials(self) -> Dict[str, Any]:
        """Validate AWS credentials with STS and return the caller identity."""
        try:
            identity = self.get_client('sts').get_caller_identity()
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to validate AWS credentials: {str(e)}")
            raise CredentialsError(f"Failed to validate AWS credentials: {str(e)}") from e
        logger.debug("Validated AWS credentials for account %s", identity.get('Account'))
        return identity

    def get_client(self, service_name: str) -> Any:
        """Get (and cache) a boto3 client for ``service_name``."""
        with self._lock:
            client = self._clients.get(service_name)
            if client is None:
                kwargs: Dict[str, Any] = {'config': self.config}
                if self.aws_config.endpoint_url:
                    kwargs['endpoint_url'] = self.aws_config.endpoint_url
                client = self.session.client(service_name, **kwargs)
                self._clients[service_name] = client
                logger.debug("Created %s client in %s", service_name, self.region_name)
            return client

    @property
    def sesv2_client(self) -> Any:
        return self.get_client('sesv2')

    @property
    def cleanrooms_client(self) -> Any:
        return self.get_client('cleanrooms')
