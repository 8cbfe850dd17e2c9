"""AWS Secrets Manager client wrapper."""
import logging
from typing import Any, Callable, Dict, List, Optional

from botocore.config import Config

from . import commands
from .commands import Request
from .credential import CredentialSettings, Identity, resolve

logger = logging.getLogger(__name__)

SERVICE_NAME = "secretsmanager"
API_VERSION = "2017-10-17"
DEFAULT_REGION = "us-east-2"
USER_AGENT = "Cloud-Technology-API"


class Client:
    """Binds a resolved identity to a boto3 Secrets Manager client."""

    def __init__(self, settings: Optional[CredentialSettings] = None, profile: Optional[str] = None):
        self.settings = settings or CredentialSettings.from_environment(profile)
        self.identity: Optional[Identity] = None
        self.service = None

    @property
    def commands(self) -> Dict[str, Callable[..., Request]]:
        """Request builders keyed by operation name."""
        return {name: builder for name, (builder, _) in commands.COMMANDS.items()}

    def methods(self) -> List[str]:
        """Names of the supported backend operations."""
        return list(commands.COMMANDS)

    @property
    def region(self) -> str:
        if self.identity and self.identity.region:
            return self.identity.region
        return DEFAULT_REGION

    def initialize(self) -> "Client":
        """
        Resolve credentials and bind the backend client.

        Returns:
            self, ready for send()

        Raises:
            CredentialResolutionError: If no usable credential source exists
        """
        self.identity = resolve(self.settings)
        self.service = self.identity.session.client(
            SERVICE_NAME,
            region_name=self.region,
            api_version=API_VERSION,
            config=Config(user_agent_extra=USER_AGENT),
        )
        logger.debug(f"Initialized {SERVICE_NAME} client in {self.region} for profile '{self.identity.profile}'")
        return self

    def send(self, request: Request) -> Dict[str, Any]:
        """
        Send a request to the backend.

        Args:
            request: Request built by one of the `commands` builders

        Returns:
            Raw backend response

        Raises:
            RuntimeError: If called before initialize()
            ValueError: If the request names an unknown operation
        """
        if self.service is None:
            raise RuntimeError("Client is not initialized. Call initialize() first.")

        if request.operation not in commands.COMMANDS:
            raise ValueError(f"Unknown operation: {request.operation}")

        _, action = commands.COMMANDS[request.operation]
        logger.debug(f"Sending {action}")
        return getattr(self.service, action)(**request.params)
