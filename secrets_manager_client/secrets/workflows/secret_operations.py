"""Workflow for secret operations: lookup, paginated listing, search, creation and deletion."""
import logging
from dataclasses import replace
from typing import Any, List, Optional, Union

from botocore.exceptions import ClientError

from ..domains import commands
from ..domains.aws_client import Client
from ..domains.config_loader import (
    MAX_PAGE_SIZE,
    configured_page_size,
    configured_profile,
    configured_region,
    is_valid_page_size,
    load_settings,
)
from ..domains.credential import DEFAULT_PROFILE, CredentialSettings
from ..domains.errors import InvalidFilterError, RecoveryWindowError, SecretNotFoundError
from ..domains.models import Secret, SecretCollection
from ..domains.parameter import AddressParameter

logger = logging.getLogger(__name__)

FILTER_KINDS = ("description", "name", "tag-key", "tag-value", "primary-region", "all")

MIN_RECOVERY_DAYS = 7
MAX_RECOVERY_DAYS = 30

Address = Union[str, AddressParameter]


def _secret_id(address: Address) -> str:
    if isinstance(address, AddressParameter):
        return address.string()
    return address


def validate_recovery_window(days: int) -> int:
    """
    Check a deletion recovery window.

    Raises:
        RecoveryWindowError: If days is outside [7, 30]
    """
    if isinstance(days, bool) or not isinstance(days, int) or days < MIN_RECOVERY_DAYS or days > MAX_RECOVERY_DAYS:
        raise RecoveryWindowError(days)
    return days


class SecretService:
    """
    Secret operations against AWS Secrets Manager.

    Every public method resolves credentials and binds a fresh client, so no
    setup call is needed and nothing is shared between calls.

    Example:
        service = SecretService("default")
        service.create("Org/Dev/App/Svc/123", "test secret", '{"k": "v"}')
        service.get("Org/Dev/App/Svc/123")  # {"k": "v"}
    """

    def __init__(self, profile: Optional[str] = None, settings: Optional[CredentialSettings] = None,
                 page_size: Optional[int] = None):
        # The config file only fills in what the caller left out
        config = load_settings() if settings is None or page_size is None else {}

        if settings is None:
            settings = CredentialSettings.from_environment(
                profile, default_profile=configured_profile(config) or DEFAULT_PROFILE
            )
            if not settings.region and configured_region(config):
                settings = replace(settings, region=configured_region(config))
        self.settings = settings

        if page_size is None:
            page_size = configured_page_size(config)
        if not is_valid_page_size(page_size):
            raise ValueError(f"page_size must be an integer between 1 and {MAX_PAGE_SIZE}, got: {page_size!r}")
        self.page_size = page_size

    def _initialize(self) -> Client:
        return Client(self.settings).initialize()

    def _paginate(self, client: Client, filters: Optional[List[dict]] = None) -> SecretCollection:
        # Each token comes from the previous response, so pages are strictly sequential
        collection = SecretCollection()
        token = None
        pages = 0

        while True:
            request = commands.list_secrets(max_results=self.page_size, next_token=token, filters=filters)
            page = SecretCollection.from_response(client.send(request))
            collection.extend(page)
            pages += 1
            logger.debug(f"Fetched page {pages} ({page.count} secrets)")

            token = page.token
            if not token:
                break

        logger.debug(f"Listed {collection.count} secrets across {pages} pages")
        return collection

    def list(self) -> SecretCollection:
        """
        List every secret in the account.

        Returns:
            SecretCollection with all pages merged and no continuation token
        """
        client = self._initialize()
        return self._paginate(client)

    def search(self, filter_kind: str, value: Optional[Union[str, List[str]]] = None) -> SecretCollection:
        """
        List secrets matching a filter.

        Args:
            filter_kind: One of description, name, tag-key, tag-value, primary-region, all
            value: Value or values to match; None or "" behaves like list(),
                a list (even an empty one) is sent as the filter values

        Returns:
            SecretCollection with all pages merged

        Raises:
            InvalidFilterError: If filter_kind is not supported
        """
        if filter_kind not in FILTER_KINDS:
            raise InvalidFilterError(filter_kind, FILTER_KINDS)

        filters = None
        if isinstance(value, str):
            if value:
                filters = [{"Key": filter_kind, "Values": [value]}]
        elif value is not None:
            filters = [{"Key": filter_kind, "Values": list(value)}]

        client = self._initialize()
        return self._paginate(client, filters)

    def get(self, address: Address) -> Any:
        """
        Fetch and decode a secret value.

        Args:
            address: Secret name or ARN, or an AddressParameter

        Returns:
            Parsed JSON value, the raw string when it isn't JSON,
            or None for secrets without a string payload

        Raises:
            SecretNotFoundError: If the backend answers with HTTP 400
        """
        return self.get_secret(address).serialize()

    def get_secret(self, address: Address) -> Secret:
        """
        Fetch a secret record without decoding its payload.

        Raises:
            SecretNotFoundError: If the backend answers with HTTP 400
        """
        secret_id = _secret_id(address)
        client = self._initialize()

        try:
            response = client.send(commands.get_secret_value(secret_id))
        except ClientError as e:
            if e.response.get("ResponseMetadata", {}).get("HTTPStatusCode") == 400:
                raise SecretNotFoundError(secret_id) from e
            raise

        logger.debug(f"Retrieved secret: {secret_id}")
        return Secret.from_response(response)

    def create(self, address: Address, description: str, secret_value: str, overwrite: bool = False) -> Secret:
        """
        Create a secret named and tagged after its address.

        Args:
            address: "Org/Env/[App/]Svc/Id" string or AddressParameter
            description: Secret description
            secret_value: String payload
            overwrite: Overwrite a same-named secret in replica regions

        Returns:
            Secret built from the creation response

        Raises:
            InvalidAddressError: If a string address cannot be parsed
        """
        parameter = address if isinstance(address, AddressParameter) else AddressParameter.parse(address)
        client = self._initialize()

        request = commands.create_secret(
            name=parameter.string(),
            description=description,
            secret_string=secret_value,
            tags=parameter.tags(),
            force_overwrite_replica_secret=overwrite,
        )
        response = client.send(request)

        logger.info(f"Created secret: {parameter.string()}")
        return Secret.from_response(response)

    def delete(self, address: Address, recovery_days: int = MIN_RECOVERY_DAYS) -> bool:
        """
        Schedule a secret for deletion.

        Args:
            address: Secret name or ARN, or an AddressParameter
            recovery_days: Days (7 to 30) before the secret is purged

        Returns:
            True once the backend acknowledges the request

        Raises:
            RecoveryWindowError: If recovery_days is outside [7, 30]; raised before any backend call
        """
        validate_recovery_window(recovery_days)
        secret_id = _secret_id(address)
        client = self._initialize()

        client.send(commands.delete_secret(
            secret_id,
            recovery_window_in_days=recovery_days,
            force_delete_without_recovery=False,
        ))

        logger.info(f"Scheduled secret for deletion in {recovery_days} days: {secret_id}")
        return True
