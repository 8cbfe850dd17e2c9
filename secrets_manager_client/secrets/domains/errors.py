"""Exceptions raised by the secrets-manager client."""
from botocore.exceptions import BotoCoreError, ClientError

# Backend failures are botocore's own exceptions and are re-raised unmodified.
TransportError = (ClientError, BotoCoreError)


class SecretsManagerError(Exception):
    """Base class for client errors."""
    pass


class CredentialResolutionError(SecretsManagerError):
    """No usable credential source was found for the requested profile."""
    pass


class SecretNotFoundError(SecretsManagerError):
    """The backend rejected a lookup with a bad-request (HTTP 400) status."""

    def __init__(self, secret_id: str):
        self.secret_id = secret_id
        super().__init__(f"Secret Not Found: {secret_id}")


class RecoveryWindowError(SecretsManagerError, ValueError):
    """Recovery window outside the 7 to 30 day range accepted by the backend."""

    def __init__(self, days):
        self.days = days
        super().__init__(
            f"Invalid recovery window: {days} (must be between 7 and 30 days inclusive)"
        )


class InvalidAddressError(SecretsManagerError, ValueError):
    """Secret address does not match Organization/Environment/[Application/]Service/Identifier."""

    def __init__(self, address: str, reason: str):
        self.address = address
        super().__init__(f"Invalid secret address '{address}': {reason}")


class InvalidFilterError(SecretsManagerError, ValueError):
    """Search filter key is not one the backend supports."""

    def __init__(self, filter_kind: str, allowed):
        self.filter_kind = filter_kind
        super().__init__(
            f"Unsupported search filter '{filter_kind}'. Allowed: {', '.join(allowed)}"
        )
