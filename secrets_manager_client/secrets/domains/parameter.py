"""Hierarchical secret addresses: Organization/Environment/[Application/]Service/Identifier."""
from dataclasses import dataclass
from typing import Dict, List, Optional

from .errors import InvalidAddressError

SEPARATOR = "/"


@dataclass(frozen=True)
class AddressParameter:
    """
    Decomposed secret address.

    The rendered path is used as the secret's name, and each present segment
    becomes a tag when the secret is created.
    """
    organization: str
    environment: str
    service: str
    identifier: str
    application: Optional[str] = None

    @classmethod
    def parse(cls, address: str) -> "AddressParameter":
        """
        Parse an address string.

        Args:
            address: "Org/Env/App/Svc/Id" or "Org/Env/Svc/Id"

        Returns:
            AddressParameter

        Raises:
            InvalidAddressError: If the address has the wrong number of segments
                or an empty segment
        """
        if not address:
            raise InvalidAddressError(address, "address cannot be empty")

        segments = address.split(SEPARATOR)

        if any(not segment for segment in segments):
            raise InvalidAddressError(address, "address contains an empty segment")

        if len(segments) == 5:
            organization, environment, application, service, identifier = segments
        elif len(segments) == 4:
            organization, environment, service, identifier = segments
            application = None
        else:
            raise InvalidAddressError(
                address,
                f"expected 4 or 5 segments separated by '{SEPARATOR}', got {len(segments)}"
            )

        return cls(
            organization=organization,
            environment=environment,
            application=application,
            service=service,
            identifier=identifier,
        )

    def segments(self) -> List[tuple]:
        """(tag key, value) pairs for the present segments, in path order."""
        pairs = [
            ("Organization", self.organization),
            ("Environment", self.environment),
            ("Application", self.application),
            ("Service", self.service),
            ("Identifier", self.identifier),
        ]
        return [(key, value) for key, value in pairs if value]

    def string(self) -> str:
        """Canonical path used as the secret name and lookup id."""
        return SEPARATOR.join(value for _, value in self.segments())

    def tags(self) -> List[Dict[str, str]]:
        """Backend tag list with one entry per present segment."""
        return [{"Key": key, "Value": value} for key, value in self.segments()]

    def __str__(self) -> str:
        return self.string()
