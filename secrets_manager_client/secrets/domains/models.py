"""Domain models for secret management."""
import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional


@dataclass
class Secret:
    """A single secret value with its version metadata."""
    id: Optional[str] = None
    creation: Optional[datetime] = None
    name: Optional[str] = None
    binary: Optional[bytes] = field(default=None, repr=False)
    secret: Optional[str] = field(default=None, repr=False)
    version: Optional[str] = None
    stages: Optional[List[str]] = None

    @classmethod
    def from_response(cls, response: Optional[Dict[str, Any]]) -> "Secret":
        """Build from a GetSecretValue or CreateSecret response."""
        response = response or {}
        return cls(
            id=response.get("ARN"),
            creation=response.get("CreatedDate"),
            name=response.get("Name"),
            binary=response.get("SecretBinary"),
            secret=response.get("SecretString"),
            version=response.get("VersionId"),
            stages=response.get("VersionStages"),
        )

    def serialize(self) -> Any:
        """
        Parse the string payload.

        Returns:
            The decoded JSON value, the raw string when it isn't JSON,
            or None when there is no string payload
        """
        if not self.secret:
            return None

        try:
            return json.loads(self.secret)
        except ValueError:
            return self.secret


@dataclass
class Tag:
    key: str
    value: str


@dataclass
class SecretSummary:
    """One entry of a ListSecrets page."""
    id: str
    name: Optional[str] = None
    creation: Optional[datetime] = None
    versions: Dict[str, List[str]] = field(default_factory=dict)
    deletion: Optional[datetime] = None
    description: Optional[str] = None
    access: Optional[datetime] = None
    modification: Optional[datetime] = None
    tags: List[Tag] = field(default_factory=list)

    @classmethod
    def from_entry(cls, entry: Dict[str, Any]) -> "SecretSummary":
        return cls(
            id=entry.get("ARN") or "N/A",
            name=entry.get("Name"),
            creation=entry.get("CreatedDate"),
            versions=entry.get("SecretVersionsToStages") or {},
            deletion=entry.get("DeletedDate"),
            description=entry.get("Description"),
            access=entry.get("LastAccessedDate"),
            modification=entry.get("LastChangedDate"),
            tags=[Tag(key=tag.get("Key"), value=tag.get("Value")) for tag in entry.get("Tags") or []],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "creation": self.creation,
            "versions": self.versions,
            "deletion": self.deletion,
            "description": self.description,
            "access": self.access,
            "modification": self.modification,
            "tags": [{"key": tag.key, "value": tag.value} for tag in self.tags],
        }


@dataclass
class SecretCollection:
    """
    Summaries accumulated across ListSecrets pages.

    `token` holds the continuation cursor of the last page added; it is None
    once the listing is exhausted.
    """
    secrets: List[SecretSummary] = field(default_factory=list)
    token: Optional[str] = None

    @classmethod
    def from_response(cls, response: Optional[Dict[str, Any]]) -> "SecretCollection":
        response = response or {}
        return cls(
            secrets=[SecretSummary.from_entry(entry) for entry in response.get("SecretList") or []],
            token=response.get("NextToken") or None,
        )

    def extend(self, page: "SecretCollection") -> None:
        self.secrets.extend(page.secrets)
        self.token = page.token

    @property
    def count(self) -> int:
        return len(self.secrets)

    def __len__(self) -> int:
        return len(self.secrets)

    def __iter__(self) -> Iterator[SecretSummary]:
        return iter(self.secrets)

    def __getitem__(self, index):
        return self.secrets[index]
