"""Shared fixtures: isolated config/env and an in-memory Secrets Manager backend."""
import datetime
import uuid
from pathlib import Path
from unittest import mock

import pytest
from botocore.credentials import ReadOnlyCredentials
from botocore.exceptions import ClientError

from secrets_manager_client.secrets.domains import credential

AWS_ENV_VARS = (
    "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY",
    "AWS_SECRET_ACCESS_TOKEN",
    "AWS_SESSION_TOKEN",
    "AWS_DEFAULT_REGION",
    "AWS_REGION",
    "AWS_PROFILE",
    "AWS_SHARED_CREDENTIALS_FILE",
    "AWS_CONFIG_FILE",
    "SECRETS_MANAGER_CONFIG",
)


def client_error(code, status, operation, message="error"):
    """Build a botocore ClientError the way the backend reports it."""
    return ClientError(
        {
            "Error": {"Code": code, "Message": message},
            "ResponseMetadata": {"HTTPStatusCode": status},
        },
        operation,
    )


class FakeSecretsManager:
    """Minimal in-memory stand-in for a boto3 secretsmanager client."""

    def __init__(self):
        self.secrets = {}
        self.calls = []

    def _lookup(self, secret_id, operation):
        for secret in self.secrets.values():
            if secret_id in (secret["Name"], secret["ARN"]):
                if secret.get("DeletedDate"):
                    raise client_error(
                        "InvalidRequestException", 400, operation,
                        "You can't perform this operation on the secret because it was marked for deletion."
                    )
                return secret
        raise client_error(
            "ResourceNotFoundException", 400, operation,
            "Secrets Manager can't find the specified secret."
        )

    def create_secret(self, **params):
        self.calls.append(("create_secret", params))
        name = params["Name"]
        if name in self.secrets:
            raise client_error("ResourceExistsException", 400, "CreateSecret")

        version = str(uuid.uuid4())
        self.secrets[name] = {
            "ARN": f"arn:aws:secretsmanager:us-east-2:123456789012:secret:{name}-AbCdEf",
            "Name": name,
            "Description": params.get("Description"),
            "SecretString": params.get("SecretString"),
            "SecretBinary": params.get("SecretBinary"),
            "Tags": params.get("Tags", []),
            "VersionId": version,
            "CreatedDate": datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc),
        }
        secret = self.secrets[name]
        return {"ARN": secret["ARN"], "Name": name, "VersionId": version}

    def get_secret_value(self, **params):
        self.calls.append(("get_secret_value", params))
        secret = self._lookup(params["SecretId"], "GetSecretValue")
        response = {
            "ARN": secret["ARN"],
            "Name": secret["Name"],
            "VersionId": secret["VersionId"],
            "VersionStages": ["AWSCURRENT"],
            "CreatedDate": secret["CreatedDate"],
        }
        if secret["SecretString"] is not None:
            response["SecretString"] = secret["SecretString"]
        if secret["SecretBinary"] is not None:
            response["SecretBinary"] = secret["SecretBinary"]
        return response

    def delete_secret(self, **params):
        self.calls.append(("delete_secret", params))
        secret = self._lookup(params["SecretId"], "DeleteSecret")
        secret["DeletedDate"] = datetime.datetime(2024, 2, 1, tzinfo=datetime.timezone.utc)
        return {"ARN": secret["ARN"], "Name": secret["Name"], "DeletionDate": secret["DeletedDate"]}

    def _matches(self, secret, filters):
        for entry in filters or []:
            key, values = entry["Key"], entry["Values"]
            if key == "name" and not any(secret["Name"].startswith(v) for v in values):
                return False
            if key == "tag-value" and not any(tag["Value"] in values for tag in secret["Tags"]):
                return False
            if key == "tag-key" and not any(tag["Key"] in values for tag in secret["Tags"]):
                return False
        return True

    def list_secrets(self, **params):
        self.calls.append(("list_secrets", params))
        visible = [
            s for s in self.secrets.values()
            if not s.get("DeletedDate") and self._matches(s, params.get("Filters"))
        ]
        start = int(params.get("NextToken") or 0)
        size = params.get("MaxResults", 100)
        page = visible[start:start + size]

        response = {
            "SecretList": [
                {
                    "ARN": s["ARN"],
                    "Name": s["Name"],
                    "Description": s["Description"],
                    "Tags": s["Tags"],
                    "CreatedDate": s["CreatedDate"],
                    "SecretVersionsToStages": {s["VersionId"]: ["AWSCURRENT"]},
                }
                for s in page
            ]
        }
        if start + size < len(visible):
            response["NextToken"] = str(start + size)
        return response


@pytest.fixture
def make_client_error():
    return client_error


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep tests away from the real home directory and AWS environment."""
    fake_home = tmp_path / "home"
    fake_home.mkdir()
    monkeypatch.setenv("HOME", str(fake_home))
    monkeypatch.setattr(Path, "home", lambda: fake_home)

    for name in AWS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    return fake_home


@pytest.fixture
def fake_backend():
    return FakeSecretsManager()


@pytest.fixture
def fake_session(fake_backend, monkeypatch):
    """Patch boto3.Session so every resolved identity talks to fake_backend."""
    session = mock.MagicMock(name="Session")
    session.region_name = None
    session.profile_name = None
    session.get_credentials.return_value.get_frozen_credentials.return_value = ReadOnlyCredentials(
        "AKIAEXAMPLE0001", "example-secret-key", None
    )
    session.client.return_value = fake_backend

    session_factory = mock.MagicMock(return_value=session)
    monkeypatch.setattr(credential.boto3, "Session", session_factory)
    return session
