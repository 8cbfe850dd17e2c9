"""Request builders for the Secrets Manager API.

Each builder returns a Request value and never touches the network.
Client.send() is the only place a request reaches the backend. Parameter
names match the API's own field names; parameters left as None are omitted.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Request:
    """A backend call waiting to be sent."""
    operation: str
    params: Dict[str, Any] = field(default_factory=dict)


def _request(operation: str, **params) -> Request:
    return Request(operation, {key: value for key, value in params.items() if value is not None})


def create_secret(name: str, description: Optional[str] = None, secret_string: Optional[str] = None,
                  secret_binary: Optional[bytes] = None, tags: Optional[List[Dict[str, str]]] = None,
                  force_overwrite_replica_secret: bool = False, kms_key_id: Optional[str] = None) -> Request:
    return _request(
        "create",
        Name=name,
        Description=description,
        SecretString=secret_string,
        SecretBinary=secret_binary,
        Tags=tags,
        ForceOverwriteReplicaSecret=force_overwrite_replica_secret,
        KmsKeyId=kms_key_id,
    )


def list_secrets(max_results: Optional[int] = None, next_token: Optional[str] = None,
                 filters: Optional[List[Dict[str, Any]]] = None,
                 include_planned_deletion: Optional[bool] = None) -> Request:
    return _request(
        "list",
        MaxResults=max_results,
        NextToken=next_token,
        Filters=filters,
        IncludePlannedDeletion=include_planned_deletion,
    )


def get_secret_value(secret_id: str, version_id: Optional[str] = None,
                     version_stage: Optional[str] = None) -> Request:
    return _request("get", SecretId=secret_id, VersionId=version_id, VersionStage=version_stage)


def rotate_secret(secret_id: str, rotation_lambda_arn: Optional[str] = None,
                  rotation_rules: Optional[Dict[str, Any]] = None,
                  rotate_immediately: Optional[bool] = None) -> Request:
    return _request(
        "rotate",
        SecretId=secret_id,
        RotationLambdaARN=rotation_lambda_arn,
        RotationRules=rotation_rules,
        RotateImmediately=rotate_immediately,
    )


def cancel_rotate_secret(secret_id: str) -> Request:
    return _request("cancel", SecretId=secret_id)


def delete_secret(secret_id: str, recovery_window_in_days: Optional[int] = None,
                  force_delete_without_recovery: bool = False) -> Request:
    return _request(
        "delete",
        SecretId=secret_id,
        RecoveryWindowInDays=recovery_window_in_days,
        ForceDeleteWithoutRecovery=force_delete_without_recovery,
    )


def describe_secret(secret_id: str) -> Request:
    return _request("describe", SecretId=secret_id)


def tag_resource(secret_id: str, tags: List[Dict[str, str]]) -> Request:
    return _request("tag", SecretId=secret_id, Tags=tags)


def get_random_password(password_length: Optional[int] = None, exclude_characters: Optional[str] = None,
                        exclude_punctuation: Optional[bool] = None,
                        include_space: Optional[bool] = None) -> Request:
    return _request(
        "random",
        PasswordLength=password_length,
        ExcludeCharacters=exclude_characters,
        ExcludePunctuation=exclude_punctuation,
        IncludeSpace=include_space,
    )


def update_secret(secret_id: str, description: Optional[str] = None, secret_string: Optional[str] = None,
                  secret_binary: Optional[bytes] = None, kms_key_id: Optional[str] = None) -> Request:
    return _request(
        "update",
        SecretId=secret_id,
        Description=description,
        SecretString=secret_string,
        SecretBinary=secret_binary,
        KmsKeyId=kms_key_id,
    )


def untag_resource(secret_id: str, tag_keys: List[str]) -> Request:
    return _request("untag", SecretId=secret_id, TagKeys=tag_keys)


# operation name -> (request builder, boto3 client method)
COMMANDS = {
    "create": (create_secret, "create_secret"),
    "list": (list_secrets, "list_secrets"),
    "get": (get_secret_value, "get_secret_value"),
    "rotate": (rotate_secret, "rotate_secret"),
    "cancel": (cancel_rotate_secret, "cancel_rotate_secret"),
    "delete": (delete_secret, "delete_secret"),
    "describe": (describe_secret, "describe_secret"),
    "tag": (tag_resource, "tag_resource"),
    "random": (get_random_password, "get_random_password"),
    "update": (update_secret, "update_secret"),
    "untag": (untag_resource, "untag_resource"),
}
