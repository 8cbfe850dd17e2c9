"""Credential resolution for AWS Secrets Manager.

Identities come from explicit access keys when the environment provides them,
otherwise from botocore's provider chain: the shared credentials file
(~/.aws/credentials) and config file (~/.aws/config), then container and
instance roles. Both files are INI formatted. Sections in the credentials file
are profile names; config file sections for non-default profiles use the
`[profile profile-name]` header.
"""
import os
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

import boto3
import botocore.session
from botocore.exceptions import NoCredentialsError, PartialCredentialsError, ProfileNotFound

from .errors import CredentialResolutionError

logger = logging.getLogger(__name__)

DEFAULT_PROFILE = "default"


@dataclass(frozen=True)
class CredentialSettings:
    """Inputs to credential resolution, captured once instead of read from os.environ ad hoc."""
    profile: str = DEFAULT_PROFILE
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = field(default=None, repr=False)
    session_token: Optional[str] = field(default=None, repr=False)
    region: Optional[str] = None
    credentials_file: Optional[str] = None
    config_file: Optional[str] = None

    @classmethod
    def from_environment(cls, profile: Optional[str] = None, environ: Optional[Mapping[str, str]] = None,
                         default_profile: str = DEFAULT_PROFILE) -> "CredentialSettings":
        """
        Capture credential settings from environment variables.

        Args:
            profile: Profile name to resolve when no access keys are set;
                falls back to AWS_PROFILE, then default_profile
            environ: Mapping to read from (defaults to os.environ)
            default_profile: Profile used when neither profile nor AWS_PROFILE is set

        Returns:
            CredentialSettings
        """
        if environ is None:
            environ = os.environ

        return cls(
            profile=profile or environ.get("AWS_PROFILE") or default_profile or DEFAULT_PROFILE,
            access_key_id=environ.get("AWS_ACCESS_KEY_ID") or None,
            # AWS_SECRET_ACCESS_TOKEN is accepted for older deployments
            secret_access_key=environ.get("AWS_SECRET_ACCESS_KEY") or environ.get("AWS_SECRET_ACCESS_TOKEN") or None,
            session_token=environ.get("AWS_SESSION_TOKEN") or None,
            region=environ.get("AWS_DEFAULT_REGION") or environ.get("AWS_REGION") or None,
            credentials_file=environ.get("AWS_SHARED_CREDENTIALS_FILE") or None,
            config_file=environ.get("AWS_CONFIG_FILE") or None,
        )

    @property
    def has_static_keys(self) -> bool:
        return bool(self.access_key_id and self.secret_access_key)


@dataclass(frozen=True)
class Identity:
    """A resolved identity bound to the session that produced it."""
    profile: str
    access_key_id: str
    secret_access_key: str = field(repr=False)
    region: Optional[str]
    session: Any = field(repr=False, compare=False)


def _mask(access_key_id: str) -> str:
    return f"****{access_key_id[-4:]}" if access_key_id else "<none>"


def _build_session(settings: CredentialSettings) -> boto3.Session:
    if settings.has_static_keys:
        logger.debug("Using access keys from environment")
        return boto3.Session(
            aws_access_key_id=settings.access_key_id,
            aws_secret_access_key=settings.secret_access_key,
            aws_session_token=settings.session_token,
            region_name=settings.region,
        )

    core = botocore.session.Session()
    if settings.credentials_file:
        core.set_config_variable("credentials_file", settings.credentials_file)
    if settings.config_file:
        core.set_config_variable("config_file", settings.config_file)

    # Without a [default] section the default profile falls through to container and instance roles
    if settings.profile != DEFAULT_PROFILE or DEFAULT_PROFILE in core.available_profiles:
        profile_name = settings.profile
    else:
        profile_name = None
    logger.debug(f"Using provider chain for profile: {settings.profile}")
    return boto3.Session(
        botocore_session=core,
        profile_name=profile_name,
        region_name=settings.region,
    )


def resolve(settings: CredentialSettings) -> Identity:
    """
    Resolve settings into an identity.

    Args:
        settings: Credential settings

    Returns:
        Identity with frozen credentials and the backing boto3 session

    Raises:
        CredentialResolutionError: If no usable credential source exists
    """
    try:
        session = _build_session(settings)
        credentials = session.get_credentials()
    except (ProfileNotFound, NoCredentialsError, PartialCredentialsError) as e:
        raise CredentialResolutionError(
            f"Unable to resolve credentials for profile '{settings.profile}': {e}"
        ) from e

    if credentials is None:
        raise CredentialResolutionError(
            f"No credentials found for profile '{settings.profile}'. "
            f"Set AWS_ACCESS_KEY_ID/AWS_SECRET_ACCESS_KEY or configure ~/.aws/credentials"
        )

    frozen = credentials.get_frozen_credentials()
    region = settings.region or session.region_name
    # Report the profile botocore actually loaded, which AWS_PROFILE can redirect
    profile = settings.profile if settings.has_static_keys else (session.profile_name or settings.profile)

    logger.debug(
        f"Resolved credentials for profile '{profile}' "
        f"(key {_mask(frozen.access_key)}, region {region or '<unset>'})"
    )

    return Identity(
        profile=profile,
        access_key_id=frozen.access_key,
        secret_access_key=frozen.secret_key,
        region=region,
        session=session,
    )
