"""Configuration loader for secrets-manager-client."""
import os
import logging
from pathlib import Path
from typing import Dict, Any
import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SECRETS_MANAGER_CONFIG"

# ListSecrets rejects MaxResults above 100
MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = MAX_PAGE_SIZE


def default_config_path() -> Path:
    """Default config location under the XDG config directory."""
    return Path.home() / ".config" / "secrets-manager-client" / "config.yml"


def _get_config_path() -> str:
    """
    Get config file path.

    Priority order:
    1. SECRETS_MANAGER_CONFIG environment variable
    2. Default location: ~/.config/secrets-manager-client/config.yml

    Returns:
        Absolute path to config file

    Raises:
        FileNotFoundError: If config file doesn't exist in any location
    """
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        config_path = Path(env_path).expanduser()
        if config_path.exists():
            logger.debug(f"Using config from {CONFIG_ENV_VAR}: {config_path}")
            return str(config_path)
        else:
            logger.warning(f"Config path from {CONFIG_ENV_VAR} doesn't exist: {config_path}")

    default_config = default_config_path()
    if default_config.exists():
        logger.debug(f"Using default config location: {default_config}")
        return str(default_config)

    raise FileNotFoundError(
        "Configuration file not found. Create one using one of these methods:\n\n"
        "1. Use the default location:\n"
        f"   mkdir -p {default_config.parent}\n"
        f"   cp /path/to/your/config.yml {default_config}\n\n"
        "2. Point to an existing config file:\n"
        f"   export {CONFIG_ENV_VAR}=/path/to/your/config.yml\n"
    )


class ConfigError(Exception):
    """Configuration error exception."""
    pass


def _validate_aws_section(aws: Any, config_path: str) -> None:
    if not isinstance(aws, dict):
        raise ConfigError(
            f"'aws' section in config at {config_path} must be a mapping\n"
            f"Required format:\n"
            f"aws:\n"
            f"  profile: default\n"
            f"  region: us-east-2"
        )

    for key in ("profile", "region"):
        if key in aws and not isinstance(aws[key], str):
            raise ConfigError(f"'aws.{key}' must be a string, got: {aws[key]!r}")


def _is_integer(value: Any) -> bool:
    # bool is an int subclass
    return isinstance(value, int) and not isinstance(value, bool)


def is_valid_page_size(value: Any) -> bool:
    """True for an integer page size ListSecrets accepts."""
    return _is_integer(value) and 1 <= value <= MAX_PAGE_SIZE


def _validate_pagination_section(pagination: Any, config_path: str) -> None:
    if not isinstance(pagination, dict):
        raise ConfigError(f"'pagination' section in config at {config_path} must be a mapping")

    if "page_size" not in pagination:
        return

    page_size = pagination["page_size"]
    if not _is_integer(page_size):
        raise ConfigError(f"'pagination.page_size' must be an integer, got: {page_size!r}")

    if not is_valid_page_size(page_size):
        raise ConfigError(
            f"'pagination.page_size' must be between 1 and {MAX_PAGE_SIZE}, got: {page_size}"
        )


def load_config() -> Dict[str, Any]:
    """
    Load and validate configuration from YAML file.

    Returns:
        Dict containing configuration with optional keys:
        - aws: dict with profile and region
        - pagination: dict with page_size

    Raises:
        FileNotFoundError: If no config file exists
        ConfigError: If config file is unreadable or invalid
    """
    # Resolved on every call so a changed SECRETS_MANAGER_CONFIG takes effect immediately
    config_path = _get_config_path()

    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML config at {config_path}: {e}")
    except OSError as e:
        raise ConfigError(f"Failed to read config file at {config_path}: {e}")

    if not config:
        raise ConfigError(f"Config file at {config_path} is empty")

    if not isinstance(config, dict):
        raise ConfigError(f"Config file at {config_path} must contain a mapping at the top level")

    if "aws" in config:
        _validate_aws_section(config["aws"], config_path)

    if "pagination" in config:
        _validate_pagination_section(config["pagination"], config_path)

    logger.debug(f"Configuration loaded successfully from {config_path}")

    return config


def load_settings() -> Dict[str, Any]:
    """
    Load configuration if a config file exists.

    Returns:
        Validated configuration, or an empty dict when no config file is present

    Raises:
        ConfigError: If a config file exists but is invalid
    """
    try:
        return load_config()
    except FileNotFoundError:
        logger.debug("No config file found, using built-in defaults")
        return {}


def configured_page_size(config: Dict[str, Any]) -> int:
    """Page size from a loaded config, else DEFAULT_PAGE_SIZE."""
    return config.get("pagination", {}).get("page_size", DEFAULT_PAGE_SIZE)


def configured_profile(config: Dict[str, Any]):
    """Profile name from a loaded config, or None."""
    return config.get("aws", {}).get("profile")


def configured_region(config: Dict[str, Any]):
    """Region from a loaded config, or None."""
    return config.get("aws", {}).get("region")
