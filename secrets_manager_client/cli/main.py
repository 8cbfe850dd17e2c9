"""CLI entrypoint for secrets-manager-client."""
import os
import sys
import json
import argparse
import logging

from .validators import (
    validate_address,
    validate_filter,
    validate_recovery_days,
    validate_secret_id,
    validate_secret_value,
)

VERSION = "0.1.0"

# Configure logging to stderr
logging.basicConfig(
    level=logging.WARNING,
    format="%(message)s",
    stream=sys.stderr
)
logger = logging.getLogger(__name__)


def _print_json(value):
    print(json.dumps(value, indent=2, default=str))


def _service(args):
    from secrets_manager_client.secrets.workflows.secret_operations import SecretService

    return SecretService(profile=getattr(args, "profile", None))


def cmd_version(args):
    """Show version information."""
    print(f"secrets-manager-client {VERSION}")


def cmd_config_show(args):
    """Show current config file path."""
    from secrets_manager_client.secrets.domains.config_loader import CONFIG_ENV_VAR, default_config_path

    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        if os.path.exists(env_path):
            print(f"Config path: {env_path}")
            print(f"Source: {CONFIG_ENV_VAR}")
            return
        print(f"Config path (from {CONFIG_ENV_VAR}, but file not found): {env_path}")

    default_config = default_config_path()
    if default_config.exists():
        print(f"Config path: {default_config}")
        print("Source: default")
    else:
        print(f"Config path: {default_config}")
        print("Source: default (file not found)")


def cmd_secrets_get(args):
    """Get a secret from AWS Secrets Manager."""
    from secrets_manager_client.secrets.domains.errors import SecretNotFoundError

    validate_secret_id(args.secret_id)

    try:
        secret = _service(args).get_secret(args.secret_id)
    except SecretNotFoundError:
        print(f"Error: Secret '{args.secret_id}' not found", file=sys.stderr)
        sys.exit(1)

    if not secret.secret:
        print(f"Error: Secret '{args.secret_id}' has no string value", file=sys.stderr)
        sys.exit(1)

    value = secret.serialize()

    if isinstance(value, str):
        rendered = value
    elif args.quiet:
        rendered = json.dumps(value)
    else:
        rendered = json.dumps(value, indent=2)

    if args.quiet:
        # Quiet mode: output only value, no formatting
        print(rendered)
    else:
        print(f"Secret '{args.secret_id}': {rendered}")
    sys.exit(0)


def cmd_secrets_list(args):
    """List all secrets."""
    collection = _service(args).list()
    _print_json([summary.to_dict() for summary in collection])


def cmd_secrets_search(args):
    """Search secrets by filter."""
    validate_filter(args.filter)
    collection = _service(args).search(args.filter, args.values or None)
    _print_json([summary.to_dict() for summary in collection])


def cmd_secrets_create(args):
    """Create a secret from an address."""
    parameter = validate_address(args.address)
    validate_secret_value(args.value)

    secret = _service(args).create(parameter, args.description, args.value, overwrite=args.overwrite)
    print(f"Created secret '{secret.name}' ({secret.id}), version {secret.version}")


def cmd_secrets_delete(args):
    """Schedule a secret for deletion."""
    validate_secret_id(args.secret_id)
    validate_recovery_days(args.recovery_days)

    _service(args).delete(args.secret_id, args.recovery_days)
    print(f"Secret '{args.secret_id}' scheduled for deletion in {args.recovery_days} days")


def cmd_secrets_methods(args):
    """Show supported backend operations."""
    from secrets_manager_client.secrets.domains.aws_client import Client

    for name in Client().methods():
        print(name)


def _add_profile_argument(parser):
    parser.add_argument(
        "--profile",
        help="AWS profile name (defaults to config file 'aws.profile', then 'default')"
    )


def main():
    """Main CLI entrypoint.

    Exit codes:
        0 - Success
        1 - Runtime errors (credentials, network, secret not found, etc.)
        2 - Usage errors (invalid arguments, invalid address, etc.)
    """
    parser = argparse.ArgumentParser(
        prog="secrets-manager",
        description="secrets-manager-client CLI - AWS Secrets Manager access toolkit",
        epilog="""
Exit codes:
  0 - Success
  1 - Runtime error (credentials, network, secret not found, etc.)
  2 - Usage error (invalid arguments, invalid address, etc.)

Environment variables:
  AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY - Access keys (take precedence over profiles)
  AWS_DEFAULT_REGION - Region (defaults to config file, then us-east-2)
  SECRETS_MANAGER_CONFIG - Config file path

Configuration:
  Default location: ~/.config/secrets-manager-client/config.yml
  View current: Run 'secrets-manager config show'
        """
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log diagnostic metadata to stderr (never secret values)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # version command
    _version_parser = subparsers.add_parser(
        "version",
        help="Show version information",
        description="Display the current version of secrets-manager-client"
    )

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="Configuration management",
        description="Inspect secrets-manager-client configuration"
    )
    config_subparsers = config_parser.add_subparsers(dest="config_command")

    # config show command
    _config_show_parser = config_subparsers.add_parser(
        "show",
        help="Show current config path",
        description="""
Display the current configuration file path and its source.

Sources:
  - SECRETS_MANAGER_CONFIG: Path set via environment variable
  - default: Default XDG location (~/.config/secrets-manager-client/config.yml)
        """
    )

    # secrets command
    secrets_parser = subparsers.add_parser(
        "secrets",
        help="Secret management operations",
        description="Manage secrets in AWS Secrets Manager"
    )
    secrets_subparsers = secrets_parser.add_subparsers(dest="secrets_command")

    # secrets get command
    get_parser = secrets_subparsers.add_parser(
        "get",
        help="Get a secret value",
        description="""
Fetch a secret from AWS Secrets Manager.

JSON values are pretty-printed; other values are printed as stored.

Exit codes:
  0 - Secret found and printed
  1 - Secret not found, or it has no string value
  2 - Invalid secret id format
        """
    )
    get_parser.add_argument(
        "secret_id",
        help="Secret name, address or ARN"
    )
    get_parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Output only the secret value (useful for scripts)"
    )
    _add_profile_argument(get_parser)

    # secrets list command
    list_parser = secrets_subparsers.add_parser(
        "list",
        help="List all secrets",
        description="List every secret in the account as JSON (metadata only, no values)"
    )
    _add_profile_argument(list_parser)

    # secrets search command
    search_parser = secrets_subparsers.add_parser(
        "search",
        help="Search secrets by filter",
        description="""
List secrets matching a filter as JSON (metadata only, no values).

Filters: description, name, tag-key, tag-value, primary-region, all
        """
    )
    search_parser.add_argument(
        "filter",
        help="Filter key"
    )
    search_parser.add_argument(
        "values",
        nargs="*",
        help="Values to match (omit to list everything)"
    )
    _add_profile_argument(search_parser)

    # secrets create command
    create_parser = secrets_subparsers.add_parser(
        "create",
        help="Create a secret",
        description="""
Create a secret named after its address and tagged with each address segment.

Address format: Organization/Environment/[Application/]Service/Identifier
        """
    )
    create_parser.add_argument("address", help="Secret address")
    create_parser.add_argument("description", help="Secret description")
    create_parser.add_argument("value", help="Secret value")
    create_parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Overwrite a secret with the same name in replica regions"
    )
    _add_profile_argument(create_parser)

    # secrets delete command
    delete_parser = secrets_subparsers.add_parser(
        "delete",
        help="Schedule a secret for deletion",
        description="Schedule a secret for deletion after a 7 to 30 day recovery window"
    )
    delete_parser.add_argument("secret_id", help="Secret name, address or ARN")
    delete_parser.add_argument(
        "--recovery-days",
        type=int,
        default=7,
        help="Days before the secret is permanently deleted (7-30, default: 7)"
    )
    _add_profile_argument(delete_parser)

    # secrets methods command
    _methods_parser = secrets_subparsers.add_parser(
        "methods",
        help="List supported backend operations",
        description="Display the backend operations the client can build requests for"
    )

    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    # If no command provided, show help and exit with usage error code
    if not args.command:
        parser.print_help()
        sys.exit(2)

    secrets_commands = {
        "get": cmd_secrets_get,
        "list": cmd_secrets_list,
        "search": cmd_secrets_search,
        "create": cmd_secrets_create,
        "delete": cmd_secrets_delete,
        "methods": cmd_secrets_methods,
    }

    # Route to command handlers
    try:
        if args.command == "version":
            cmd_version(args)
        elif args.command == "config":
            if args.config_command == "show":
                cmd_config_show(args)
            else:
                config_parser.print_help()
                sys.exit(2)
        elif args.command == "secrets":
            if args.secrets_command in secrets_commands:
                secrets_commands[args.secrets_command](args)
            else:
                secrets_parser.print_help()
                sys.exit(2)
        else:
            parser.print_help()
            sys.exit(2)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
