"""Input validation for CLI arguments."""
import re
import sys

from secrets_manager_client.secrets.domains.errors import InvalidAddressError, RecoveryWindowError
from secrets_manager_client.secrets.domains.parameter import AddressParameter
from secrets_manager_client.secrets.workflows.secret_operations import FILTER_KINDS, validate_recovery_window

# Secret names allow letters, digits and /_+=.@-; ARNs add ':'
SECRET_ID_PATTERN = r'^[a-zA-Z0-9/_+=.@:-]+$'


def validate_secret_id(secret_id: str) -> None:
    """
    Validate a secret name or ARN.

    Args:
        secret_id: Secret name or ARN to validate

    Raises:
        SystemExit with code 2 if validation fails
    """
    if not secret_id:
        print("Error: Secret id cannot be empty", file=sys.stderr)
        sys.exit(2)

    if not re.match(SECRET_ID_PATTERN, secret_id):
        print(f"Error: Invalid secret id '{secret_id}'", file=sys.stderr)
        print("\nAllowed characters: letters, numbers and / _ + = . @ -", file=sys.stderr)
        print("\nExamples of valid ids:", file=sys.stderr)
        print("  ✓ Organization/Environment/Application/Service/Identifier", file=sys.stderr)
        print("  ✓ arn:aws:secretsmanager:us-east-2:123456789012:secret:name-AbCdEf", file=sys.stderr)
        sys.exit(2)


def validate_address(address: str) -> AddressParameter:
    """
    Validate a secret address for creation.

    Returns:
        Parsed AddressParameter

    Raises:
        SystemExit with code 2 if validation fails
    """
    try:
        return AddressParameter.parse(address)
    except InvalidAddressError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("\nAddress format: Organization/Environment/[Application/]Service/Identifier", file=sys.stderr)
        sys.exit(2)


def validate_secret_value(value: str) -> None:
    """
    Validate secret value is not empty.

    Raises:
        SystemExit with code 2 if validation fails
    """
    if not value or value.strip() == "":
        print("Error: Secret value cannot be empty", file=sys.stderr)
        sys.exit(2)


def validate_recovery_days(days: int) -> None:
    """
    Validate a deletion recovery window.

    Raises:
        SystemExit with code 2 if validation fails
    """
    try:
        validate_recovery_window(days)
    except RecoveryWindowError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)


def validate_filter(filter_kind: str) -> None:
    """
    Validate a search filter key.

    Raises:
        SystemExit with code 2 if validation fails
    """
    if filter_kind not in FILTER_KINDS:
        print(f"Error: Unsupported filter '{filter_kind}'", file=sys.stderr)
        print(f"\nAllowed filters: {', '.join(FILTER_KINDS)}", file=sys.stderr)
        sys.exit(2)
