"""Tests for the secrets CLI commands and argument validators."""
import json
from argparse import Namespace

import pytest

from secrets_manager_client.cli import main as cli
from secrets_manager_client.cli import validators


def run_get(secret_id, quiet=False):
    with pytest.raises(SystemExit) as exc_info:
        cli.cmd_secrets_get(Namespace(secret_id=secret_id, quiet=quiet, profile=None))
    return exc_info.value.code


class TestValidators:

    @pytest.mark.parametrize("secret_id", [
        "Org/Dev/App/Svc/1",
        "arn:aws:secretsmanager:us-east-2:123456789012:secret:name-AbCdEf",
        "db_password+v2@prod",
    ])
    def test_valid_secret_ids(self, secret_id):
        validators.validate_secret_id(secret_id)

    @pytest.mark.parametrize("secret_id", ["", "has space", "bad$char"])
    def test_invalid_secret_ids(self, secret_id):
        with pytest.raises(SystemExit) as exc_info:
            validators.validate_secret_id(secret_id)

        assert exc_info.value.code == 2

    def test_validate_address_returns_parameter(self):
        assert validators.validate_address("Org/Dev/Svc/1").service == "Svc"

    def test_validate_address_rejects_bad_shape(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            validators.validate_address("Org/Dev")

        assert exc_info.value.code == 2
        assert "Address format" in capsys.readouterr().err

    def test_empty_secret_value(self):
        with pytest.raises(SystemExit) as exc_info:
            validators.validate_secret_value("   ")

        assert exc_info.value.code == 2

    @pytest.mark.parametrize("days", [6, 31])
    def test_recovery_days_out_of_range(self, days):
        with pytest.raises(SystemExit) as exc_info:
            validators.validate_recovery_days(days)

        assert exc_info.value.code == 2

    def test_unknown_filter(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            validators.validate_filter("owner")

        assert exc_info.value.code == 2
        assert "primary-region" in capsys.readouterr().err


class TestSecretsCommands:

    def test_get_structured_value(self, fake_session, fake_backend, capsys):
        fake_backend.create_secret(Name="Org/Dev/Svc/1", SecretString='{"k": "v"}')

        assert run_get("Org/Dev/Svc/1", quiet=True) == 0
        assert json.loads(capsys.readouterr().out) == {"k": "v"}

    def test_get_raw_value_verbose(self, fake_session, fake_backend, capsys):
        fake_backend.create_secret(Name="Org/Dev/Svc/1", SecretString="plain")

        assert run_get("Org/Dev/Svc/1") == 0
        assert capsys.readouterr().out.strip() == "Secret 'Org/Dev/Svc/1': plain"

    def test_get_missing_secret(self, fake_session, capsys):
        assert run_get("Org/Dev/Svc/missing") == 1
        assert "not found" in capsys.readouterr().err

    def test_get_binary_only_secret(self, fake_session, fake_backend, capsys):
        fake_backend.create_secret(Name="Org/Dev/Svc/bin", SecretBinary=b"\x01")

        assert run_get("Org/Dev/Svc/bin") == 1
        assert "no string value" in capsys.readouterr().err

    def test_get_json_null_value(self, fake_session, fake_backend, capsys):
        fake_backend.create_secret(Name="Org/Dev/Svc/null", SecretString="null")

        assert run_get("Org/Dev/Svc/null", quiet=True) == 0
        assert capsys.readouterr().out.strip() == "null"

    def test_create_then_list(self, fake_session, fake_backend, capsys):
        cli.cmd_secrets_create(Namespace(
            address="Org/Dev/App/Svc/1", description="d", value="v", overwrite=False, profile=None,
        ))
        assert "Created secret 'Org/Dev/App/Svc/1'" in capsys.readouterr().out

        cli.cmd_secrets_list(Namespace(profile=None))

        listed = json.loads(capsys.readouterr().out)
        assert [entry["name"] for entry in listed] == ["Org/Dev/App/Svc/1"]
        assert {"key": "Application", "value": "App"} in listed[0]["tags"]

    def test_list_output_has_no_secret_values(self, fake_session, fake_backend, capsys):
        fake_backend.create_secret(Name="Org/Dev/Svc/1", SecretString="hunter2")

        cli.cmd_secrets_list(Namespace(profile=None))

        assert "hunter2" not in capsys.readouterr().out

    def test_search(self, fake_session, fake_backend, capsys):
        fake_backend.create_secret(Name="Org/Dev/Svc/1", SecretString="v")
        fake_backend.create_secret(Name="Other/Dev/Svc/1", SecretString="v")

        cli.cmd_secrets_search(Namespace(filter="name", values=["Org/"], profile=None))

        assert [entry["name"] for entry in json.loads(capsys.readouterr().out)] == ["Org/Dev/Svc/1"]

    def test_delete(self, fake_session, fake_backend, capsys):
        fake_backend.create_secret(Name="Org/Dev/Svc/1", SecretString="v")

        cli.cmd_secrets_delete(Namespace(secret_id="Org/Dev/Svc/1", recovery_days=14, profile=None))

        assert "14 days" in capsys.readouterr().out
        assert fake_backend.calls[-1][1]["RecoveryWindowInDays"] == 14

    def test_delete_rejects_recovery_window_without_backend_call(self, fake_session, fake_backend):
        with pytest.raises(SystemExit) as exc_info:
            cli.cmd_secrets_delete(Namespace(secret_id="Org/Dev/Svc/1", recovery_days=3, profile=None))

        assert exc_info.value.code == 2
        assert fake_backend.calls == []

    def test_methods(self, capsys):
        cli.cmd_secrets_methods(Namespace())

        assert capsys.readouterr().out.split() == [
            "create", "list", "get", "rotate", "cancel", "delete",
            "describe", "tag", "random", "update", "untag",
        ]


class TestMain:

    def test_no_command_is_usage_error(self, monkeypatch):
        monkeypatch.setattr("sys.argv", ["secrets-manager"])

        with pytest.raises(SystemExit) as exc_info:
            cli.main()

        assert exc_info.value.code == 2

    def test_version(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.argv", ["secrets-manager", "version"])

        cli.main()

        assert cli.VERSION in capsys.readouterr().out

    def test_runtime_errors_exit_1(self, monkeypatch, fake_session, fake_backend, make_client_error, capsys):
        def fail(**params):
            raise make_client_error("ThrottlingException", 429, "ListSecrets", "Rate exceeded")

        fake_backend.list_secrets = fail
        monkeypatch.setattr("sys.argv", ["secrets-manager", "secrets", "list"])

        with pytest.raises(SystemExit) as exc_info:
            cli.main()

        assert exc_info.value.code == 1
        assert "Rate exceeded" in capsys.readouterr().err
