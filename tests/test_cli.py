"""
Command line tests
"""

import pytest
from click.testing import CliRunner

from storelink import main
from storelink.api.security import decode_token


@pytest.fixture
def runner(monkeypatch, test_settings) -> CliRunner:
    monkeypatch.setattr(main, "settings", test_settings)
    return CliRunner()


class TestCreateToken:
    def test_backend_token(self, runner, test_settings):
        result = runner.invoke(main.cli, ["create-token", "--email", "admin@example.com", "--customer-id", "cust-admin"])

        assert result.exit_code == 0
        payload = decode_token(result.output.strip(), test_settings.backend_api)
        assert payload["Email"] == "admin@example.com"
        assert payload["CustomerId"] == "cust-admin"

    def test_frontend_token(self, runner, test_settings):
        result = runner.invoke(
            main.cli, ["create-token", "--email", "a@example.com", "--customer-id", "c-1", "--frontend"]
        )

        assert result.exit_code == 0
        assert decode_token(result.output.strip(), test_settings.frontend_api)["CustomerId"] == "c-1"

    def test_email_is_required(self, runner):
        result = runner.invoke(main.cli, ["create-token", "--customer-id", "c-1"])

        assert result.exit_code == 2


class TestRicardoCheck:
    def test_missing_credentials(self, runner, test_settings):
        test_settings.ricardo.partner_id = None

        result = runner.invoke(main.cli, ["ricardo-test"])

        assert result.exit_code == 1

    def test_successful_login(self, runner, ricardo_api):
        result = runner.invoke(main.cli, ["ricardo-test"])

        assert result.exit_code == 0
        assert ricardo_api["security"].called

    def test_failed_login(self, runner, ricardo_api):
        ricardo_api["security"].respond(status_code=503)

        result = runner.invoke(main.cli, ["ricardo-test"])

        assert result.exit_code == 1
