from unittest.mock import patch

from click.testing import CliRunner

from outletbase.cli import cli
from outletbase.core.config import Settings
from outletbase.infrastructure.auth import jwt_service


def make_settings(**overrides) -> Settings:
    values = {"_env_file": None, "environment": "development", "log_format": "console"}
    values.update(overrides)
    return Settings(**values)


def test_serve_rejects_multiple_workers_with_sqlite():
    runner = CliRunner()

    with patch("outletbase.cli.get_settings", return_value=make_settings()), patch(
        "uvicorn.run"
    ) as mock_run:
        result = runner.invoke(cli, ["serve", "--workers", "2", "--no-reload"])

    assert result.exit_code == 1
    assert "SQLite does not support multiple worker processes" in result.output
    mock_run.assert_not_called()


def test_serve_starts_uvicorn():
    runner = CliRunner()

    with patch("outletbase.cli.get_settings", return_value=make_settings()), patch(
        "uvicorn.run"
    ) as mock_run:
        result = runner.invoke(cli, ["serve", "--port", "9000"])

    assert result.exit_code == 0
    mock_run.assert_called_once()
    kwargs = mock_run.call_args.kwargs
    assert kwargs["port"] == 9000
    assert kwargs["reload"] is True
    assert kwargs["workers"] == 1


def test_issue_token_prints_valid_token():
    runner = CliRunner()

    result = runner.invoke(
        cli, ["issue-token", "--user-id", "owner-1", "--email", "owner@example.com"]
    )

    assert result.exit_code == 0
    payload = jwt_service.validate_access_token(result.output.strip())
    assert payload["sub"] == "owner-1"
    assert payload["email"] == "owner@example.com"


def test_issue_token_disabled_in_production():
    runner = CliRunner()

    with patch(
        "outletbase.cli.get_settings", return_value=make_settings(environment="production")
    ):
        result = runner.invoke(
            cli, ["issue-token", "--user-id", "owner-1", "--email", "owner@example.com"]
        )

    assert result.exit_code == 1


def test_info_shows_service_area_mode():
    runner = CliRunner()

    with patch("outletbase.cli.get_settings", return_value=make_settings(service_area_mode="postal")):
        result = runner.invoke(cli, ["info"])

    assert result.exit_code == 0
    assert "Mode:         postal" in result.output
