"""Tests for the tessera CLI, run against a temporary SQLite database."""

import re

import pytest
from typer.testing import CliRunner

from tessera_identity.presentation.cli import app

runner = CliRunner()

ACCOUNT_ID = re.compile(r"\b[0-9a-f]{32}\b")


@pytest.fixture(autouse=True)
def sqlite_database(tmp_path, monkeypatch):
    monkeypatch.setenv("DATABASE_DSN", f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    monkeypatch.setenv("COLUMNS", "200")
    result = runner.invoke(app, ["db", "init"])
    assert result.exit_code == 0, result.output


def _create(email: str) -> str:
    result = runner.invoke(app, ["accounts", "create", email])
    assert result.exit_code == 0, result.output
    return ACCOUNT_ID.search(result.output).group(0)


class TestAccountsCommands:
    def test_create_and_show(self):
        account_id = _create("cli@example.com")

        result = runner.invoke(app, ["accounts", "show", account_id])

        assert result.exit_code == 0
        assert "cli@example.com" in result.output
        assert "No linked identities" in result.output

    def test_duplicate_create_fails(self):
        _create("cli@example.com")

        result = runner.invoke(app, ["accounts", "create", "cli@example.com"])

        assert result.exit_code == 1
        assert "EMAIL_ALREADY_EXISTS" in result.output

    def test_search(self):
        _create("findme@example.com")

        result = runner.invoke(app, ["accounts", "search", "findme"])

        assert result.exit_code == 0
        assert "findme@example.com" in result.output

    def test_status_and_soft_delete(self):
        account_id = _create("cli@example.com")

        result = runner.invoke(app, ["accounts", "status", account_id, "suspended"])
        assert result.exit_code == 0
        assert "SUSPENDED" in result.output

        result = runner.invoke(app, ["accounts", "delete", account_id])
        assert result.exit_code == 0

        result = runner.invoke(app, ["accounts", "status", account_id, "ACTIVE"])
        assert result.exit_code == 1
        assert "INVALID_TRANSITION" in result.output

    def test_purge(self):
        account_id = _create("cli@example.com")

        result = runner.invoke(app, ["accounts", "delete", account_id, "--purge"])
        assert result.exit_code == 0

        result = runner.invoke(app, ["accounts", "show", account_id])
        assert result.exit_code == 1
        assert "ACCOUNT_NOT_FOUND" in result.output


class TestLinksCommands:
    def test_unlink_without_link(self):
        account_id = _create("cli@example.com")

        result = runner.invoke(app, ["links", "unlink", account_id, "google"])

        assert result.exit_code == 1
        assert "LINKED_IDENTITY_NOT_FOUND" in result.output

    def test_list_empty(self):
        account_id = _create("cli@example.com")

        result = runner.invoke(app, ["links", "list", account_id, "--active"])

        assert result.exit_code == 0
        assert "No linked identities" in result.output


class TestDbCommands:
    def test_reset_requires_confirmation(self):
        result = runner.invoke(app, ["db", "reset"], input="n\n")

        assert result.exit_code == 1
        assert "Aborted" in result.output

    def test_reset_force_clears_data(self):
        account_id = _create("cli@example.com")

        result = runner.invoke(app, ["db", "reset", "--force"])
        assert result.exit_code == 0

        result = runner.invoke(app, ["accounts", "show", account_id])
        assert result.exit_code == 1
