"""Tests for the Typer CLI."""

import asyncio

import pytest
from typer.testing import CliRunner

from tollgate.presentation.cli.app import app, create_user
from tollgate_identity.domain.user import EmailAlreadyExistsError, UserRole

runner = CliRunner()


@pytest.fixture
def cli_env(monkeypatch, database_url):
    monkeypatch.setenv(
        "ACCESS_TOKEN_SECRET",
        "cli-access-secret-0123456789-abcdefghij",
    )
    monkeypatch.setenv(
        "REFRESH_TOKEN_SECRET",
        "cli-refresh-secret-0123456789-abcdefghij",
    )
    monkeypatch.setenv("DATABASE_URL", database_url)
    monkeypatch.setenv("BCRYPT_ROUNDS", "4")


class TestSecretsGenerate:
    def test_prints_distinct_secrets(self):
        result = runner.invoke(app, ["secrets", "generate"])

        assert result.exit_code == 0
        values = {}
        for line in result.output.splitlines():
            if "=" in line and line.split("=", 1)[0].isupper():
                key, value = line.split("=", 1)
                values[key] = value
        assert set(values) == {
            "ACCESS_TOKEN_SECRET",
            "REFRESH_TOKEN_SECRET",
            "POSTGRES_PASSWORD",
        }
        assert values["ACCESS_TOKEN_SECRET"] != values["REFRESH_TOKEN_SECRET"]
        assert len(values["ACCESS_TOKEN_SECRET"]) >= 32


class TestUsersCreate:
    def test_creates_admin(self, cli_env):
        result = runner.invoke(
            app,
            ["users", "create", "root@example.com", "--role", "ADMIN"],
            input="SecurePassword123!\nSecurePassword123!\n",
        )

        assert result.exit_code == 0, result.output
        assert "root@example.com" in result.output
        assert "ADMIN" in result.output

    def test_duplicate_email_exits_nonzero(self, cli_env):
        args = ["users", "create", "dup@example.com", "--password", "SecurePass123"]

        first = runner.invoke(app, args)
        second = runner.invoke(app, args)

        assert first.exit_code == 0, first.output
        assert second.exit_code == 1
        assert "already registered" in second.output

    def test_weak_password_exits_nonzero(self, cli_env):
        result = runner.invoke(
            app,
            ["users", "create", "weak@example.com", "--password", "short"],
        )

        assert result.exit_code == 1
        assert "at least 8" in result.output


class TestCreateUserHelper:
    def test_created_user_can_be_verified(self, make_settings):
        settings = make_settings()

        user = asyncio.run(
            create_user(settings, "mod@example.com", "SecurePass123", UserRole.MODERATOR),
        )

        assert user.role == UserRole.MODERATOR
        assert user.id >= 1

    def test_duplicate_raises(self, make_settings):
        settings = make_settings()
        asyncio.run(
            create_user(settings, "x@example.com", "SecurePass123", UserRole.USER),
        )

        with pytest.raises(EmailAlreadyExistsError):
            asyncio.run(
                create_user(settings, "x@example.com", "SecurePass123", UserRole.USER),
            )
