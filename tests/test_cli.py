"""Tests for the command line interface."""

from click.testing import CliRunner

from storefront_admin import __version__
from storefront_admin.cli import cli


def test_version():
    result = CliRunner().invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_help_lists_commands():
    result = CliRunner().invoke(cli, ["--help"])

    assert result.exit_code == 0
    for command in ("serve", "migrate", "create-role", "create-admin"):
        assert command in result.output


def test_migrate_missing_config(tmp_path):
    result = CliRunner().invoke(cli, ["migrate", "--config", str(tmp_path / "missing.ini")])

    assert result.exit_code == 1
    assert "Alembic config not found" in result.output
