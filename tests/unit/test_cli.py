"""Tests for CLI argument handling that doesn't need a database."""

from click.testing import CliRunner

from adyax_ws.cli.main import cli


def test_help_lists_groups():
    result = CliRunner().invoke(cli, ["--help"])

    assert result.exit_code == 0
    for command in ("schema", "type", "serve"):
        assert command in result.output


def test_type_create_rejects_bad_machine_name():
    """Bad names are refused before any connection is made."""
    result = CliRunner().invoke(cli, ["type", "create", "Not Valid"])

    assert result.exit_code == 1
    assert "Error: Content type may only contain lowercase letters" in result.output
