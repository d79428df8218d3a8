"""Tests for the homepress command line."""

from click.testing import CliRunner

from homepress.cli import cli


class TestInitDb:
    def test_creates_tables(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("SECRET_KEY", "test-secret")
        (tmp_path / "app.yaml").write_text("db:\n  url: sqlite+aiosqlite:///./cli.db\n")

        result = CliRunner().invoke(cli, ["init-db"])

        assert result.exit_code == 0, result.output
        assert "Created tables" in result.output
        assert (tmp_path / "cli.db").exists()


class TestHelp:
    def test_lists_commands(self):
        result = CliRunner().invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "serve" in result.output
        assert "init-db" in result.output
