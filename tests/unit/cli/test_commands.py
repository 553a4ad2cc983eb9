"""Unit tests for the command line interface"""
import sqlite3

from click.testing import CliRunner

from branchpoint import __version__
from branchpoint.cli.main import cli


class TestCli:
    """Tests for CLI commands"""

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_db_create_all(self, tmp_path):
        """Test create-all builds the documents table"""
        db_path = tmp_path / "cli.db"

        result = CliRunner().invoke(
            cli, ["db", "create-all", "--url", f"sqlite+aiosqlite:///{db_path}"]
        )

        assert result.exit_code == 0, result.output
        with sqlite3.connect(db_path) as conn:
            tables = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
        assert "documents" in tables
