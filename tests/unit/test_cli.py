"""
Integration tests for CLI commands.

Tests the basic functionality of CLI commands and error handling.
"""

import json
import tempfile
from pathlib import Path

from typer.testing import CliRunner

from envkeeper.cli import app
from tests.env_strategies import write_tree

runner = CliRunner()


class TestCLIHelp:
    """Test CLI help and usage information."""

    def test_main_help(self):
        """Main help should display available commands."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("scan", "show", "set", "unset", "check"):
            assert command in result.output

    def test_scan_help(self):
        result = runner.invoke(app, ["scan", "--help"])

        assert result.exit_code == 0
        assert "Directory to scan" in result.output
        assert "--json" in result.output

    def test_set_help(self):
        result = runner.invoke(app, ["set", "--help"])

        assert result.exit_code == 0
        assert "--root" in result.output
        assert "--backup" in result.output


class TestScanCommand:
    def test_scan_json(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir).resolve()
            write_tree(root, {"api/.env": "A=1\n", "api/node_modules/.env": "B=2\n"})

            result = runner.invoke(app, ["scan", str(root), "--json"])

            assert result.exit_code == 0
            data = json.loads(result.output)
            assert data["rootPath"] == str(root)
            assert [g["name"] for g in data["groups"]] == ["api"]
            assert data["groups"][0]["envFiles"][0]["fileName"] == ".env"

    def test_scan_table(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            write_tree(Path(tmpdir), {"api/.env": "", "api/.env.local": ""})

            result = runner.invoke(app, ["scan", tmpdir])

            assert result.exit_code == 0
            assert ".env.local" in result.output
            assert "Found 2 file(s) in 1 project group(s)." in result.output

    def test_scan_empty(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            result = runner.invoke(app, ["scan", tmpdir])

            assert result.exit_code == 0
            assert "No .env files found" in result.output

    def test_scan_missing_root(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            result = runner.invoke(app, ["scan", str(Path(tmpdir) / "missing")])

            assert result.exit_code == 1
            assert "InvalidRootPath" in result.output


class TestShowCommand:
    def test_values_masked_by_default(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            write_tree(root, {".env": "TOKEN=supersecret\n"})

            result = runner.invoke(app, ["show", str(root / ".env"), "--root", tmpdir])

            assert result.exit_code == 0
            assert "TOKEN" in result.output
            assert "supersecret" not in result.output
            assert "su*" in result.output

    def test_reveal(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            write_tree(root, {".env": "TOKEN=supersecret\n"})

            result = runner.invoke(app, ["show", str(root / ".env"), "-r", tmpdir, "--reveal"])

            assert result.exit_code == 0
            assert "supersecret" in result.output

    def test_show_json(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            write_tree(root, {".env": "# note\nexport A=1"})

            result = runner.invoke(app, ["show", str(root / ".env"), "-r", tmpdir, "--json"])

            assert result.exit_code == 0
            data = json.loads(result.output)
            assert [line["kind"] for line in data["lines"]] == ["comment", "kv"]
            assert data["lines"][1]["hasExport"] is True

    def test_file_outside_root_is_rejected(self):
        with tempfile.TemporaryDirectory() as outside, tempfile.TemporaryDirectory() as tmpdir:
            write_tree(Path(tmpdir), {".env": ""})
            write_tree(Path(outside), {".env": "SECRET=1"})

            result = runner.invoke(app, ["show", str(Path(outside) / ".env"), "-r", tmpdir])

            assert result.exit_code == 1
            assert "PathNotAllowed" in result.output
            assert "SECRET" not in result.output

    def test_key_filter(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            write_tree(root, {".env": "# db\nDB_HOST=localhost\nAPI_KEY=abc\ndb_port=5432\n"})

            result = runner.invoke(
                app, ["show", str(root / ".env"), "-r", tmpdir, "--key", "db", "--reveal"]
            )

            assert result.exit_code == 0
            assert "DB_HOST" in result.output
            assert "db_port" in result.output
            assert "API_KEY" not in result.output
            assert "# db" not in result.output

    def test_key_filter_json(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            write_tree(root, {".env": "# db\nDB_HOST=localhost\nAPI_KEY=abc\n"})

            result = runner.invoke(
                app, ["show", str(root / ".env"), "-r", tmpdir, "-k", "Host", "--json"]
            )

            assert result.exit_code == 0
            data = json.loads(result.output)
            assert [line["key"] for line in data["lines"]] == ["DB_HOST"]


class TestEditCommands:
    def test_set_updates_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            env_file = Path(tmpdir) / ".env"
            env_file.write_text("# db\nA=1\n\nB=2\n")

            result = runner.invoke(app, ["set", str(env_file), "A", "9", "-r", tmpdir])

            assert result.exit_code == 0
            assert "Saved .env" in result.output
            assert env_file.read_text() == "# db\nA=9\n\nB=2\n"
            assert sorted(p.name for p in Path(tmpdir).iterdir()) == [".env"]

    def test_set_adds_after_last_assignment(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            env_file = Path(tmpdir) / ".env"
            env_file.write_text("A=1\n# trailing\n")

            result = runner.invoke(app, ["set", str(env_file), "NEW", "x", "-r", tmpdir])

            assert result.exit_code == 0
            assert env_file.read_text() == "A=1\nNEW=x\n# trailing\n"
            assert "+ NEW" in result.output

    def test_set_with_backup(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            env_file = Path(tmpdir) / ".env"
            env_file.write_text("A=1\n")

            result = runner.invoke(
                app, ["set", str(env_file), "A", "2", "-r", tmpdir, "--backup"]
            )

            assert result.exit_code == 0
            backups = [p for p in Path(tmpdir).iterdir() if p.name.startswith("..env.backup-")]
            assert len(backups) == 1
            assert backups[0].read_text() == "A=1\n"
            assert "Backup:" in result.output

    def test_set_rejects_multiline_value(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            env_file = Path(tmpdir) / ".env"
            env_file.write_text("A=1\n")

            for value in ["x\nEVIL=1", "x\r"]:
                result = runner.invoke(app, ["set", str(env_file), "A", value, "-r", tmpdir])

                assert result.exit_code == 2
                assert env_file.read_text() == "A=1\n"

    def test_set_rejects_invalid_key(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            env_file = Path(tmpdir) / ".env"
            env_file.write_text("A=1\n")

            for key in ["1BAD KEY", "A=B"]:
                result = runner.invoke(app, ["set", str(env_file), key, "1", "-r", tmpdir])

                assert result.exit_code == 2
                assert env_file.read_text() == "A=1\n"
                assert sorted(p.name for p in Path(tmpdir).iterdir()) == [".env"]

    def test_unset_removes_key(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            env_file = Path(tmpdir) / ".env"
            env_file.write_text("A=1\nB=2\nA=3\n")

            result = runner.invoke(app, ["unset", str(env_file), "A", "-r", tmpdir])

            assert result.exit_code == 0
            assert env_file.read_text() == "B=2\n"
            assert "- A" in result.output

    def test_unset_missing_key_leaves_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            env_file = Path(tmpdir) / ".env"
            env_file.write_text("B=2\n")

            result = runner.invoke(app, ["unset", str(env_file), "A", "-r", tmpdir])

            assert result.exit_code == 0
            assert "A is not set" in result.output
            assert env_file.read_text() == "B=2\n"


class TestCheckCommand:
    def test_clean_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            env_file = Path(tmpdir) / ".env"
            env_file.write_text("# ok\nA=1\n")

            result = runner.invoke(app, ["check", str(env_file), "-r", tmpdir])

            assert result.exit_code == 0
            assert "no problems found" in result.output

    def test_reports_problems(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            env_file = Path(tmpdir) / ".env"
            env_file.write_text("A=1\nA=2\noops\n")

            result = runner.invoke(app, ["check", str(env_file), "-r", tmpdir])

            assert result.exit_code == 1
            assert "Duplicate key: A" in result.output
            assert "Line 3" in result.output


class TestCLIErrorHandling:
    """Test CLI error handling for invalid inputs."""

    def test_scan_missing_path(self):
        result = runner.invoke(app, ["scan"])

        assert result.exit_code != 0

    def test_show_requires_root(self):
        result = runner.invoke(app, ["show", ".env"])

        assert result.exit_code != 0

    def test_missing_config_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            result = runner.invoke(
                app, ["--config", str(Path(tmpdir) / "absent.yaml"), "scan", tmpdir]
            )

            assert result.exit_code == 1
            assert "not found" in result.output

    def test_config_enables_backup_by_default(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir) / "proj"
            write_tree(root, {".env": "A=1\n"})
            config_path = Path(tmpdir) / "envkeeper.yaml"
            config_path.write_text("writer:\n  create_backup: true\n")

            result = runner.invoke(
                app, ["-c", str(config_path), "set", str(root / ".env"), "A", "2", "-r", str(root)]
            )

            assert result.exit_code == 0
            assert any(p.name.startswith("..env.backup-") for p in root.iterdir())

    def test_invalid_command(self):
        """Invalid command should show error."""
        result = runner.invoke(app, ["invalid_command"])

        assert result.exit_code != 0
