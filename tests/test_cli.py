"""Tests for the strata command line interface."""

import json
import logging
import os
from unittest.mock import patch

import pytest

from strata.cli.main import StrataCLI, _flatten


SAMPLE_CSV = "node_id,f0,f1\ngen.0.1,1.0,2.0\ngen.0.1,3.0,4.0\ngen.2,5.0,6.0\n"
CLASSED_CSV = (
    "node_id,true_class,f0,f1\n"
    "gen.0.1,gen.0.1,1.0,2.0\n"
    "gen.0.1,gen.0.0,3.0,4.0\n"
    "gen.2,gen.2,5.0,6.0\n"
)


class TestCLICommands:
    """Test CLI command execution."""

    @pytest.fixture(autouse=True)
    def isolated(self, tmp_path, monkeypatch):
        """Run every command in an empty directory without user config."""
        monkeypatch.chdir(tmp_path)
        for key in list(os.environ):
            if key.startswith("STRATA_"):
                monkeypatch.delenv(key)
        with patch("strata.config.loader.USER_CONFIG_PATH", tmp_path / "user.toml"):
            yield
        logger = logging.getLogger("strata")
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)

    @pytest.fixture
    def cli(self):
        """Create a CLI instance."""
        return StrataCLI()

    @pytest.fixture
    def sample(self, tmp_path):
        path = tmp_path / "sample.csv"
        path.write_text(SAMPLE_CSV)
        return path

    @pytest.fixture
    def classed(self, tmp_path):
        path = tmp_path / "classed.csv"
        path.write_text(CLASSED_CSV)
        return path

    def test_no_command_prints_help(self, cli, capsys):
        assert cli.run([]) == 0
        assert "usage" in capsys.readouterr().out

    # === Repair ===

    def test_repair_to_stdout(self, cli, sample, capsys):
        result = cli.run(["repair", str(sample)])

        assert result == 0
        assert capsys.readouterr().out.splitlines() == [
            "node_id,f0,f1",
            "gen.0.1,1.0,2.0",
            "gen.0.1,3.0,4.0",
            "gen.2,5.0,6.0",
        ]

    def test_repair_stdout_reads_back(self, cli, sample, tmp_path, capsys):
        assert cli.run(["repair", str(sample), "--fix-breadth"]) == 0
        written = tmp_path / "written.csv"
        written.write_text(capsys.readouterr().out)

        assert cli.run(["show", str(written), "--fix-breadth"]) == 0
        assert capsys.readouterr().out.splitlines() == [
            "gen * (0)",
            "  gen.0 * (0)",
            "    gen.0.0 * (0)",
            "    gen.0.1 (2)",
            "  gen.1 * (0)",
            "  gen.2 (1)",
        ]

    def test_repair_writes_csv(self, cli, classed, tmp_path, capsys):
        output = tmp_path / "out.csv"

        result = cli.run(["repair", str(classed), "--true-class", "-o", str(output)])

        assert result == 0
        assert "Wrote 4 nodes (2 artificial)" in capsys.readouterr().out
        lines = output.read_text().splitlines()
        assert lines[0] == "node_id,true_class,f0,f1"
        assert lines[1] == "gen.0.1,gen.0.1,1.0,2.0"
        assert len(lines) == 4

    def test_repair_writes_json(self, cli, sample, tmp_path):
        output = tmp_path / "out.json"
        assert cli.run(["repair", str(sample), "--format", "json", "-o", str(output)]) == 0
        data = json.loads(output.read_text())
        assert data["root"]["id"] == "gen"
        assert data["stats"]["total_nodes"] == 4

    def test_repair_json_to_stdout(self, cli, sample, capsys):
        assert cli.run(["repair", str(sample), "--format", "json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert [child["id"] for child in data["root"]["children"]] == ["gen.0", "gen.2"]

    def test_repair_missing_file(self, cli, tmp_path, capsys):
        result = cli.run(["repair", str(tmp_path / "missing.csv")])
        assert result == 1
        assert "Error:" in capsys.readouterr().err

    def test_repair_unrelated_identifier(self, cli, tmp_path, capsys):
        path = tmp_path / "bad.csv"
        path.write_text("id,f0\ngen.0,1\norphan,2\n")

        result = cli.run(["repair", str(path)])

        assert result == 1
        assert "Could not find nearest parent for 'orphan'" in capsys.readouterr().err

    def test_repair_no_header_and_delimiter(self, cli, tmp_path, capsys):
        path = tmp_path / "plain.csv"
        path.write_text("gen.1;7\n")
        assert cli.run(["repair", str(path), "--no-header", "--delimiter", ";"]) == 0
        assert capsys.readouterr().out.splitlines() == ["gen.1;7.0"]

    def test_project_config_applies(self, cli, sample, tmp_path, capsys):
        (tmp_path / "strata.toml").write_text("[builder]\nfix_breadth_gaps = true\n")
        assert cli.run(["show", str(sample)]) == 0
        assert "  gen.1 * (0)" in capsys.readouterr().out.splitlines()

    def test_explicit_config_file(self, cli, sample, tmp_path, capsys):
        config = tmp_path / "other.toml"
        config.write_text("[builder]\nfix_breadth_gaps = true\n")
        assert cli.run(["--config", str(config), "show", str(sample)]) == 0
        assert "  gen.1 * (0)" in capsys.readouterr().out.splitlines()

    # === Show ===

    def test_show_tree(self, cli, sample, capsys):
        assert cli.run(["show", str(sample)]) == 0
        assert capsys.readouterr().out.splitlines() == [
            "gen * (0)",
            "  gen.0 * (0)",
            "    gen.0.1 (2)",
            "  gen.2 (1)",
        ]

    def test_show_max_depth(self, cli, sample, capsys):
        assert cli.run(["show", str(sample), "--max-depth", "1"]) == 0
        assert capsys.readouterr().out.splitlines() == [
            "gen * (0)",
            "  gen.0 * (0)",
            "  gen.2 (1)",
        ]

    # === Stats ===

    def test_stats_text(self, cli, sample, capsys):
        assert cli.run(["stats", str(sample)]) == 0
        out = capsys.readouterr().out
        assert "Nodes:            4" in out
        assert "artificial:     2" in out
        assert "Depth:            2" in out
        assert "Instances:        3" in out

    def test_stats_json(self, cli, classed, capsys):
        assert cli.run(["stats", str(classed), "--true-class", "--json"]) == 0
        stats = json.loads(capsys.readouterr().out)
        assert stats["leaf_nodes"] == 2
        assert stats["dimensions"] == 2
        assert stats["level_distribution"] == {"0": 1, "1": 2, "2": 1}
        assert stats["class_counts"] == {"gen.0.0": 1, "gen.0.1": 1, "gen.2": 1}

    # === Config ===

    def test_config_list(self, cli, capsys):
        assert cli.run(["config", "--list"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert "builder.fix_breadth_gaps = False" in out
        assert "identifiers.root_id = 'gen'" in out

    def test_config_get(self, cli, capsys):
        assert cli.run(["config", "--get", "csv.delimiter"]) == 0
        assert capsys.readouterr().out.strip() == ","

    def test_config_get_unknown(self, cli, capsys):
        assert cli.run(["config", "--get", "csv.nothing"]) == 1
        assert "Unknown configuration key" in capsys.readouterr().err

    def test_config_validate(self, cli, capsys):
        assert cli.run(["config", "--validate"]) == 0
        assert "Configuration is valid" in capsys.readouterr().out

    def test_config_validate_invalid(self, cli, tmp_path, capsys):
        (tmp_path / "strata.toml").write_text('[logging]\nlevel = "LOUD"\n')
        assert cli.run(["config", "--validate"]) == 1
        assert "error: logging.level" in capsys.readouterr().out

    def test_environment_override(self, cli, monkeypatch, capsys):
        monkeypatch.setenv("STRATA_CSV_DELIMITER", ";")
        assert cli.run(["config", "--get", "csv.delimiter"]) == 0
        assert capsys.readouterr().out.strip() == ";"


def test_flatten():
    assert _flatten({"a": {"b": 1, "c": {"d": None}}, "e": "x"}) == {
        "a.b": 1,
        "a.c.d": None,
        "e": "x",
    }
