"""Integration tests for the click CLI."""

import json

from click.testing import CliRunner

from storygraph.cli import cli


class TestViewCommand:

    def test_writes_view(self, ndjson_file, tmp_path):
        output = tmp_path / "view.json"
        result = CliRunner().invoke(
            cli, ["view", "full", "--input", str(ndjson_file), "--output", str(output)]
        )
        assert result.exit_code == 0
        data = json.loads(output.read_text())
        assert data["mode"] == "full"
        assert data["stats"]["totalAssets"] == 2

    def test_community_view(self, ndjson_file, tmp_path):
        output = tmp_path / "view.json"
        result = CliRunner().invoke(
            cli, ["view", "community", "-i", str(ndjson_file), "-o", str(output)]
        )
        assert result.exit_code == 0
        data = json.loads(output.read_text())
        assert data["nodes"] == []
        assert data["stats"]["totalGroups"] == 1

    def test_missing_input(self, tmp_path):
        result = CliRunner().invoke(cli, ["view", "optimized", "-i", str(tmp_path / "nope.ndjson")])
        assert result.exit_code == 1

    def test_unknown_mode(self, ndjson_file):
        result = CliRunner().invoke(cli, ["view", "sideways", "-i", str(ndjson_file)])
        assert result.exit_code == 2


class TestStatsCommand:

    def test_stats(self, ndjson_file):
        result = CliRunner().invoke(cli, ["stats", "-i", str(ndjson_file)])
        assert result.exit_code == 0
        assert "Total Assets: 2" in result.output


class TestConfigCommand:

    def test_config(self):
        result = CliRunner().invoke(cli, ["config"])
        assert result.exit_code == 0
        assert "Asset Source:" in result.output
