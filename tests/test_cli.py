"""Tests for the radio-accuracy CLI."""

import json

import pytest
from typer.testing import CliRunner

from radio_accuracy import __version__
from radio_accuracy.cli import app
from radio_accuracy.config import CONFIG_ENV_VAR, ScoringConfig, save_scoring_config


runner = CliRunner()


@pytest.fixture(autouse=True)
def no_env_config(monkeypatch):
    """Keep a developer's config out of the tests."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


class TestMainOptions:
    """Tests for global options."""

    def test_version(self):
        """--version prints the version."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help(self):
        """Help lists the commands."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("score", "variants", "scenarios", "batch"):
            assert command in result.output


class TestScoreCommand:
    """Tests for 'radio-accuracy score'."""

    def test_score_code(self):
        """A spoken code alias scores 100."""
        result = runner.invoke(app, ["score", "ten four", "10-4", "--category", "codes"])

        assert result.exit_code == 0
        assert "Score: 100 (excellent)" in result.output
        assert "Excellent! Perfect pronunciation." in result.output

    def test_score_json(self):
        """--json prints the full result."""
        result = runner.invoke(
            app, ["score", "whiskey", "W", "--category", "phonetic", "--json"]
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["score"] == 100
        assert data["category"] == "excellent"
        assert data["matches"][0]["expected"] == "w"

    def test_score_no_partial_credit(self):
        """Near misses get nothing without partial credit."""
        result = runner.invoke(
            app,
            ["score", "alphx", "A", "--category", "phonetic", "--no-partial-credit", "--json"],
        )

        assert json.loads(result.stdout)["score"] == 0

    def test_score_strict(self):
        """--strict tightens plain word matching."""
        result = runner.invoke(
            app, ["score", "requestin backup", "requesting backup", "--strict", "--json"]
        )

        assert json.loads(result.stdout)["score"] == 95

    def test_score_suggestions(self):
        """Mismatches print suggestions."""
        result = runner.invoke(app, ["score", "xyz", "10-4", "--category", "codes"])

        assert result.exit_code == 0
        assert "Suggestions" in result.output
        assert "was not recognized" in result.output

    def test_score_with_config(self, tmp_path):
        """--config changes the thresholds used."""
        config_path = save_scoring_config(
            tmp_path / "scoring.json", ScoringConfig(strict_token_match_threshold=85)
        )

        result = runner.invoke(
            app,
            [
                "--config",
                str(config_path),
                "score",
                "requestin backup",
                "requesting backup",
                "--strict",
                "--json",
            ],
        )

        assert json.loads(result.stdout)["score"] == 100

    def test_score_missing_config(self, tmp_path):
        """A missing config file exits with an error."""
        result = runner.invoke(
            app, ["--config", str(tmp_path / "missing.json"), "score", "a", "a"]
        )

        assert result.exit_code == 1
        assert "[resource]" in result.output


class TestVariantsCommand:
    """Tests for 'radio-accuracy variants'."""

    def test_code_variants(self):
        """Lists the spoken forms of a code."""
        result = runner.invoke(app, ["variants", "codes", "10-4"])

        assert result.exit_code == 0
        assert "ten four" in result.output
        assert "ten-four" in result.output

    def test_phonetic_variants(self):
        """Lists the words for a letter."""
        result = runner.invoke(app, ["variants", "phonetic", "x"])

        assert result.exit_code == 0
        assert "x-ray" in result.output
        assert "xray" in result.output

    def test_unknown_key(self):
        """Unknown keys fall back to themselves with a note."""
        result = runner.invoke(app, ["variants", "codes", "10-33"])

        assert result.exit_code == 0
        assert "not in the table" in result.output
        assert "10-33" in result.output

    def test_whole_table(self):
        """No key lists the whole table."""
        result = runner.invoke(app, ["variants", "codes"])

        assert result.exit_code == 0
        assert "10-99" in result.output

    def test_unknown_table(self):
        """Unknown table names exit with an error."""
        result = runner.invoke(app, ["variants", "semaphore", "A"])

        assert result.exit_code == 1
        assert "Unknown table" in result.output


class TestScenariosCommands:
    """Tests for 'radio-accuracy scenarios'."""

    def test_list(self):
        """Lists the built-in scenarios."""
        result = runner.invoke(app, ["scenarios", "list"])

        assert result.exit_code == 0
        assert "basic-abc" in result.output
        assert "emergency-10-33" in result.output

    def test_list_filtered(self):
        """Filters by category."""
        result = runner.invoke(app, ["scenarios", "list", "--category", "codes"])

        assert result.exit_code == 0
        assert "emergency-10-33" in result.output
        assert "basic-abc" not in result.output

    def test_list_invalid_filter(self):
        """Bad filter values exit with an error."""
        result = runner.invoke(app, ["scenarios", "list", "--difficulty", "extreme"])

        assert result.exit_code == 1

    def test_list_from_file(self, tmp_path):
        """Scenarios can come from a file."""
        path = tmp_path / "scenarios.json"
        path.write_text(
            json.dumps(
                [
                    {
                        "id": "custom-1",
                        "title": "Custom Drill",
                        "instruction": "Acknowledge the transmission",
                        "targetText": "10-4",
                        "expectedAnswer": "10-4",
                        "category": "CODES",
                    }
                ]
            )
        )

        result = runner.invoke(app, ["scenarios", "list", "--file", str(path)])

        assert result.exit_code == 0
        assert "custom-1" in result.output

    def test_practice(self):
        """Practice scores a transcript against a scenario."""
        result = runner.invoke(
            app, ["scenarios", "practice", "basic-abc", "alpha bravo charlie"]
        )

        assert result.exit_code == 0
        assert "Score: 100 (excellent)" in result.output

    def test_practice_json_payload(self):
        """--json prints the session payload."""
        result = runner.invoke(
            app,
            [
                "scenarios",
                "practice",
                "basic-abc",
                "alpha bravo charlie",
                "--duration",
                "4",
                "--json",
            ],
        )

        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["scenarioId"] == "basic-abc"
        assert payload["duration"] == 4.0
        assert payload["accuracy"]["category"] == "EXCELLENT"

    def test_practice_unknown_scenario(self):
        """Unknown scenario ids exit with an error."""
        result = runner.invoke(app, ["scenarios", "practice", "nope", "alpha"])

        assert result.exit_code == 1
        assert "Unknown scenario" in result.output


class TestBatchCommand:
    """Tests for 'radio-accuracy batch'."""

    def test_batch(self, tmp_path):
        """Scores a file and writes the report."""
        input_path = tmp_path / "attempts.json"
        input_path.write_text(
            json.dumps(
                [
                    {"transcript": "ten four", "expected_answer": "10-4", "category": "codes"},
                    {"transcript": "alpha bravo charlie", "scenario_id": "basic-abc"},
                    {"expected_answer": "missing transcript"},
                ]
            )
        )
        output_path = tmp_path / "report.json"

        result = runner.invoke(app, ["batch", str(input_path), "--output", str(output_path)])

        assert result.exit_code == 0
        assert "Completed: 2" in result.output
        assert "Failed: 1" in result.output

        report = json.loads(output_path.read_text())
        assert report["summary"]["mean_score"] == 100.0
        assert [r["status"] for r in report["results"]] == ["completed", "completed", "failed"]

    def test_batch_missing_file(self, tmp_path):
        """A missing input file exits with an error."""
        result = runner.invoke(app, ["batch", str(tmp_path / "missing.json")])

        assert result.exit_code == 1
        assert "[resource]" in result.output

    def test_batch_directory_input(self, tmp_path):
        """A directory given as the input file exits with an error."""
        result = runner.invoke(app, ["batch", str(tmp_path)])

        assert result.exit_code == 1
        assert "[resource]" in result.output
