"""Tests for the command-line runner."""

import json

import pytest

from stratagem.cli import main


@pytest.fixture
def scenario_file(tmp_path):
    path = tmp_path / "dilemma.json"
    path.write_text(
        json.dumps(
            {
                "title": "Prisoner's Dilemma",
                "players": [
                    {"id": "a", "name": "Alice", "strategies": ["Cooperate", "Defect"]},
                    {"id": "b", "name": "Bob", "strategies": ["Cooperate", "Defect"]},
                ],
                "payoffMatrix": [
                    {"strategies": {"a": "Cooperate", "b": "Cooperate"}, "payoffs": {"a": 3, "b": 3}},
                    {"strategies": {"a": "Cooperate", "b": "Defect"}, "payoffs": {"a": 0, "b": 5}},
                    {"strategies": {"a": "Defect", "b": "Cooperate"}, "payoffs": {"a": 5, "b": 0}},
                    {"strategies": {"a": "Defect", "b": "Defect"}, "payoffs": {"a": 1, "b": 1}},
                ],
            }
        )
    )
    return path


class TestCommands:
    """Tests for each subcommand's happy path."""

    def test_rounds(self, scenario_file, capsys):
        code = main(["rounds", str(scenario_file), "--strategy", "tit-for-tat", "--noise", "0", "--seed", "1"])
        out = capsys.readouterr().out
        assert code == 0
        assert "Prisoner's Dilemma: 20 rounds, strategy=tit-for-tat" in out
        assert "Converged at round 1" in out
        assert "Alice" in out

    def test_population(self, scenario_file, capsys):
        code = main(["population", str(scenario_file), "--generations", "5", "--seed", "2"])
        out = capsys.readouterr().out
        assert code == 0
        assert "5 generations, population 100" in out
        assert "Dominant:" in out

    def test_tournament(self, scenario_file, capsys):
        code = main(["tournament", str(scenario_file), "--rounds", "5", "--seed", "3", "--sort", "alpha"])
        out = capsys.readouterr().out
        assert code == 0
        assert "replicator-dynamics" in out
        assert out.index("adaptive") < out.index("tit-for-tat")

    def test_sweep(self, scenario_file, capsys):
        code = main(["sweep", str(scenario_file), "--parameter", "rounds", "--seed", "4"])
        out = capsys.readouterr().out
        assert code == 0
        assert "Sensitivity to Rounds" in out


class TestErrors:
    """Tests for exit status on bad input."""

    def test_invalid_config(self, scenario_file, capsys):
        assert main(["rounds", str(scenario_file), "--rounds", "0"]) == 2
        assert "Invalid configuration" in capsys.readouterr().err

    def test_unknown_strategy(self, scenario_file):
        assert main(["rounds", str(scenario_file), "--strategy", "oracle"]) == 2

    def test_malformed_scenario(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        assert main(["rounds", str(path)]) == 2

    def test_missing_file(self, tmp_path, capsys):
        assert main(["rounds", str(tmp_path / "nope.json")]) == 2
        assert "Cannot read scenario" in capsys.readouterr().err

    def test_missing_subcommand(self):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 2
