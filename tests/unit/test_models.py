"""Tests for scenario and configuration models."""

import json

import pytest
from pydantic import ValidationError

from stratagem.models import (
    GameAnalysis,
    PolicyName,
    PopulationConfig,
    SimulationConfig,
    normalize_policy_name,
)

SCENARIO_JSON = json.dumps(
    {
        "title": "Price War",
        "gameType": "prisoners_dilemma",
        "nashEquilibrium": "Both cut prices.",
        "players": [
            {"id": "acme", "name": "Acme", "strategies": ["Hold", "Cut"]},
            {"id": "globex", "strategies": ["Hold", "Cut"]},
        ],
        "payoffMatrix": [
            {"strategies": {"acme": "Hold", "globex": "Hold"}, "payoffs": {"acme": 3, "globex": 3}},
            {"strategies": {"acme": "Cut", "globex": "Hold"}, "payoffs": {"acme": 5}},
        ],
    }
)


class TestGameAnalysis:
    """Tests for parsing upstream scenario JSON."""

    def test_camel_case_keys(self):
        analysis = GameAnalysis.model_validate_json(SCENARIO_JSON)
        assert analysis.game_type == "prisoners_dilemma"
        assert analysis.nash_equilibrium == "Both cut prices."
        assert len(analysis.payoff_matrix) == 2
        assert analysis.payoff_matrix[1].payoffs == {"acme": 5.0}

    def test_player_ids_and_names(self):
        analysis = GameAnalysis.model_validate_json(SCENARIO_JSON)
        assert analysis.player_ids == ["acme", "globex"]
        assert analysis.name_of("acme") == "Acme"
        assert analysis.name_of("globex") == "globex"
        assert analysis.name_of("initech") == "initech"

    def test_snake_case_keys(self):
        analysis = GameAnalysis(game_type="chicken", payoff_matrix=[])
        assert analysis.game_type == "chicken"

    def test_frozen(self):
        analysis = GameAnalysis(title="x")
        with pytest.raises(ValidationError):
            analysis.title = "y"


class TestSimulationConfig:
    """Tests for round simulation configuration."""

    def test_defaults(self):
        config = SimulationConfig()
        assert config.rounds == 20
        assert config.noise == 0.1
        assert config.learning_rate == 0.3
        assert config.strategy == "adaptive"
        assert config.seed is None
        assert not config.is_mixed

    def test_camel_case(self):
        config = SimulationConfig.model_validate({"learningRate": 0.5, "strategy": "Best Response"})
        assert config.learning_rate == 0.5
        assert config.strategy == "best-response"

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("Tit_For_Tat", "tit-for-tat"),
            (" GREEDY ", "greedy"),
            ("mixed", "mixed"),
            (PolicyName.FICTITIOUS_PLAY, "fictitious-play"),
        ],
    )
    def test_strategy_normalized(self, raw, expected):
        assert SimulationConfig(strategy=raw).strategy == expected

    def test_mixed(self):
        assert SimulationConfig(strategy="Mixed").is_mixed

    @pytest.mark.parametrize(
        "field,value",
        [
            ("rounds", 0),
            ("noise", -0.1),
            ("noise", 1.5),
            ("learning_rate", 2.0),
            ("strategy", "oracle"),
            ("strategy", 3),
        ],
    )
    def test_rejects_invalid(self, field, value):
        with pytest.raises(ValidationError):
            SimulationConfig(**{field: value})

    def test_normalize_policy_name(self):
        assert normalize_policy_name("Replicator Dynamics") == "replicator-dynamics"


class TestPopulationConfig:
    """Tests for population simulation configuration."""

    def test_defaults(self):
        config = PopulationConfig()
        assert config.population_size == 100
        assert config.generations == 50
        assert config.mutation_rate == 0.02
        assert config.selection_pressure == 0.5

    def test_camel_case(self):
        config = PopulationConfig.model_validate({"populationSize": 40, "selectionPressure": 1.0})
        assert config.population_size == 40
        assert config.selection_pressure == 1.0

    @pytest.mark.parametrize(
        "field,value",
        [
            ("population_size", 0),
            ("generations", 0),
            ("mutation_rate", 1.1),
            ("selection_pressure", -0.5),
        ],
    )
    def test_rejects_invalid(self, field, value):
        with pytest.raises(ValidationError):
            PopulationConfig(**{field: value})
