"""Tests for the round simulator.

Test categories:
- TestRoundSimulator: lifecycle, policy assignment, strategy fallbacks
- TestRunRoundSimulation: end-to-end results, determinism, draw order
"""

import random
from collections.abc import Sequence

import pytest

from stratagem.engine.rounds import RoundSimulator, SimulationPhase, run_round_simulation
from stratagem.models import GameAnalysis, Player, SimulationConfig
from stratagem.policies import (
    Adaptive,
    BestResponse,
    FictitiousPlay,
    Greedy,
    Policy,
    PolicyContext,
    RandomChoice,
    ReplicatorDynamics,
    TitForTat,
)


class RecordingPolicy(Policy):
    """Plays the first strategy and records how much history it was shown."""

    def __init__(self):
        self.seen_history: list[int] = []

    def choose(self, player_id, strategies: Sequence[str], context: PolicyContext, rng):
        self.seen_history.append(len(context.history))
        return strategies[0]


class TestRoundSimulator:
    """Tests for RoundSimulator state management."""

    def test_lifecycle(self, prisoners_dilemma):
        simulator = RoundSimulator(prisoners_dilemma, SimulationConfig(rounds=3, seed=1))
        assert simulator.phase == SimulationPhase.RUNNING
        simulator.run()
        assert simulator.is_complete()
        assert len(simulator.get_history()) == 3

    def test_play_after_complete_raises(self, prisoners_dilemma):
        simulator = RoundSimulator(prisoners_dilemma, SimulationConfig(rounds=1, seed=1))
        simulator.play_round()
        with pytest.raises(RuntimeError):
            simulator.play_round()

    def test_mixed_assigns_round_robin(self):
        analysis = GameAnalysis(players=[Player(id=f"p{i}", strategies=["X", "Y"]) for i in range(9)])
        simulator = RoundSimulator(analysis, SimulationConfig(strategy="mixed", seed=1))
        expected = [
            TitForTat,
            Greedy,
            Adaptive,
            RandomChoice,
            BestResponse,
            FictitiousPlay,
            ReplicatorDynamics,
            TitForTat,
            Greedy,
        ]
        assert [type(simulator.policies[pid]) for pid in analysis.player_ids] == expected

    def test_single_policy_for_everyone(self, prisoners_dilemma):
        simulator = RoundSimulator(prisoners_dilemma, SimulationConfig(strategy="greedy"))
        assert all(isinstance(p, Greedy) for p in simulator.policies.values())

    def test_players_without_strategies_get_defaults(self):
        analysis = GameAnalysis(players=[Player(id="a"), Player(id="b")])
        simulator = RoundSimulator(analysis, SimulationConfig(rounds=5, seed=2))
        assert simulator.strategies["a"] == ["Cooperate", "Defect"]
        for record in simulator.run():
            assert set(record.strategies.values()) <= {"Cooperate", "Defect"}

    def test_policy_sees_only_completed_rounds(self, prisoners_dilemma):
        simulator = RoundSimulator(prisoners_dilemma, SimulationConfig(rounds=4, noise=0.0, seed=1))
        recorder = RecordingPolicy()
        simulator.policies["a"] = recorder
        simulator.run()
        assert recorder.seen_history == [0, 1, 2, 3]

    def test_analysis_not_modified(self, prisoners_dilemma):
        before = prisoners_dilemma.model_dump()
        RoundSimulator(prisoners_dilemma, SimulationConfig(rounds=10, seed=3)).run()
        assert prisoners_dilemma.model_dump() == before


class TestRunRoundSimulation:
    """Tests for the run_round_simulation entry point."""

    def test_tit_for_tat_cooperates_forever(self, prisoners_dilemma):
        config = SimulationConfig(rounds=20, noise=0.0, strategy="tit-for-tat", seed=0)
        result = run_round_simulation(prisoners_dilemma, config)

        assert len(result.rounds) == 20
        assert all(r.strategies == {"a": "Cooperate", "b": "Cooperate"} for r in result.rounds)
        assert result.final_payoffs == {"a": 60.0, "b": 60.0}
        assert result.convergence.converged
        assert result.convergence.equilibrium_round == 1

    def test_round_numbers_are_one_based(self, prisoners_dilemma):
        result = run_round_simulation(prisoners_dilemma, SimulationConfig(rounds=7, seed=4))
        assert [r.round for r in result.rounds] == list(range(1, 8))

    def test_cumulative_payoffs_are_running_sums(self, prisoners_dilemma):
        result = run_round_simulation(prisoners_dilemma, SimulationConfig(rounds=25, noise=0.3, seed=5))
        previous = {"a": 0.0, "b": 0.0}
        for record in result.rounds:
            for pid in previous:
                assert record.cumulative_payoffs[pid] == previous[pid] + record.payoffs[pid]
            previous = record.cumulative_payoffs

    def test_choices_are_legal(self, three_player_analysis):
        config = SimulationConfig(rounds=30, noise=0.5, strategy="mixed", seed=6)
        result = run_round_simulation(three_player_analysis, config)
        for record in result.rounds:
            assert set(record.strategies) == {"a", "b", "c"}
            assert set(record.strategies.values()) <= {"Hold", "Fold"}

    @pytest.mark.parametrize(
        "strategy",
        [
            "tit-for-tat",
            "greedy",
            "adaptive",
            "random",
            "best-response",
            "fictitious-play",
            "replicator-dynamics",
            "mixed",
        ],
    )
    def test_same_seed_same_result(self, prisoners_dilemma, strategy):
        config = SimulationConfig(rounds=30, noise=0.2, strategy=strategy, seed=42)
        first = run_round_simulation(prisoners_dilemma, config)
        second = run_round_simulation(prisoners_dilemma, config)
        assert first.rounds == second.rounds
        assert first.convergence == second.convergence

    def test_explicit_rng_overrides_seed(self, prisoners_dilemma):
        config = SimulationConfig(rounds=15, strategy="random", seed=1)
        first = run_round_simulation(prisoners_dilemma, config, random.Random(99))
        second = run_round_simulation(prisoners_dilemma, config.model_copy(update={"seed": 2}), random.Random(99))
        assert first.rounds == second.rounds

    def test_draw_order(self, prisoners_dilemma):
        """Per player: policy draw, then one noise draw; resolution of a full cell draws nothing."""
        config = SimulationConfig(rounds=1, noise=0.0, strategy="random")
        result = run_round_simulation(prisoners_dilemma, config, random.Random(11))

        replay = random.Random(11)
        strategies = ["Cooperate", "Defect"]
        expected_a = replay.choice(strategies)
        replay.random()
        expected_b = replay.choice(strategies)
        replay.random()

        assert result.rounds[0].strategies == {"a": expected_a, "b": expected_b}

    def test_full_noise_still_legal(self, prisoners_dilemma):
        config = SimulationConfig(rounds=50, noise=1.0, strategy="tit-for-tat", seed=8)
        result = run_round_simulation(prisoners_dilemma, config)
        picks = {s for r in result.rounds for s in r.strategies.values()}
        assert picks == {"Cooperate", "Defect"}

    def test_empty_table_synthesizes_payoffs(self, empty_table_analysis):
        result = run_round_simulation(empty_table_analysis, SimulationConfig(rounds=10, seed=9))
        for record in result.rounds:
            for value in record.payoffs.values():
                assert 2.0 <= value < 6.0

    def test_no_players(self):
        result = run_round_simulation(GameAnalysis(), SimulationConfig(rounds=3, seed=1))
        assert len(result.rounds) == 3
        assert result.final_payoffs == {}
        assert result.narrative == ""

    def test_result_carries_descriptions(self, prisoners_dilemma):
        result = run_round_simulation(prisoners_dilemma, SimulationConfig(rounds=20, strategy="greedy", seed=3))
        assert result.insights
        assert result.narrative
        assert set(result.strategy_narrative) == {"a", "b"}
        assert result.config.strategy == "greedy"
        assert result.analysis is prisoners_dilemma
