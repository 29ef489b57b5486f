"""Shared pytest fixtures and markers for all tests."""

import pytest

from stratagem.models import GameAnalysis, PayoffCell, Player


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


def make_cell(strategies: dict, payoffs: dict) -> PayoffCell:
    return PayoffCell(strategies=strategies, payoffs=payoffs)


def two_player_analysis(
    strategies: list[str],
    cells: list[tuple[str, str, float, float]],
    **kwargs,
) -> GameAnalysis:
    """Build a two-player scenario (ids "a" and "b") from (sa, sb, pa, pb) rows."""
    return GameAnalysis(
        players=[
            Player(id="a", name="Alice", strategies=strategies),
            Player(id="b", name="Bob", strategies=strategies),
        ],
        payoff_matrix=[make_cell({"a": sa, "b": sb}, {"a": pa, "b": pb}) for sa, sb, pa, pb in cells],
        **kwargs,
    )


@pytest.fixture
def prisoners_dilemma():
    """Classic prisoner's dilemma: T=5, R=3, P=1, S=0."""
    return two_player_analysis(
        ["Cooperate", "Defect"],
        [
            ("Cooperate", "Cooperate", 3, 3),
            ("Cooperate", "Defect", 0, 5),
            ("Defect", "Cooperate", 5, 0),
            ("Defect", "Defect", 1, 1),
        ],
        title="Prisoner's Dilemma",
        game_type="prisoners_dilemma",
        nash_equilibrium="Both players defect.",
    )


@pytest.fixture
def dominance_game():
    """Strong strictly dominates Weak in pairwise play."""
    return two_player_analysis(
        ["Strong", "Weak"],
        [
            ("Strong", "Strong", 5, 5),
            ("Strong", "Weak", 6, 0),
            ("Weak", "Strong", 0, 6),
            ("Weak", "Weak", 0.5, 0.5),
        ],
    )


@pytest.fixture
def empty_table_analysis():
    """Two players with strategies but no payoff cells at all."""
    return two_player_analysis(["Left", "Right"], [])


@pytest.fixture
def three_player_analysis():
    """Three players sharing a partial table."""
    strategies = ["Hold", "Fold"]
    return GameAnalysis(
        title="Standoff",
        players=[
            Player(id="a", name="Ann", strategies=strategies),
            Player(id="b", name="Ben", strategies=strategies),
            Player(id="c", name="Cat", strategies=strategies),
        ],
        payoff_matrix=[
            make_cell({"a": "Hold", "b": "Hold", "c": "Hold"}, {"a": 2, "b": 2, "c": 2}),
            make_cell({"a": "Fold", "b": "Hold", "c": "Hold"}, {"a": 1, "b": 3, "c": 3}),
            make_cell({"a": "Hold", "b": "Fold", "c": "Fold"}, {"a": 4, "b": 1, "c": 1}),
            make_cell({"a": "Fold", "b": "Fold", "c": "Fold"}, {"a": 1, "b": 1, "c": 1}),
        ],
    )
