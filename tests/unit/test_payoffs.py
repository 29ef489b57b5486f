"""Tests for payoff resolution.

Test categories:
- TestResolveProfile: full-profile lookup used by the round simulator
- TestResolveMatchup: pairwise lookup used by the population engine
"""

import random

import pytest

from stratagem.engine.payoffs import resolve_matchup, resolve_profile
from stratagem.models import PayoffCell

PLAYERS = ["a", "b"]


class TestResolveProfile:
    """Tests for full-profile payoff resolution."""

    def test_exact_match(self, prisoners_dilemma):
        payoffs = resolve_profile(
            prisoners_dilemma.payoff_matrix,
            {"a": "Cooperate", "b": "Defect"},
            PLAYERS,
            random.Random(0),
        )
        assert payoffs == {"a": 0, "b": 5}

    def test_match_is_case_insensitive(self, prisoners_dilemma):
        payoffs = resolve_profile(
            prisoners_dilemma.payoff_matrix,
            {"a": "defect", "b": "DEFECT"},
            PLAYERS,
            random.Random(0),
        )
        assert payoffs == {"a": 1, "b": 1}

    def test_exact_match_draws_nothing(self, prisoners_dilemma):
        """A fully specified cell consumes no random numbers."""
        rng = random.Random(3)
        resolve_profile(prisoners_dilemma.payoff_matrix, {"a": "Defect", "b": "Defect"}, PLAYERS, rng)
        assert rng.random() == random.Random(3).random()

    def test_empty_table_synthesizes(self):
        payoffs = resolve_profile([], {"a": "X", "b": "Y"}, PLAYERS, random.Random(1))
        assert set(payoffs) == {"a", "b"}
        for value in payoffs.values():
            assert 2.0 <= value < 6.0

    def test_no_matching_cell_synthesizes(self, prisoners_dilemma):
        payoffs = resolve_profile(
            prisoners_dilemma.payoff_matrix,
            {"a": "Negotiate", "b": "Walk"},
            PLAYERS,
            random.Random(1),
        )
        for value in payoffs.values():
            assert 2.0 <= value < 6.0

    def test_missing_payoff_uses_missing_range(self):
        table = [PayoffCell(strategies={"a": "X", "b": "Y"}, payoffs={"a": 7.0})]
        payoffs = resolve_profile(table, {"a": "X", "b": "Y"}, PLAYERS, random.Random(2))
        assert payoffs["a"] == 7.0
        assert 4.0 <= payoffs["b"] < 6.0

    def test_ties_go_to_first_cell(self):
        table = [
            PayoffCell(strategies={"a": "X", "b": "Y"}, payoffs={"a": 1, "b": 1}),
            PayoffCell(strategies={"a": "X", "b": "Z"}, payoffs={"a": 2, "b": 2}),
        ]
        payoffs = resolve_profile(table, {"a": "X", "b": "W"}, PLAYERS, random.Random(0))
        assert payoffs == {"a": 1, "b": 1}

    def test_partial_match_beats_nothing(self):
        """A cell matching one of three players still wins over synthesis."""
        table = [PayoffCell(strategies={"a": "X"}, payoffs={"a": 9, "b": 8, "c": 7})]
        payoffs = resolve_profile(table, {"a": "X", "b": "Y", "c": "Z"}, ["a", "b", "c"], random.Random(0))
        assert payoffs == {"a": 9, "b": 8, "c": 7}

    def test_player_absent_from_table(self, prisoners_dilemma):
        """A third player never listed in the table gets a missing-range payoff."""
        payoffs = resolve_profile(
            prisoners_dilemma.payoff_matrix,
            {"a": "Cooperate", "b": "Cooperate", "c": "Cooperate"},
            ["a", "b", "c"],
            random.Random(4),
        )
        assert payoffs["a"] == 3
        assert payoffs["b"] == 3
        assert 4.0 <= payoffs["c"] < 6.0


class TestResolveMatchup:
    """Tests for pairwise matchup resolution."""

    def test_directional_payoffs(self, prisoners_dilemma):
        assert resolve_matchup(prisoners_dilemma.payoff_matrix, "Cooperate", "Defect", random.Random(0)) == (0, 5)

    def test_reverse_direction(self, prisoners_dilemma):
        """The first cell containing both names wins; slots are matched by name."""
        assert resolve_matchup(prisoners_dilemma.payoff_matrix, "Defect", "Cooperate", random.Random(0)) == (5, 0)

    def test_mirror_matchup_uses_mean(self, prisoners_dilemma):
        assert resolve_matchup(prisoners_dilemma.payoff_matrix, "Cooperate", "Cooperate", random.Random(0)) == (3, 3)
        assert resolve_matchup(prisoners_dilemma.payoff_matrix, "Defect", "Defect", random.Random(0)) == (1, 1)

    def test_asymmetric_mirror_cell_mean(self):
        table = [PayoffCell(strategies={"a": "X", "b": "X"}, payoffs={"a": 2, "b": 4})]
        assert resolve_matchup(table, "X", "X", random.Random(0)) == pytest.approx((3.0, 3.0))

    def test_unknown_strategies_synthesize(self, prisoners_dilemma):
        pa, pb = resolve_matchup(prisoners_dilemma.payoff_matrix, "Bluff", "Fold", random.Random(5))
        assert 2.0 <= pa < 6.0
        assert 2.0 <= pb < 6.0

    def test_cell_without_payoffs_synthesizes(self):
        table = [PayoffCell(strategies={"a": "X", "b": "Y"}, payoffs={})]
        pa, pb = resolve_matchup(table, "X", "Y", random.Random(5))
        assert 2.0 <= pa < 6.0
        assert 2.0 <= pb < 6.0

    def test_one_sided_match_gives_both_the_mean(self):
        """If either side cannot be located in the cell, both sides get its mean."""
        table = [PayoffCell(strategies={"a": "X", "b": "Y"}, payoffs={"a": 2, "b": 6})]
        assert resolve_matchup(table, "X", "Z", random.Random(0)) == pytest.approx((4.0, 4.0))
        assert resolve_matchup(table, "Z", "Y", random.Random(0)) == pytest.approx((4.0, 4.0))

    def test_located_slot_without_payoff_gives_both_the_mean(self):
        table = [PayoffCell(strategies={"a": "X", "b": "Y"}, payoffs={"a": 2, "c": 4})]
        assert resolve_matchup(table, "X", "Y", random.Random(0)) == pytest.approx((3.0, 3.0))

    def test_empty_table(self):
        pa, pb = resolve_matchup([], "X", "Y", random.Random(0))
        assert 2.0 <= pa < 6.0
        assert 2.0 <= pb < 6.0
