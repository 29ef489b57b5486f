"""Reactive policies: random, greedy, tit-for-tat and adaptive.

These policies look at most at the previous round (or a running tally of
the player's own payoffs) and need no model of the payoff table beyond
hypothetical lookups.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import ClassVar

from stratagem.models.analysis import PlayerId, StrategyName
from stratagem.models.config import PolicyName
from stratagem.policies.base import (
    Policy,
    PolicyContext,
    best_hypothetical_strategy,
    weighted_choice,
)


class RandomChoice(Policy):
    """Uniform choice over legal strategies, every round."""

    name: ClassVar[PolicyName] = PolicyName.RANDOM
    description: ClassVar[str] = (
        "In this simulation, every player picked their move completely at random each "
        "round, like flipping a coin. This helps us see what happens when nobody is "
        "trying to be strategic at all."
    )

    def choose(
        self,
        player_id: PlayerId,
        strategies: Sequence[StrategyName],
        context: PolicyContext,
        rng: random.Random,
    ) -> StrategyName:
        return rng.choice(strategies)


class Greedy(Policy):
    """Myopic best reply to the previous round.

    For each legal strategy, evaluate the payoff the player would have
    received had they played it while everyone else repeated last round.
    Uniform choice when there is no previous round.
    """

    name: ClassVar[PolicyName] = PolicyName.GREEDY
    description: ClassVar[str] = (
        "Each player always went with whatever move worked best for them last time. "
        "It's the simplest \"smart\" strategy: just repeat what paid off. The downside? "
        "If everyone does this, they can get stuck in a rut."
    )

    def choose(
        self,
        player_id: PlayerId,
        strategies: Sequence[StrategyName],
        context: PolicyContext,
        rng: random.Random,
    ) -> StrategyName:
        last_round = context.last_round
        if last_round is None:
            return rng.choice(strategies)
        return best_hypothetical_strategy(player_id, strategies, last_round, context, rng)


class TitForTat(Policy):
    """Reciprocator - Axelrod's famous strategy, generalized to n players.

    First round: the player's first strategy (the cooperative default).
    Later rounds: mirror the most common opponent choice from the previous
    round if the player has a strategy of that name, else the default.
    """

    name: ClassVar[PolicyName] = PolicyName.TIT_FOR_TAT
    description: ClassVar[str] = (
        "Players started off cooperatively, then copied whatever the other side did "
        "last round. This is the classic \"I'll be nice if you're nice\" approach: it "
        "rewards cooperation but punishes betrayal immediately."
    )

    def choose(
        self,
        player_id: PlayerId,
        strategies: Sequence[StrategyName],
        context: PolicyContext,
        rng: random.Random,
    ) -> StrategyName:
        default = strategies[0]
        last_round = context.last_round
        if last_round is None:
            return default

        # Insertion order follows player order, so ties go to the earliest
        counts: dict[str, int] = {}
        for pid in context.player_ids:
            if pid == player_id:
                continue
            played = last_round.strategies.get(pid)
            if played:
                counts[played] = counts.get(played, 0) + 1

        most_common = default
        max_count = 0
        for played, count in counts.items():
            if count > max_count:
                max_count = count
                most_common = played

        for strategy in strategies:
            if strategy.lower() == most_common.lower():
                return strategy
        return default


class Adaptive(Policy):
    """Reinforcement learner over the player's own payoff history.

    Every strategy starts with weight 1. Each past round adds
    ``payoff * learning_rate`` to the weight of the strategy played in it.
    The choice is sampled proportionally to the weights clamped at 0.
    """

    name: ClassVar[PolicyName] = PolicyName.ADAPTIVE
    description: ClassVar[str] = (
        "Players learned from experience. Early on they tried different things, and "
        "over time they leaned harder toward moves that had been paying off. Think of "
        "it like a player who starts cautious and gradually figures out what works."
    )

    def choose(
        self,
        player_id: PlayerId,
        strategies: Sequence[StrategyName],
        context: PolicyContext,
        rng: random.Random,
    ) -> StrategyName:
        if not context.history:
            return rng.choice(strategies)

        weights = {strategy: 1.0 for strategy in strategies}
        for past in context.history:
            played = past.strategies.get(player_id)
            if played in weights:
                weights[played] += past.payoffs.get(player_id, 0.0) * context.learning_rate

        return weighted_choice(
            strategies,
            [max(weights[strategy], 0.0) for strategy in strategies],
            rng,
        )
