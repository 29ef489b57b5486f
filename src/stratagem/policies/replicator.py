"""Replicator dynamics policy and its per-player distribution state.

Each player keeps a probability distribution over their strategies. After
every round, strategies whose hypothetical payoff beats the
distribution-weighted average grow and the rest shrink:

    p_i <- p_i * payoff_i / average_payoff

Renormalization is a separate step (``ReplicatorState.normalize``) so the
distribution invariant can be tested on its own.
"""

from __future__ import annotations

import random
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import ClassVar

from stratagem.models.analysis import PlayerId, StrategyName
from stratagem.models.config import PolicyName
from stratagem.parameters import REPLICATOR_AVERAGE_FALLBACK, REPLICATOR_PAYOFF_FLOOR
from stratagem.policies.base import Policy, PolicyContext, hypothetical_payoff, weighted_choice


@dataclass
class ReplicatorState:
    """Probability distribution over one player's strategies.

    Values stay in [0, 1] and sum to 1 after every call to ``normalize``.
    Created per run and discarded with it.
    """

    distribution: dict[StrategyName, float] = field(default_factory=dict)

    @classmethod
    def uniform(cls, strategies: Sequence[StrategyName]) -> ReplicatorState:
        share = 1.0 / len(strategies)
        return cls(distribution={s: share for s in strategies})

    def probability(self, strategy: StrategyName) -> float:
        if strategy in self.distribution:
            return self.distribution[strategy]
        return 1.0 / len(self.distribution) if self.distribution else 0.0

    def normalize(self) -> None:
        """Rescale to sum to 1, resetting to uniform if the total collapsed."""
        total = sum(self.distribution.values())
        if total > 0:
            for strategy in self.distribution:
                self.distribution[strategy] /= total
        elif self.distribution:
            share = 1.0 / len(self.distribution)
            for strategy in self.distribution:
                self.distribution[strategy] = share

    def update(self, payoffs: Mapping[StrategyName, float]) -> None:
        """Apply one replicator step for the given per-strategy payoffs."""
        average = sum(self.distribution.get(s, 0.0) * p for s, p in payoffs.items())
        if average <= 0:
            average = REPLICATOR_AVERAGE_FALLBACK

        for strategy, payoff in payoffs.items():
            floored = max(payoff, REPLICATOR_PAYOFF_FLOOR)
            self.distribution[strategy] = self.distribution.get(strategy, 0.0) * floored / average

        self.normalize()

    def sample(self, strategies: Sequence[StrategyName], rng: random.Random) -> StrategyName:
        return weighted_choice(strategies, [self.probability(s) for s in strategies], rng)


class ReplicatorDynamics(Policy):
    """Evolutionary update of a per-player mixed strategy.

    The first round samples the initial (uniform) distribution. Later
    rounds update the distribution from greedy-style hypothetical payoffs
    against the previous round, then sample from it.
    """

    name: ClassVar[PolicyName] = PolicyName.REPLICATOR_DYNAMICS
    description: ClassVar[str] = (
        "Strategies that performed well \"grew\" in popularity while underperforming ones "
        "faded away, similar to natural selection. Over time, the strongest approaches "
        "naturally rose to the top."
    )

    def choose(
        self,
        player_id: PlayerId,
        strategies: Sequence[StrategyName],
        context: PolicyContext,
        rng: random.Random,
    ) -> StrategyName:
        state = context.replicator_states.get(player_id)
        if state is None:
            # Caller supplied no state; behave as a fresh uniform player
            state = ReplicatorState.uniform(strategies)

        last_round = context.last_round
        if last_round is None:
            return state.sample(strategies, rng)

        payoffs = {
            strategy: hypothetical_payoff(player_id, strategy, last_round, context, rng)
            for strategy in strategies
        }
        state.update(payoffs)
        return state.sample(strategies, rng)
