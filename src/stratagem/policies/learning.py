"""Model-based policies: best-response and fictitious play.

Both consult the payoff table directly. Best-response reacts to the last
round; fictitious play best-responds to the empirical mixture of everything
each opponent has played so far.
"""

from __future__ import annotations

import random
from collections import Counter
from collections.abc import Sequence
from typing import ClassVar

from stratagem.models.analysis import PayoffCell, PlayerId, StrategyName
from stratagem.models.config import PolicyName
from stratagem.models.results import SimulationRound
from stratagem.policies.base import Policy, PolicyContext, best_hypothetical_strategy


def _plays(cell: PayoffCell, player_id: PlayerId, strategy: str) -> bool:
    recorded = cell.strategies.get(player_id)
    return bool(recorded) and recorded.lower() == strategy.lower()


def table_average_payoff(
    table: Sequence[PayoffCell],
    player_id: PlayerId,
    strategy: StrategyName,
) -> float:
    """Average payoff over every cell where the player plays ``strategy``.

    Returns 0.0 when the strategy never appears for that player.
    """
    total = 0.0
    count = 0
    for cell in table:
        if _plays(cell, player_id, strategy):
            total += cell.payoffs.get(player_id, 0.0)
            count += 1
    return total / count if count > 0 else 0.0


def best_response(
    player_id: PlayerId,
    strategies: Sequence[StrategyName],
    last_round: SimulationRound | None,
    context: PolicyContext,
    rng: random.Random,
) -> StrategyName:
    """Best-response choice given an optional previous round.

    With no previous round, picks the strategy with the best table average
    (uniform choice when the table is empty). Otherwise the greedy
    hypothetical evaluation against the previous round.
    """
    if last_round is not None:
        return best_hypothetical_strategy(player_id, strategies, last_round, context, rng)

    if not context.payoff_table:
        return rng.choice(strategies)

    best = strategies[0]
    best_avg = float("-inf")
    for strategy in strategies:
        avg = table_average_payoff(context.payoff_table, player_id, strategy)
        if avg > best_avg:
            best_avg = avg
            best = strategy
    return best


class BestResponse(Policy):
    """Best reply to opponents' last-round choices."""

    name: ClassVar[PolicyName] = PolicyName.BEST_RESPONSE
    description: ClassVar[str] = (
        "Every round, each player looked at what their opponents just did and picked "
        "the absolute best counter-move. It's a very reactive approach, like always "
        "trying to one-up the other side based on their last action."
    )

    def choose(
        self,
        player_id: PlayerId,
        strategies: Sequence[StrategyName],
        context: PolicyContext,
        rng: random.Random,
    ) -> StrategyName:
        return best_response(player_id, strategies, context.last_round, context, rng)


def opponent_frequencies(
    player_id: PlayerId,
    context: PolicyContext,
) -> dict[PlayerId, Counter[str]]:
    """Count, per opponent, how often each strategy was played historically.

    Keys are lower-cased so table lookups are case-insensitive.
    """
    frequencies: dict[PlayerId, Counter[str]] = {}
    for pid in context.player_ids:
        if pid == player_id:
            continue
        counter: Counter[str] = Counter()
        for past in context.history:
            played = past.strategies.get(pid)
            if played:
                counter[played.lower()] += 1
        frequencies[pid] = counter
    return frequencies


def expected_payoff(
    player_id: PlayerId,
    strategy: StrategyName,
    table: Sequence[PayoffCell],
    frequencies: dict[PlayerId, Counter[str]],
) -> float:
    """Expected payoff of ``strategy`` against the empirical opponent mix.

    Each matching cell is weighted by the product of the historical counts
    of the opponent strategies it records. Returns 0.0 when no cell carries
    any weight.
    """
    weighted_sum = 0.0
    total_weight = 0.0
    for cell in table:
        if not _plays(cell, player_id, strategy):
            continue
        weight = 1.0
        for pid, counter in frequencies.items():
            opponent_strategy = cell.strategies.get(pid)
            if opponent_strategy:
                weight *= counter.get(opponent_strategy.lower(), 0)
        weighted_sum += cell.payoffs.get(player_id, 0.0) * weight
        total_weight += weight
    return weighted_sum / total_weight if total_weight > 0 else 0.0


class FictitiousPlay(Policy):
    """Best response to the empirical distribution of opponent play.

    Falls back to best-response (against the latest round, or the table
    averages with no history) when the best expectation is non-positive.
    """

    name: ClassVar[PolicyName] = PolicyName.FICTITIOUS_PLAY
    description: ClassVar[str] = (
        "Players kept a mental tally of everything their opponents had done across all "
        "rounds, then picked the best response to those overall patterns. It's a more "
        "thoughtful approach than just reacting to the last round."
    )

    def choose(
        self,
        player_id: PlayerId,
        strategies: Sequence[StrategyName],
        context: PolicyContext,
        rng: random.Random,
    ) -> StrategyName:
        if not context.history:
            return best_response(player_id, strategies, None, context, rng)

        frequencies = opponent_frequencies(player_id, context)

        best = strategies[0]
        best_expected = float("-inf")
        for strategy in strategies:
            expected = expected_payoff(player_id, strategy, context.payoff_table, frequencies)
            if expected > best_expected:
                best_expected = expected
                best = strategy

        if best_expected <= 0:
            return best_response(player_id, strategies, context.last_round, context, rng)
        return best
