"""Payoff resolution against sparse payoff tables.

Two lookups are supported:

1. Full-profile resolution (round simulator): every player has a chosen
   strategy; the cell agreeing with the most players wins.
2. Pairwise resolution (population engine): two anonymous agents are
   identified only by strategy name; the cell containing both names wins.

Both are best-effort. An empty table, a table with no matching cell, or a
cell missing payoff entries falls back to random synthetic payoffs drawn
from the caller's generator. Neither lookup ever raises on malformed data.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Mapping, Sequence

from stratagem.models.analysis import PayoffCell, PlayerId, StrategyName
from stratagem.parameters import MISSING_PAYOFF_RANGE, SYNTHETIC_PAYOFF_RANGE

logger = logging.getLogger(__name__)


def _uniform(rng: random.Random, bounds: tuple[float, float]) -> float:
    low, high = bounds
    return low + rng.random() * (high - low)


def _same(a: str | None, b: str | None) -> bool:
    """Case-insensitive strategy comparison; missing values never match."""
    return bool(a) and bool(b) and a.lower() == b.lower()


def resolve_profile(
    table: Sequence[PayoffCell],
    chosen: Mapping[PlayerId, StrategyName],
    player_ids: Sequence[PlayerId],
    rng: random.Random,
) -> dict[PlayerId, float]:
    """Resolve payoffs for a full strategy profile.

    Each cell scores one point per player whose chosen strategy equals the
    cell's recorded strategy for that player. The highest-scoring cell wins,
    first in table order on ties.

    Args:
        table: Payoff cells, possibly empty
        chosen: Strategy chosen by each player
        player_ids: Players to resolve, in draw order
        rng: Random generator for synthetic fallbacks

    Returns:
        Payoff per player id. Synthetic values are drawn from
        SYNTHETIC_PAYOFF_RANGE when nothing matches, and from
        MISSING_PAYOFF_RANGE for players missing from the winning cell.
    """
    best_cell: PayoffCell | None = None
    best_score = 0

    for cell in table:
        score = sum(1 for pid in player_ids if _same(cell.strategies.get(pid), chosen.get(pid)))
        if score > best_score:
            best_score = score
            best_cell = cell

    if best_cell is None:
        logger.debug(f"No payoff cell matches {dict(chosen)}; synthesizing payoffs")
        return {pid: _uniform(rng, SYNTHETIC_PAYOFF_RANGE) for pid in player_ids}

    payoffs: dict[PlayerId, float] = {}
    for pid in player_ids:
        if pid in best_cell.payoffs:
            payoffs[pid] = best_cell.payoffs[pid]
        else:
            payoffs[pid] = _uniform(rng, MISSING_PAYOFF_RANGE)
    return payoffs


def _matchup_score(cell: PayoffCell, strategy_a: str, strategy_b: str) -> int:
    values = [s.lower() for s in cell.strategies.values() if s]
    if strategy_a == strategy_b:
        return values.count(strategy_a)
    has_a = strategy_a in values
    has_b = strategy_b in values
    if has_a and has_b:
        return 2
    if has_a or has_b:
        return 1
    return 0


def resolve_matchup(
    table: Sequence[PayoffCell],
    strategy_a: StrategyName,
    strategy_b: StrategyName,
    rng: random.Random,
) -> tuple[float, float]:
    """Resolve payoffs for a single matchup between two strategies.

    Player slots are ignored when matching: a cell scores 2 when both names
    appear among its strategy values, 1 when only one does. For a mirror
    matchup the score is the number of slots playing that strategy.

    Directional payoffs come from the first slot playing ``strategy_a`` and
    the first other slot playing ``strategy_b``. Mirror matchups, and
    matchups where either side cannot be located, give both agents the
    mean of the cell's payoffs.

    Returns:
        (payoff for the agent playing strategy_a,
         payoff for the agent playing strategy_b)
    """
    lower_a = strategy_a.lower()
    lower_b = strategy_b.lower()

    best_cell: PayoffCell | None = None
    best_score = 0
    for cell in table:
        score = _matchup_score(cell, lower_a, lower_b)
        if score > best_score:
            best_score = score
            best_cell = cell

    if best_cell is None or not best_cell.payoffs:
        logger.debug(f"No payoff cell for {strategy_a} vs {strategy_b}; synthesizing payoffs")
        return _uniform(rng, SYNTHETIC_PAYOFF_RANGE), _uniform(rng, SYNTHETIC_PAYOFF_RANGE)

    values = list(best_cell.payoffs.values())
    mean = sum(values) / len(values)
    if lower_a == lower_b:
        return mean, mean

    payoff_a: float | None = None
    payoff_b: float | None = None
    for pid, strategy in best_cell.strategies.items():
        if not strategy:
            continue
        if payoff_a is None and strategy.lower() == lower_a:
            payoff_a = best_cell.payoffs.get(pid)
        elif payoff_b is None and strategy.lower() == lower_b:
            payoff_b = best_cell.payoffs.get(pid)

    if payoff_a is None or payoff_b is None:
        return mean, mean
    return payoff_a, payoff_b
