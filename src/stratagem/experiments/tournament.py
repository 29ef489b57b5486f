"""Policy tournament: run one scenario under every policy and compare.

Each entry records what a single policy (or mixed mode) produced for the
same scenario and base configuration: final payoff per player, total
welfare, and when (if ever) play converged.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from stratagem.engine.rounds import run_round_simulation
from stratagem.models.analysis import GameAnalysis, PlayerId
from stratagem.models.config import MIXED, PolicyName, SimulationConfig

logger = logging.getLogger(__name__)

# Registry of policies entered by default, in display order
TOURNAMENT_POLICIES: tuple[str, ...] = (
    PolicyName.TIT_FOR_TAT.value,
    PolicyName.RANDOM.value,
    PolicyName.GREEDY.value,
    PolicyName.ADAPTIVE.value,
    MIXED,
    PolicyName.BEST_RESPONSE.value,
    PolicyName.FICTITIOUS_PLAY.value,
    PolicyName.REPLICATOR_DYNAMICS.value,
)

SortMode = Literal["payoff", "convergence", "alpha"]


@dataclass(frozen=True)
class TournamentEntry:
    """Result of one policy in the tournament."""

    policy: str
    player_payoffs: dict[PlayerId, float]
    total_welfare: float
    converged: bool
    convergence_round: int | None


def run_policy_tournament(
    analysis: GameAnalysis,
    base_config: SimulationConfig,
    policies: Sequence[str] | None = None,
    rng: random.Random | None = None,
) -> list[TournamentEntry]:
    """Run the scenario once per policy.

    Args:
        analysis: Scenario to simulate
        base_config: Configuration; its ``strategy`` is replaced per entry
        policies: Policy names to enter; defaults to TOURNAMENT_POLICIES
        rng: Generator shared by all runs in order; defaults to
            ``random.Random(base_config.seed)``

    Returns:
        One TournamentEntry per policy, in entry order

    Raises:
        pydantic.ValidationError: If a policy name is unknown
    """
    rng = rng if rng is not None else random.Random(base_config.seed)
    entrants = TOURNAMENT_POLICIES if policies is None else tuple(policies)
    logger.info(f"Running tournament with {len(entrants)} policies")

    entries: list[TournamentEntry] = []
    for policy in entrants:
        config = SimulationConfig.model_validate({**base_config.model_dump(), "strategy": policy})
        result = run_round_simulation(analysis, config, rng)
        payoffs = result.final_payoffs
        entries.append(
            TournamentEntry(
                policy=config.strategy,
                player_payoffs=payoffs,
                total_welfare=sum(payoffs.values()),
                converged=result.convergence.converged,
                convergence_round=result.convergence.equilibrium_round,
            )
        )
    return entries


def rank_entries(
    entries: Sequence[TournamentEntry],
    sort_by: SortMode = "payoff",
    player_id: PlayerId | None = None,
) -> list[TournamentEntry]:
    """Order tournament entries for display.

    Args:
        entries: Entries to sort (not modified)
        sort_by: ``"payoff"`` (highest first), ``"convergence"`` (earliest
            first, unconverged last) or ``"alpha"`` (by policy name)
        player_id: With ``"payoff"``, rank by this player's payoff instead
            of total welfare

    Raises:
        ValueError: If sort_by is unknown
    """
    if sort_by == "payoff":
        if player_id is None:
            return sorted(entries, key=lambda e: e.total_welfare, reverse=True)
        return sorted(entries, key=lambda e: e.player_payoffs.get(player_id, 0.0), reverse=True)
    if sort_by == "convergence":
        return sorted(
            entries,
            key=lambda e: e.convergence_round if e.convergence_round is not None else float("inf"),
        )
    if sort_by == "alpha":
        return sorted(entries, key=lambda e: e.policy)
    raise ValueError(f"Unknown sort mode: {sort_by}")
