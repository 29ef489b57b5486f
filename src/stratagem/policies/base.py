"""Base policy interface for Stratagem.

A policy maps (acting player, legal strategies, observable context) to one
legal strategy for the current round. Policies hold no per-run state of
their own; anything that must persist across rounds (the replicator
distributions) lives in the PolicyContext owned by the simulator.

See ``get_policy_by_name`` for the factory used by the round simulator.
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from stratagem.engine.payoffs import resolve_profile
from stratagem.models.analysis import PayoffCell, PlayerId, StrategyName
from stratagem.models.config import PolicyName, normalize_policy_name
from stratagem.models.results import SimulationRound

if TYPE_CHECKING:
    from stratagem.policies.replicator import ReplicatorState


@dataclass
class PolicyContext:
    """Everything a policy may observe when choosing.

    ``history`` only ever contains rounds strictly before the one being
    decided.

    Attributes:
        player_ids: All players in list order
        payoff_table: The scenario's payoff cells
        history: Completed rounds, oldest first
        learning_rate: Adaptive policy payoff weight
        replicator_states: Per-player distributions for replicator dynamics
    """

    player_ids: Sequence[PlayerId]
    payoff_table: Sequence[PayoffCell]
    history: Sequence[SimulationRound] = ()
    learning_rate: float = 0.0
    replicator_states: Mapping[PlayerId, ReplicatorState] = field(default_factory=dict)

    @property
    def last_round(self) -> SimulationRound | None:
        return self.history[-1] if self.history else None


def weighted_choice(
    items: Sequence[StrategyName],
    weights: Sequence[float],
    rng: random.Random,
) -> StrategyName:
    """Sample one item with probability proportional to its weight.

    Falls back to a uniform choice when the weights sum to zero or less.
    """
    total = sum(weights)
    if total <= 0:
        return rng.choice(items)

    r = rng.random() * total
    for item, weight in zip(items, weights):
        r -= weight
        if r <= 0:
            return item
    return items[-1]


def hypothetical_payoff(
    player_id: PlayerId,
    strategy: StrategyName,
    last_round: SimulationRound,
    context: PolicyContext,
    rng: random.Random,
) -> float:
    """Payoff ``player_id`` would get playing ``strategy`` last round.

    Every other player repeats their previous choice; a player absent from
    the last round is assumed to mirror ``strategy``.
    """
    profile = {
        pid: strategy if pid == player_id else last_round.strategies.get(pid, strategy)
        for pid in context.player_ids
    }
    payoffs = resolve_profile(context.payoff_table, profile, context.player_ids, rng)
    return payoffs[player_id]


def best_hypothetical_strategy(
    player_id: PlayerId,
    strategies: Sequence[StrategyName],
    last_round: SimulationRound,
    context: PolicyContext,
    rng: random.Random,
) -> StrategyName:
    """Strategy with the highest hypothetical payoff, first on ties."""
    best = strategies[0]
    best_payoff = float("-inf")
    for strategy in strategies:
        payoff = hypothetical_payoff(player_id, strategy, last_round, context, rng)
        if payoff > best_payoff:
            best_payoff = payoff
            best = strategy
    return best


class Policy(ABC):
    """Abstract base class for all strategy-selection policies."""

    name: ClassVar[PolicyName]
    description: ClassVar[str] = ""

    @abstractmethod
    def choose(
        self,
        player_id: PlayerId,
        strategies: Sequence[StrategyName],
        context: PolicyContext,
        rng: random.Random,
    ) -> StrategyName:
        """Choose a strategy for the current round.

        Args:
            player_id: The acting player
            strategies: The player's legal strategies (non-empty)
            context: Observable history and table
            rng: The run's random generator

        Returns:
            One of ``strategies``
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def get_policy_by_name(policy_name: PolicyName | str) -> Policy:
    """Create a policy by name.

    Args:
        policy_name: Policy enum or name such as ``"tit-for-tat"`` or
            ``"Best Response"``

    Returns:
        Policy instance

    Raises:
        ValueError: If the policy name is unknown
    """
    # Import here to avoid circular imports
    from stratagem.policies.learning import BestResponse, FictitiousPlay
    from stratagem.policies.reactive import Adaptive, Greedy, RandomChoice, TitForTat
    from stratagem.policies.replicator import ReplicatorDynamics

    if isinstance(policy_name, PolicyName):
        key = policy_name.value
    else:
        key = normalize_policy_name(policy_name)

    policy_map: dict[str, type[Policy]] = {
        PolicyName.RANDOM.value: RandomChoice,
        PolicyName.GREEDY.value: Greedy,
        PolicyName.TIT_FOR_TAT.value: TitForTat,
        "titfortat": TitForTat,
        PolicyName.ADAPTIVE.value: Adaptive,
        PolicyName.BEST_RESPONSE.value: BestResponse,
        PolicyName.FICTITIOUS_PLAY.value: FictitiousPlay,
        PolicyName.REPLICATOR_DYNAMICS.value: ReplicatorDynamics,
        "replicator": ReplicatorDynamics,
    }

    if key in policy_map:
        return policy_map[key]()

    raise ValueError(
        f"Unknown policy: {policy_name}. Valid policies: {list_policy_names()}"
    )


def list_policy_names() -> list[str]:
    """List the canonical names of all available policies."""
    return [p.value for p in PolicyName]
