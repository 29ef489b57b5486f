"""Strategy-selection policies for Stratagem.

Seven interchangeable decision rules, each mapping (player, legal
strategies, observable history) to one strategy for the current round:

1. Reactive - random, greedy, tit-for-tat, adaptive
2. Model-based - best-response, fictitious-play
3. Evolutionary - replicator-dynamics

All policies implement the Policy base class interface.
"""

from stratagem.policies.base import (
    Policy,
    PolicyContext,
    best_hypothetical_strategy,
    get_policy_by_name,
    hypothetical_payoff,
    list_policy_names,
    weighted_choice,
)
from stratagem.policies.learning import (
    BestResponse,
    FictitiousPlay,
    best_response,
    expected_payoff,
    opponent_frequencies,
    table_average_payoff,
)
from stratagem.policies.reactive import Adaptive, Greedy, RandomChoice, TitForTat
from stratagem.policies.replicator import ReplicatorDynamics, ReplicatorState

__all__ = [
    # Base classes and helpers
    "Policy",
    "PolicyContext",
    "best_hypothetical_strategy",
    "hypothetical_payoff",
    "weighted_choice",
    # Factory functions
    "get_policy_by_name",
    "list_policy_names",
    # Reactive policies
    "RandomChoice",
    "Greedy",
    "TitForTat",
    "Adaptive",
    # Model-based policies
    "BestResponse",
    "FictitiousPlay",
    "best_response",
    "expected_payoff",
    "opponent_frequencies",
    "table_average_payoff",
    # Evolutionary
    "ReplicatorDynamics",
    "ReplicatorState",
]
