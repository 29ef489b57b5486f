"""Batch experiments built on the round simulator.

- sensitivity: rerun a scenario across values of one parameter
- tournament: rerun a scenario under every policy and rank the results
"""

from stratagem.experiments.sensitivity import (
    PARAMETER_LABELS,
    PARAMETER_RANGES,
    SensitivityPoint,
    sweep_parameter,
)
from stratagem.experiments.tournament import (
    TOURNAMENT_POLICIES,
    TournamentEntry,
    rank_entries,
    run_policy_tournament,
)

__all__ = [
    # Sensitivity
    "PARAMETER_LABELS",
    "PARAMETER_RANGES",
    "SensitivityPoint",
    "sweep_parameter",
    # Tournament
    "TOURNAMENT_POLICIES",
    "TournamentEntry",
    "rank_entries",
    "run_policy_tournament",
]
