"""Convergence detection over a finished round sequence.

Convergence = the same strategy profile for CONVERGENCE_WINDOW consecutive
rounds. Detection is post-hoc; the simulator never stops early.
"""

from __future__ import annotations

from collections.abc import Sequence

from stratagem.models.analysis import PlayerId
from stratagem.models.results import Convergence, SimulationRound
from stratagem.parameters import CONVERGENCE_WINDOW


def _same_profile(
    a: SimulationRound,
    b: SimulationRound,
    player_ids: Sequence[PlayerId],
) -> bool:
    return all(a.strategies.get(pid) == b.strategies.get(pid) for pid in player_ids)


def detect_convergence(
    rounds: Sequence[SimulationRound],
    player_ids: Sequence[PlayerId],
    window: int = CONVERGENCE_WINDOW,
) -> Convergence:
    """Find the first stable window of identical strategy profiles.

    Args:
        rounds: Round sequence in play order
        player_ids: Players whose choices must all stay fixed
        window: Number of consecutive identical rounds required

    Returns:
        Convergence with the window's starting round and profile, or an
        unconverged verdict carrying the final round's profile.
    """
    if len(rounds) >= window:
        for start in range(len(rounds) - window + 1):
            reference = rounds[start]
            if all(
                _same_profile(reference, rounds[j], player_ids)
                for j in range(start + 1, start + window)
            ):
                return Convergence(
                    converged=True,
                    equilibrium_round=reference.round,
                    final_strategies=dict(reference.strategies),
                )

    return Convergence(
        converged=False,
        equilibrium_round=None,
        final_strategies=dict(rounds[-1].strategies) if rounds else {},
    )
