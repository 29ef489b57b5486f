"""Simulation engines for Stratagem.

This module contains the computational core:
- payoffs: full-profile and pairwise payoff resolution
- rounds: round simulator driving per-player policies
- convergence: post-hoc stable-profile detection
- population: generation-based evolutionary dynamics

Usage:
    from stratagem.engine import run_round_simulation
    from stratagem.models import GameAnalysis, SimulationConfig

    analysis = GameAnalysis.model_validate_json(path.read_text())
    result = run_round_simulation(analysis, SimulationConfig(rounds=30, seed=1))

    if result.convergence.converged:
        print(f"Stable from round {result.convergence.equilibrium_round}")
"""

from stratagem.engine.payoffs import resolve_matchup, resolve_profile
from stratagem.engine.convergence import detect_convergence
from stratagem.engine.rounds import RoundSimulator, SimulationPhase, run_round_simulation
from stratagem.engine.population import (
    EvolutionPhase,
    PopulationSimulator,
    allocate_counts,
    collect_strategies,
    even_counts,
    run_population_simulation,
)

__all__ = [
    # Payoff resolution
    "resolve_matchup",
    "resolve_profile",
    # Round simulation
    "RoundSimulator",
    "SimulationPhase",
    "detect_convergence",
    "run_round_simulation",
    # Population simulation
    "EvolutionPhase",
    "PopulationSimulator",
    "allocate_counts",
    "collect_strategies",
    "even_counts",
    "run_population_simulation",
]
