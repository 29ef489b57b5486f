"""Stratagem: game-theoretic simulation engine.

Two entry points, both pure apart from the random generator they draw from:

    from stratagem import run_round_simulation, run_population_simulation

    result = run_round_simulation(analysis, SimulationConfig(strategy="tit-for-tat", seed=1))
    evolved = run_population_simulation(analysis, PopulationConfig(generations=80, seed=1))
"""

from stratagem.engine import run_population_simulation, run_round_simulation
from stratagem.models import (
    GameAnalysis,
    PayoffCell,
    Player,
    PolicyName,
    PopulationConfig,
    PopulationResult,
    SimulationConfig,
    SimulationResult,
)

__version__ = "0.1.0"

__all__ = [
    "run_round_simulation",
    "run_population_simulation",
    "GameAnalysis",
    "PayoffCell",
    "Player",
    "PolicyName",
    "PopulationConfig",
    "PopulationResult",
    "SimulationConfig",
    "SimulationResult",
]
