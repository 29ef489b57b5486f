"""Stratagem data models.

This module exports the scenario inputs, run configurations and result
records shared by the engines.
"""

from .analysis import GameAnalysis, PayoffCell, Player, PlayerId, StrategyName
from .config import (
    MIXED,
    MIXED_POLICY_ORDER,
    PolicyName,
    PopulationConfig,
    SimulationConfig,
    normalize_policy_name,
)
from .results import (
    Convergence,
    PopulationGeneration,
    PopulationResult,
    SimulationResult,
    SimulationRound,
)

__all__ = [
    # Identifiers
    "PlayerId",
    "StrategyName",
    # Scenario inputs
    "GameAnalysis",
    "PayoffCell",
    "Player",
    # Configuration
    "MIXED",
    "MIXED_POLICY_ORDER",
    "PolicyName",
    "PopulationConfig",
    "SimulationConfig",
    "normalize_policy_name",
    # Results
    "Convergence",
    "PopulationGeneration",
    "PopulationResult",
    "SimulationResult",
    "SimulationRound",
]
