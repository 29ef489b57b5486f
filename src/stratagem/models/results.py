"""Result records produced by the simulation engines.

Results are built once per run and never mutated afterwards, so they are
frozen dataclasses with tuple sequences. Per-player and per-strategy maps
are plain dicts owned exclusively by the record that holds them.
"""

from dataclasses import dataclass, field

from stratagem.models.analysis import GameAnalysis, PlayerId, StrategyName
from stratagem.models.config import PopulationConfig, SimulationConfig


@dataclass(frozen=True)
class SimulationRound:
    """One played round.

    Attributes:
        round: 1-based round index
        strategies: Strategy each player chose
        payoffs: Payoff each player received this round
        cumulative_payoffs: Running total per player including this round
    """

    round: int
    strategies: dict[PlayerId, StrategyName]
    payoffs: dict[PlayerId, float]
    cumulative_payoffs: dict[PlayerId, float]


@dataclass(frozen=True)
class Convergence:
    """Convergence verdict for a round sequence.

    ``equilibrium_round`` is the first round of the stable window, or None.
    ``final_strategies`` is the stable profile when converged, otherwise the
    last round's profile (empty for an empty run).
    """

    converged: bool
    equilibrium_round: int | None
    final_strategies: dict[PlayerId, StrategyName]


@dataclass(frozen=True)
class SimulationResult:
    """Complete output of a round simulation."""

    analysis: GameAnalysis
    config: SimulationConfig
    rounds: tuple[SimulationRound, ...]
    convergence: Convergence
    insights: tuple[str, ...] = ()
    narrative: str = ""
    strategy_narrative: dict[PlayerId, str] = field(default_factory=dict)

    @property
    def final_payoffs(self) -> dict[PlayerId, float]:
        """Cumulative payoffs after the last round (zeros for an empty run)."""
        if not self.rounds:
            return {pid: 0.0 for pid in self.analysis.player_ids}
        return dict(self.rounds[-1].cumulative_payoffs)


@dataclass(frozen=True)
class PopulationGeneration:
    """Snapshot of one generation, taken before selection.

    Attributes:
        generation: 0-based generation index
        strategy_counts: Agents per strategy at the start of the generation
        strategy_fitness: Average payoff per matchup, 0 with no matchups
        total_fitness: Population-wide average fitness weighted by counts
    """

    generation: int
    strategy_counts: dict[StrategyName, int]
    strategy_fitness: dict[StrategyName, float]
    total_fitness: float


@dataclass(frozen=True)
class PopulationResult:
    """Complete output of a population simulation."""

    config: PopulationConfig
    generations: tuple[PopulationGeneration, ...]
    all_strategies: tuple[StrategyName, ...]
    dominant_strategy: StrategyName
    extinct_strategies: tuple[StrategyName, ...]
    insights: tuple[str, ...] = ()
