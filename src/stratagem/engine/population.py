"""Population evolution engine for Stratagem.

Simulates a population of anonymous agents, each tagged by the strategy it
plays, over discrete generations:

1. COUNT - agents per strategy
2. PLAY - shuffle, pair agents two at a time, resolve each matchup; an odd
   agent out plays one extra matchup against a random other agent
3. FITNESS - average payoff per matchup per strategy; snapshot recorded
4. SELECT - reproduction weight = count * max(fitness, floor) ** pressure,
   allocated by largest remainder so the population size is preserved
5. MUTATE - round(count * mutation_rate) agents per strategy reassigned to
   uniformly random strategies
6. REBUILD - agent list rebuilt from counts, forced to the configured size
   and shuffled for the next generation
"""

from __future__ import annotations

import logging
import math
import random
from enum import Enum

from stratagem.engine.payoffs import resolve_matchup
from stratagem.insights.population import generate_population_insights
from stratagem.models.analysis import GameAnalysis, StrategyName
from stratagem.models.config import PopulationConfig
from stratagem.models.results import PopulationGeneration, PopulationResult
from stratagem.parameters import DEFAULT_STRATEGIES, FITNESS_FLOOR

logger = logging.getLogger(__name__)


class EvolutionPhase(Enum):
    """Lifecycle of a population simulation."""

    INITIALIZING = "initializing"
    EVOLVING = "evolving"
    COMPLETE = "complete"


def collect_strategies(analysis: GameAnalysis) -> list[StrategyName]:
    """Union of all players' strategies in first-seen order.

    Falls back to DEFAULT_STRATEGIES when no player declares any.
    """
    seen: dict[StrategyName, None] = {}
    for player in analysis.players:
        for strategy in player.strategies:
            seen.setdefault(strategy, None)
    if not seen:
        return [StrategyName(s) for s in DEFAULT_STRATEGIES]
    return list(seen)


def even_counts(strategies: list[StrategyName], population_size: int) -> dict[StrategyName, int]:
    """Split the population evenly; leftover agents go to the earliest strategies."""
    base, remainder = divmod(population_size, len(strategies))
    return {s: base + (1 if i < remainder else 0) for i, s in enumerate(strategies)}


def allocate_counts(
    weights: dict[StrategyName, float],
    population_size: int,
) -> dict[StrategyName, int]:
    """Allocate the population proportionally to weights by largest remainder.

    Each strategy gets the floor of its proportional share; leftover slots go
    to the largest fractional remainders, ties in iteration order. Falls back
    to an even split when all weights are zero.
    """
    strategies = list(weights)
    total = sum(weights.values())
    if total <= 0:
        return even_counts(strategies, population_size)

    shares = {s: weights[s] / total * population_size for s in strategies}
    counts = {s: math.floor(shares[s]) for s in strategies}
    remaining = population_size - sum(counts.values())

    # sorted() is stable, so equal remainders keep iteration order
    by_fraction = sorted(strategies, key=lambda s: shares[s] - counts[s], reverse=True)
    for i in range(remaining):
        counts[by_fraction[i % len(by_fraction)]] += 1
    return counts


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


class PopulationSimulator:
    """Runs a single generation-based population simulation.

    The agent list, counts and snapshots belong to this instance only.

    Example:
        simulator = PopulationSimulator(analysis, PopulationConfig(seed=3))
        generations = simulator.run()
    """

    def __init__(
        self,
        analysis: GameAnalysis,
        config: PopulationConfig,
        rng: random.Random | None = None,
    ):
        """Initialize the population.

        Args:
            analysis: Scenario supplying strategies and the payoff table
            config: Validated run configuration
            rng: Random generator; defaults to ``random.Random(config.seed)``
        """
        self.phase = EvolutionPhase.INITIALIZING
        self.config = config
        self.rng = rng if rng is not None else random.Random(config.seed)
        self.payoff_table = list(analysis.payoff_matrix)
        self.strategies = collect_strategies(analysis)

        self.population = self._build_population(even_counts(self.strategies, config.population_size))
        self.rng.shuffle(self.population)

        self._generations: list[PopulationGeneration] = []
        self.phase = EvolutionPhase.EVOLVING

    def _build_population(self, counts: dict[StrategyName, int]) -> list[StrategyName]:
        population: list[StrategyName] = []
        for strategy in self.strategies:
            population.extend([strategy] * max(counts.get(strategy, 0), 0))
        return population

    def _count(self) -> dict[StrategyName, int]:
        counts = {s: 0 for s in self.strategies}
        for agent in self.population:
            counts[agent] = counts.get(agent, 0) + 1
        return counts

    def _play_matchups(self) -> tuple[dict[StrategyName, float], dict[StrategyName, int]]:
        """Pair shuffled agents and accumulate payoff totals and matchup counts."""
        total_payoff = {s: 0.0 for s in self.strategies}
        matches = {s: 0 for s in self.strategies}

        shuffled = list(self.population)
        self.rng.shuffle(shuffled)

        for i in range(0, len(shuffled) - 1, 2):
            strategy_a, strategy_b = shuffled[i], shuffled[i + 1]
            payoff_a, payoff_b = resolve_matchup(self.payoff_table, strategy_a, strategy_b, self.rng)
            total_payoff[strategy_a] += payoff_a
            matches[strategy_a] += 1
            total_payoff[strategy_b] += payoff_b
            matches[strategy_b] += 1

        if len(shuffled) % 2 == 1:
            leftover = shuffled[-1]
            # A lone agent has nobody else to meet and plays its own strategy
            others = shuffled[:-1] or [leftover]
            opponent = self.rng.choice(others)
            payoff, _ = resolve_matchup(self.payoff_table, leftover, opponent, self.rng)
            total_payoff[leftover] += payoff
            matches[leftover] += 1

        return total_payoff, matches

    def _select(
        self,
        counts: dict[StrategyName, int],
        fitness: dict[StrategyName, float],
    ) -> dict[StrategyName, int]:
        weights: dict[StrategyName, float] = {}
        for strategy in self.strategies:
            if counts[strategy] == 0:
                weights[strategy] = 0.0
                continue
            floored = max(fitness[strategy], FITNESS_FLOOR)
            weights[strategy] = counts[strategy] * floored ** self.config.selection_pressure
        return allocate_counts(weights, self.config.population_size)

    def _mutate(self, counts: dict[StrategyName, int]) -> dict[StrategyName, int]:
        if self.config.mutation_rate <= 0:
            return counts
        for strategy in self.strategies:
            mutants = _round_half_up(counts[strategy] * self.config.mutation_rate)
            if mutants <= 0:
                continue
            counts[strategy] -= mutants
            for _ in range(mutants):
                target = self.rng.choice(self.strategies)
                counts[target] += 1
        return counts

    def _rebuild(self, counts: dict[StrategyName, int]) -> None:
        population = self._build_population(counts)
        size = self.config.population_size
        while len(population) < size:
            population.append(self.rng.choice(self.strategies))
        del population[size:]
        self.rng.shuffle(population)
        self.population = population

    def step(self) -> PopulationGeneration:
        """Run one generation and return its snapshot.

        Raises:
            RuntimeError: If all configured generations have run
        """
        if self.phase != EvolutionPhase.EVOLVING:
            raise RuntimeError(f"Cannot advance a generation in phase {self.phase.value}")

        counts = self._count()
        total_payoff, matches = self._play_matchups()

        fitness: dict[StrategyName, float] = {}
        weighted_total = 0.0
        for strategy in self.strategies:
            fitness[strategy] = total_payoff[strategy] / matches[strategy] if matches[strategy] > 0 else 0.0
            weighted_total += fitness[strategy] * counts[strategy]

        snapshot = PopulationGeneration(
            generation=len(self._generations),
            strategy_counts=dict(counts),
            strategy_fitness=dict(fitness),
            total_fitness=weighted_total / self.config.population_size,
        )
        self._generations.append(snapshot)
        logger.debug(f"Generation {snapshot.generation}: {snapshot.strategy_counts}")

        next_counts = self._mutate(self._select(counts, fitness))
        self._rebuild(next_counts)

        if len(self._generations) >= self.config.generations:
            self.phase = EvolutionPhase.COMPLETE
        return snapshot

    def run(self) -> tuple[PopulationGeneration, ...]:
        """Run all remaining generations and return every snapshot."""
        while self.phase == EvolutionPhase.EVOLVING:
            self.step()
        return self.get_generations()

    def get_generations(self) -> tuple[PopulationGeneration, ...]:
        return tuple(self._generations)

    def is_complete(self) -> bool:
        return self.phase == EvolutionPhase.COMPLETE


def run_population_simulation(
    analysis: GameAnalysis,
    config: PopulationConfig,
    rng: random.Random | None = None,
) -> PopulationResult:
    """Run a complete population simulation and analyze it.

    Args:
        analysis: Scenario to simulate (not modified)
        config: Validated run configuration
        rng: Random generator; defaults to ``random.Random(config.seed)``

    Returns:
        PopulationResult with snapshots, dominant and extinct strategies,
        and insights
    """
    logger.info(
        f"Starting population simulation: size={config.population_size}, "
        f"generations={config.generations}, mutation={config.mutation_rate}, "
        f"pressure={config.selection_pressure}"
    )
    simulator = PopulationSimulator(analysis, config, rng)
    generations = simulator.run()
    strategies = simulator.strategies
    final_counts = generations[-1].strategy_counts

    dominant = strategies[0]
    max_count = 0
    for strategy in strategies:
        if final_counts.get(strategy, 0) > max_count:
            max_count = final_counts[strategy]
            dominant = strategy

    extinct = tuple(s for s in strategies if final_counts.get(s, 0) == 0)

    result = PopulationResult(
        config=config,
        generations=generations,
        all_strategies=tuple(strategies),
        dominant_strategy=dominant,
        extinct_strategies=extinct,
        insights=tuple(generate_population_insights(generations, strategies, dominant, extinct, config)),
    )
    logger.info(f"Population simulation complete: dominant={dominant}, extinct={list(extinct)}")
    return result
