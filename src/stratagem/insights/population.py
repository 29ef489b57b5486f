"""Plain-language insights for population simulations."""

from __future__ import annotations

from collections.abc import Sequence

from stratagem.models.analysis import StrategyName
from stratagem.models.config import PopulationConfig
from stratagem.models.results import PopulationGeneration
from stratagem.parameters import (
    DOMINANCE_PCT,
    EARLY_SHIFT_GENERATIONS,
    HIGH_MUTATION,
    LEADING_PCT,
    MAX_POPULATION_INSIGHTS,
)


def early_shift_rate(
    generations: Sequence[PopulationGeneration],
    strategies: Sequence[StrategyName],
    population_size: int,
) -> float:
    """Total count movement over the opening generations, per agent."""
    first = generations[0]
    early = generations[min(EARLY_SHIFT_GENERATIONS - 1, len(generations) - 1)]
    moved = sum(
        abs(early.strategy_counts.get(s, 0) - first.strategy_counts.get(s, 0)) for s in strategies
    )
    return moved / population_size


def generate_population_insights(
    generations: Sequence[PopulationGeneration],
    strategies: Sequence[StrategyName],
    dominant_strategy: StrategyName,
    extinct_strategies: Sequence[StrategyName],
    config: PopulationConfig,
) -> list[str]:
    """Summarize dominance, extinction, early shift, fitness spread and mutation."""
    insights: list[str] = []
    if not generations:
        return insights

    last = generations[-1]

    dominant_pct = round(last.strategy_counts.get(dominant_strategy, 0) / config.population_size * 100)
    if dominant_pct >= DOMINANCE_PCT:
        insights.append(
            f"\"{dominant_strategy}\" achieved near-total dominance, controlling {dominant_pct}% of "
            f"the population by the final generation. Once it takes hold it is almost impossible "
            f"to displace."
        )
    elif dominant_pct >= LEADING_PCT:
        insights.append(
            f"\"{dominant_strategy}\" emerged as the leading strategy with {dominant_pct}% of the "
            f"population, but it didn't completely take over. Other strategies survived in niches "
            f"where they outperform it."
        )
    else:
        insights.append(
            f"No single strategy dominated the population. \"{dominant_strategy}\" led with only "
            f"{dominant_pct}%, so multiple strategies can coexist in this game's ecosystem."
        )

    if len(extinct_strategies) == 1:
        insights.append(
            f"\"{extinct_strategies[0]}\" went extinct during the simulation. Agents using it "
            f"consistently earned lower payoffs and were gradually replaced."
        )
    elif extinct_strategies:
        names = ", ".join(f"\"{s}\"" for s in extinct_strategies)
        insights.append(
            f"{len(extinct_strategies)} strategies went extinct: {names}. These approaches were "
            f"outcompeted over time."
        )
    else:
        insights.append(
            "No strategies went completely extinct. Every approach found a way to survive, which "
            "suggests each performs well against certain opponents."
        )

    if len(generations) >= EARLY_SHIFT_GENERATIONS:
        shift = early_shift_rate(generations, strategies, config.population_size)
        if shift > 0.8:
            insights.append(
                "The population restructured rapidly in the early generations; strategies that "
                "performed poorly were quickly weeded out."
            )
        elif shift > 0.3:
            insights.append(
                "The population shifted gradually in the early generations, giving weaker "
                "strategies some time before they faded."
            )
        else:
            insights.append(
                "The population barely changed in the early generations, suggesting strategies "
                "are closely matched in fitness."
            )

    surviving = [
        fitness for s, fitness in last.strategy_fitness.items() if last.strategy_counts.get(s, 0) > 0
    ]
    if len(surviving) >= 2:
        spread = max(surviving) - min(surviving)
        mean = sum(surviving) / len(surviving)
        if mean > 0 and spread / mean < 0.1:
            insights.append(
                "By the end, surviving strategies had nearly identical fitness levels: an "
                "evolutionary equilibrium where no single approach has a clear advantage."
            )
        elif mean > 0 and spread / mean > 0.5:
            insights.append(
                "There's a large fitness gap between the best and worst surviving strategies. "
                "Weaker strategies persist, likely sustained by mutation introducing fresh agents."
            )

    if config.mutation_rate > HIGH_MUTATION:
        insights.append(
            f"The high mutation rate ({config.mutation_rate * 100:.1f}%) kept the population "
            f"diverse by constantly introducing agents with random strategies."
        )
    elif config.mutation_rate > 0:
        insights.append(
            f"A low mutation rate ({config.mutation_rate * 100:.1f}%) provided a small but steady "
            f"source of strategic diversity."
        )

    return insights[:MAX_POPULATION_INSIGHTS]
