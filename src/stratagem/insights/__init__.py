"""Descriptive insights derived from finished simulations."""

from stratagem.insights.population import early_shift_rate, generate_population_insights
from stratagem.insights.rounds import (
    count_switches,
    describe_policy,
    generate_insights,
    generate_narrative,
    generate_strategy_narrative,
)

__all__ = [
    "count_switches",
    "describe_policy",
    "early_shift_rate",
    "generate_insights",
    "generate_narrative",
    "generate_population_insights",
    "generate_strategy_narrative",
]
