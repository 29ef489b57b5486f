"""Parameter sensitivity sweeps for round simulations.

Reruns the same scenario once per value of a single configuration
parameter and records final payoffs and convergence, so callers can see
how noise, learning rate or run length changes the outcome.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from stratagem.engine.rounds import run_round_simulation
from stratagem.models.analysis import GameAnalysis, PlayerId
from stratagem.models.config import SimulationConfig

logger = logging.getLogger(__name__)

SweepParameter = Literal["noise", "learning_rate", "rounds"]

PARAMETER_RANGES: dict[str, tuple[float, ...]] = {
    "noise": (0.0, 0.05, 0.1, 0.15, 0.2, 0.25, 0.3, 0.35, 0.4, 0.5),
    "learning_rate": (0.0, 0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 1.0),
    "rounds": (5, 10, 15, 20, 30, 40, 50, 60, 80, 100),
}

PARAMETER_LABELS: dict[str, str] = {
    "noise": "Noise",
    "learning_rate": "Learning Rate",
    "rounds": "Rounds",
}


@dataclass(frozen=True)
class SensitivityPoint:
    """Outcome of one run in a sweep.

    Attributes:
        parameter_value: Value the swept parameter took for this run
        total_payoffs: Final cumulative payoff per player
        converged: Whether the run converged
    """

    parameter_value: float
    total_payoffs: dict[PlayerId, float]
    converged: bool


def sweep_parameter(
    analysis: GameAnalysis,
    base_config: SimulationConfig,
    parameter: SweepParameter,
    values: Sequence[float] | None = None,
    rng: random.Random | None = None,
) -> list[SensitivityPoint]:
    """Run one simulation per value of ``parameter``.

    Args:
        analysis: Scenario to simulate
        base_config: Configuration whose other fields stay fixed
        parameter: ``"noise"``, ``"learning_rate"`` or ``"rounds"``
        values: Values to try; defaults to PARAMETER_RANGES[parameter]
        rng: Generator shared by all runs in order; defaults to
            ``random.Random(base_config.seed)``

    Returns:
        One SensitivityPoint per value, in the order given

    Raises:
        ValueError: If the parameter is not sweepable
        pydantic.ValidationError: If a value is invalid for the parameter
    """
    if parameter not in PARAMETER_RANGES:
        raise ValueError(
            f"Unknown sweep parameter: {parameter}. Valid parameters: {list(PARAMETER_RANGES)}"
        )

    rng = rng if rng is not None else random.Random(base_config.seed)
    sweep_values = PARAMETER_RANGES[parameter] if values is None else tuple(values)
    logger.info(f"Sweeping {parameter} over {len(sweep_values)} values")

    points: list[SensitivityPoint] = []
    for value in sweep_values:
        config = SimulationConfig.model_validate({**base_config.model_dump(), parameter: value})
        result = run_round_simulation(analysis, config, rng)
        points.append(
            SensitivityPoint(
                parameter_value=value,
                total_payoffs=result.final_payoffs,
                converged=result.convergence.converged,
            )
        )
    return points
