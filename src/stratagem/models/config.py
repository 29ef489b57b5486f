"""Run configuration models for Stratagem.

Configuration violations (round count below 1, probabilities outside
[0, 1], unknown policy names) are rejected here with a pydantic
``ValidationError``. Once a config object exists the engine trusts it.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class PolicyName(str, Enum):
    """Strategy-selection policies available to the round simulator."""

    TIT_FOR_TAT = "tit-for-tat"
    GREEDY = "greedy"
    ADAPTIVE = "adaptive"
    RANDOM = "random"
    BEST_RESPONSE = "best-response"
    FICTITIOUS_PLAY = "fictitious-play"
    REPLICATOR_DYNAMICS = "replicator-dynamics"


MIXED = "mixed"

# Round-robin order used by mixed mode
MIXED_POLICY_ORDER: tuple[PolicyName, ...] = (
    PolicyName.TIT_FOR_TAT,
    PolicyName.GREEDY,
    PolicyName.ADAPTIVE,
    PolicyName.RANDOM,
    PolicyName.BEST_RESPONSE,
    PolicyName.FICTITIOUS_PLAY,
    PolicyName.REPLICATOR_DYNAMICS,
)


def normalize_policy_name(name: str) -> str:
    """Normalize a policy name: ``"Tit For Tat"`` -> ``"tit-for-tat"``."""
    return name.strip().lower().replace("_", "-").replace(" ", "-")


class SimulationConfig(BaseModel):
    """Configuration for a round-based simulation.

    Attributes:
        rounds: Number of rounds to play (>= 1)
        noise: Probability of replacing a policy's choice with a random one
        learning_rate: Payoff weight used by the adaptive policy
        strategy: Policy name, or ``"mixed"`` for one policy per player
        seed: Optional seed for the run's random generator
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    rounds: int = Field(default=20, ge=1)
    noise: float = Field(default=0.1, ge=0.0, le=1.0)
    learning_rate: float = Field(default=0.3, ge=0.0, le=1.0)
    strategy: str = PolicyName.ADAPTIVE.value
    seed: int | None = None

    @field_validator("strategy", mode="before")
    @classmethod
    def validate_strategy(cls, v: object) -> str:
        if isinstance(v, PolicyName):
            return v.value
        if not isinstance(v, str):
            raise ValueError("strategy must be a string")
        name = normalize_policy_name(v)
        valid = {p.value for p in PolicyName} | {MIXED}
        if name not in valid:
            raise ValueError(f"unknown strategy '{v}', expected one of {sorted(valid)}")
        return name

    @property
    def is_mixed(self) -> bool:
        return self.strategy == MIXED


class PopulationConfig(BaseModel):
    """Configuration for a generation-based population simulation.

    Attributes:
        population_size: Number of agents (>= 1)
        generations: Number of generations to run (>= 1)
        mutation_rate: Fraction of each strategy's agents reassigned at random
        selection_pressure: Exponent on fitness; 0 = drift, 1 = proportional
        seed: Optional seed for the run's random generator
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    population_size: int = Field(default=100, ge=1)
    generations: int = Field(default=50, ge=1)
    mutation_rate: float = Field(default=0.02, ge=0.0, le=1.0)
    selection_pressure: float = Field(default=0.5, ge=0.0, le=1.0)
    seed: int | None = None
