"""Scenario input models for Stratagem.

A GameAnalysis is produced upstream by the scenario parser and consumed
read-only by the engine. Field names accept both snake_case and the
camelCase keys the parser emits (``payoffMatrix``, ``gameType``, ...).

Payoff tables are sparse and may be incomplete: a cell may list a
strategy for a player without a payoff, or omit a player entirely. The
resolvers in ``stratagem.engine.payoffs`` tolerate both.
"""

from typing import NewType

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

PlayerId = NewType("PlayerId", str)
StrategyName = NewType("StrategyName", str)


class Player(BaseModel):
    """A named participant with an ordered list of legal strategies.

    The list may be empty here; the engine substitutes
    ``DEFAULT_STRATEGIES`` at run time instead of rejecting the scenario.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    id: PlayerId
    name: str = ""
    role: str = ""
    goals: list[str] = Field(default_factory=list)
    strategies: list[StrategyName] = Field(default_factory=list)

    @property
    def display_name(self) -> str:
        return self.name or self.id


class PayoffCell(BaseModel):
    """One joint outcome of the payoff table.

    Attributes:
        strategies: player id -> strategy that player plays in this outcome
        payoffs: player id -> payoff that player receives in this outcome
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    strategies: dict[PlayerId, StrategyName] = Field(default_factory=dict)
    payoffs: dict[PlayerId, float] = Field(default_factory=dict)


class GameAnalysis(BaseModel):
    """The immutable scenario a simulation runs against.

    Only ``players`` and ``payoff_matrix`` drive the arithmetic.
    ``nash_equilibrium`` is quoted in insights; the remaining fields are
    descriptive and carried through untouched.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    title: str = ""
    summary: str = ""
    game_type: str = ""
    game_type_description: str = ""
    players: list[Player] = Field(default_factory=list)
    rules: list[str] = Field(default_factory=list)
    payoff_matrix: list[PayoffCell] = Field(default_factory=list)
    recommendation: str = ""
    nash_equilibrium: str = ""
    dominant_strategy: str = ""
    real_world_parallel: str = ""

    @property
    def player_ids(self) -> list[PlayerId]:
        return [p.id for p in self.players]

    def name_of(self, player_id: PlayerId) -> str:
        """Display name for a player id, falling back to the id itself."""
        for player in self.players:
            if player.id == player_id:
                return player.display_name
        return player_id
