"""Round simulator for Stratagem.

Drives every player through R sequential rounds:

1. CHOOSE - each player's policy picks from its legal strategies, seeing
   only completed rounds
2. NOISE - with probability ``config.noise`` the pick is replaced by a
   uniformly random legal strategy
3. RESOLVE - payoffs via full-profile resolution
4. RECORD - cumulative payoffs updated and the round appended

Random draws happen in a fixed order so a seeded run is reproducible:
per player in list order, the policy's draws, then one noise draw (always
consumed), then a replacement draw if the noise fired; afterwards the
resolver's draws for the joint profile.
"""

from __future__ import annotations

import logging
import random
from enum import Enum

from stratagem.engine.convergence import detect_convergence
from stratagem.engine.payoffs import resolve_profile
from stratagem.insights.rounds import (
    generate_insights,
    generate_narrative,
    generate_strategy_narrative,
)
from stratagem.models.analysis import GameAnalysis, PlayerId, StrategyName
from stratagem.models.config import MIXED_POLICY_ORDER, SimulationConfig
from stratagem.models.results import SimulationResult, SimulationRound
from stratagem.parameters import DEFAULT_STRATEGIES
from stratagem.policies.base import Policy, PolicyContext, get_policy_by_name
from stratagem.policies.replicator import ReplicatorState

logger = logging.getLogger(__name__)


class SimulationPhase(Enum):
    """Lifecycle of a round simulation."""

    INITIALIZING = "initializing"
    RUNNING = "running"
    COMPLETE = "complete"


class RoundSimulator:
    """Runs a single round-based simulation.

    The simulator owns its round history, cumulative payoffs and replicator
    distributions; nothing is shared with other runs. The GameAnalysis is
    read but never modified.

    Example:
        simulator = RoundSimulator(analysis, SimulationConfig(rounds=20, seed=7))
        rounds = simulator.run()
    """

    def __init__(
        self,
        analysis: GameAnalysis,
        config: SimulationConfig,
        rng: random.Random | None = None,
    ):
        """Initialize the simulator.

        Args:
            analysis: Scenario to simulate
            config: Validated run configuration
            rng: Random generator; defaults to ``random.Random(config.seed)``
        """
        self.phase = SimulationPhase.INITIALIZING
        self.analysis = analysis
        self.config = config
        self.rng = rng if rng is not None else random.Random(config.seed)

        self.player_ids: list[PlayerId] = analysis.player_ids
        self.payoff_table = list(analysis.payoff_matrix)
        self.strategies: dict[PlayerId, list[StrategyName]] = {
            p.id: list(p.strategies) if p.strategies else [StrategyName(s) for s in DEFAULT_STRATEGIES]
            for p in analysis.players
        }
        self.policies: dict[PlayerId, Policy] = self._assign_policies()
        self.replicator_states: dict[PlayerId, ReplicatorState] = {
            pid: ReplicatorState.uniform(self.strategies[pid]) for pid in self.player_ids
        }

        self._rounds: list[SimulationRound] = []
        self._cumulative: dict[PlayerId, float] = {pid: 0.0 for pid in self.player_ids}

        self.phase = SimulationPhase.RUNNING

    def _assign_policies(self) -> dict[PlayerId, Policy]:
        """One policy per player; mixed mode assigns round-robin by index."""
        if self.config.is_mixed:
            return {
                pid: get_policy_by_name(MIXED_POLICY_ORDER[i % len(MIXED_POLICY_ORDER)])
                for i, pid in enumerate(self.player_ids)
            }
        return {pid: get_policy_by_name(self.config.strategy) for pid in self.player_ids}

    def _context(self) -> PolicyContext:
        return PolicyContext(
            player_ids=self.player_ids,
            payoff_table=self.payoff_table,
            history=tuple(self._rounds),
            learning_rate=self.config.learning_rate,
            replicator_states=self.replicator_states,
        )

    def _choose(self, player_id: PlayerId, context: PolicyContext) -> StrategyName:
        strategies = self.strategies[player_id]
        pick = self.policies[player_id].choose(player_id, strategies, context, self.rng)
        if self.rng.random() < self.config.noise:
            pick = self.rng.choice(strategies)
        return pick

    def play_round(self) -> SimulationRound:
        """Play the next round and append it to the history.

        Raises:
            RuntimeError: If the configured number of rounds has been played
        """
        if self.phase != SimulationPhase.RUNNING:
            raise RuntimeError(f"Cannot play a round in phase {self.phase.value}")

        context = self._context()
        chosen = {pid: self._choose(pid, context) for pid in self.player_ids}
        payoffs = resolve_profile(self.payoff_table, chosen, self.player_ids, self.rng)

        for pid in self.player_ids:
            self._cumulative[pid] += payoffs[pid]

        record = SimulationRound(
            round=len(self._rounds) + 1,
            strategies=dict(chosen),
            payoffs=dict(payoffs),
            cumulative_payoffs=dict(self._cumulative),
        )
        self._rounds.append(record)
        logger.debug(f"Round {record.round}: {record.strategies} -> {record.payoffs}")

        if len(self._rounds) >= self.config.rounds:
            self.phase = SimulationPhase.COMPLETE
        return record

    def run(self) -> tuple[SimulationRound, ...]:
        """Play all remaining rounds and return the full history."""
        while self.phase == SimulationPhase.RUNNING:
            self.play_round()
        return self.get_history()

    def get_history(self) -> tuple[SimulationRound, ...]:
        return tuple(self._rounds)

    def is_complete(self) -> bool:
        return self.phase == SimulationPhase.COMPLETE


def run_round_simulation(
    analysis: GameAnalysis,
    config: SimulationConfig,
    rng: random.Random | None = None,
) -> SimulationResult:
    """Run a complete round simulation and analyze it.

    Args:
        analysis: Scenario to simulate (not modified)
        config: Validated run configuration
        rng: Random generator; defaults to ``random.Random(config.seed)``

    Returns:
        SimulationResult with rounds, convergence verdict, insights and
        narratives
    """
    logger.info(
        f"Starting round simulation: {len(analysis.players)} players, "
        f"{config.rounds} rounds, strategy={config.strategy}"
    )
    simulator = RoundSimulator(analysis, config, rng)
    rounds = simulator.run()
    player_ids = simulator.player_ids

    convergence = detect_convergence(rounds, player_ids)
    result = SimulationResult(
        analysis=analysis,
        config=config,
        rounds=rounds,
        convergence=convergence,
        insights=tuple(generate_insights(rounds, player_ids, convergence, config, analysis)),
        narrative=generate_narrative(rounds, player_ids, convergence, analysis),
        strategy_narrative=generate_strategy_narrative(rounds, player_ids, convergence, analysis),
    )
    logger.info(
        f"Round simulation complete: converged={convergence.converged}, "
        f"equilibrium_round={convergence.equilibrium_round}"
    )
    return result
