"""Tunable constants for the Stratagem simulation engine.

This module is the SINGLE SOURCE OF TRUTH for the engine's magic numbers.
Payoff fallbacks, detection windows, floors and insight thresholds all
live here so that simulations and tests agree on them.

Usage:
    from stratagem.parameters import CONVERGENCE_WINDOW, FITNESS_FLOOR
"""

# =============================================================================
# STRATEGY FALLBACKS
# =============================================================================

DEFAULT_STRATEGIES: tuple[str, str] = ("Cooperate", "Defect")
"""Strategies assigned to a player (or population) that declares none.

The first entry doubles as the cooperative default for tit-for-tat.
"""


# =============================================================================
# PAYOFF RESOLUTION
# =============================================================================

SYNTHETIC_PAYOFF_RANGE: tuple[float, float] = (2.0, 6.0)
"""Half-open range [low, high) for payoffs synthesized when no cell matches.

Used by both full-profile and pairwise resolution when the payoff table
is empty or no cell scores above zero.
"""

MISSING_PAYOFF_RANGE: tuple[float, float] = (4.0, 6.0)
"""Half-open range [low, high) for a player missing from a matched cell.

A matched cell that lists a strategy for a player but no payoff gets a
slightly optimistic neutral value instead of zero.
"""


# =============================================================================
# CONVERGENCE
# =============================================================================

CONVERGENCE_WINDOW = 10
"""Consecutive rounds with an identical strategy profile needed to converge.

Runs shorter than this never converge.
"""


# =============================================================================
# REPLICATOR DYNAMICS
# =============================================================================

REPLICATOR_PAYOFF_FLOOR = 0.01
"""Minimum hypothetical payoff used in the replicator update.

Keeps a strategy with zero or negative payoff from collapsing its
probability to exactly zero in one step.
"""

REPLICATOR_AVERAGE_FALLBACK = 1.0
"""Average payoff substituted when the weighted average is non-positive."""


# =============================================================================
# POPULATION EVOLUTION
# =============================================================================

FITNESS_FLOOR = 0.01
"""Minimum fitness before the selection-pressure exponent is applied.

Negative or zero fitness would otherwise produce undefined or zero
reproduction weights for strategies that still have agents.
"""


# =============================================================================
# INSIGHT THRESHOLDS
# =============================================================================

EARLY_CONVERGENCE_PCT = 25
"""Convergence at or before this percent of the run counts as early."""

MID_CONVERGENCE_PCT = 60
"""Convergence at or before this percent of the run counts as mid-game."""

CLOSE_CONTEST_GAP_PCT = 10
"""Two-player score gap (percent of mean) below which a contest is close."""

SLIGHT_EDGE_GAP_PCT = 40
"""Two-player score gap (percent of mean) below which the lead is slight."""

SWITCH_RATE_BANDS: tuple[float, float, float] = (0.1, 0.3, 0.6)
"""Switch-rate boundaries: consistent, occasional, frequent, volatile."""

HIGH_NOISE = 0.2
"""Noise above this is described as high randomness."""

DOMINANCE_PCT = 90
"""Final population share at which a strategy is called near-total."""

LEADING_PCT = 60
"""Final population share at which a strategy is called leading."""

EARLY_SHIFT_GENERATIONS = 10
"""Number of opening generations compared for the early-shift insight."""

HIGH_MUTATION = 0.05
"""Mutation rate above this is described as high."""

MAX_POPULATION_INSIGHTS = 5
"""Upper bound on population insights returned."""
