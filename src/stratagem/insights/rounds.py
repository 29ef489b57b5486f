"""Plain-language insights and narratives for round simulations.

Everything here is descriptive: it reads a finished round sequence and
never influences the simulation itself.
"""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Sequence

from stratagem.models.analysis import GameAnalysis, PlayerId
from stratagem.models.config import MIXED, SimulationConfig
from stratagem.models.results import Convergence, SimulationRound
from stratagem.parameters import (
    CLOSE_CONTEST_GAP_PCT,
    EARLY_CONVERGENCE_PCT,
    HIGH_NOISE,
    MID_CONVERGENCE_PCT,
    SLIGHT_EDGE_GAP_PCT,
    SWITCH_RATE_BANDS,
)

MIXED_DESCRIPTION = (
    "Each player used a completely different decision-making approach. This simulates "
    "a more realistic world where not everyone thinks the same way: some are cautious, "
    "some are aggressive, some are unpredictable."
)

FALLBACK_DESCRIPTION = "Players used a strategic algorithm to make their choices each round."


def describe_policy(strategy: str) -> str:
    """One-paragraph explanation of how a policy (or mixed mode) behaves."""
    if strategy == MIXED:
        return MIXED_DESCRIPTION
    from stratagem.policies.base import get_policy_by_name

    try:
        return get_policy_by_name(strategy).description or FALLBACK_DESCRIPTION
    except ValueError:
        return FALLBACK_DESCRIPTION


def count_switches(
    rounds: Sequence[SimulationRound],
    player_id: PlayerId,
) -> int:
    """Number of times a player changed strategy between consecutive rounds."""
    return sum(
        1
        for i in range(1, len(rounds))
        if rounds[i].strategies.get(player_id) != rounds[i - 1].strategies.get(player_id)
    )


def _ranked_scores(
    round_: SimulationRound,
    player_ids: Sequence[PlayerId],
) -> list[tuple[PlayerId, float]]:
    scores = [(pid, round_.cumulative_payoffs.get(pid, 0.0)) for pid in player_ids]
    return sorted(scores, key=lambda item: item[1], reverse=True)


def _gap_ratio(best: float, worst: float) -> float:
    """Gap between two scores as a fraction of their mean (0 if mean <= 0)."""
    mean = (best + worst) / 2
    return (best - worst) / mean if mean > 0 else 0.0


def generate_insights(
    rounds: Sequence[SimulationRound],
    player_ids: Sequence[PlayerId],
    convergence: Convergence,
    config: SimulationConfig,
    analysis: GameAnalysis,
) -> list[str]:
    """Produce human-readable insights about a round simulation.

    Covers the policy used, convergence timing, who came out on top,
    strategy switching, noise, and the scenario's Nash equilibrium.
    """
    insights = [describe_policy(config.strategy)]

    if convergence.converged and convergence.equilibrium_round is not None:
        eq_round = convergence.equilibrium_round
        pct_through = round(eq_round / len(rounds) * 100)
        if pct_through <= EARLY_CONVERGENCE_PCT:
            insights.append(
                f"The players figured things out quickly. By round {eq_round} (early in the "
                f"game), everyone settled into a stable pattern and stopped changing their "
                f"approach. This suggests the game has a strong, obvious equilibrium."
            )
        elif pct_through <= MID_CONVERGENCE_PCT:
            insights.append(
                f"After some initial back-and-forth, the players found a stable arrangement "
                f"around round {eq_round}. It took some experimentation, but eventually "
                f"everyone settled into a consistent pattern."
            )
        else:
            insights.append(
                f"It took most of the game for things to stabilize. Players kept adjusting "
                f"their strategies until round {eq_round} before finally settling down. This "
                f"suggests the game's equilibrium isn't immediately obvious."
            )
    else:
        insights.append(
            "The players never settled into a stable pattern; they kept switching strategies "
            "right up to the end. This can mean the game doesn't have a clear \"best\" outcome, "
            "or that the players are caught in a cycle where every move invites a counter-move."
        )

    if rounds and player_ids:
        scores = _ranked_scores(rounds[-1], player_ids)
        (best_id, best_score), (worst_id, worst_score) = scores[0], scores[-1]
        best_name, worst_name = analysis.name_of(best_id), analysis.name_of(worst_id)
        if len(scores) == 2:
            gap_pct = _gap_ratio(best_score, worst_score) * 100
            if gap_pct < CLOSE_CONTEST_GAP_PCT:
                insights.append(
                    f"This was a very close contest. {best_name} and {worst_name} ended up with "
                    f"nearly identical scores, suggesting neither side had a clear advantage."
                )
            elif gap_pct < SLIGHT_EDGE_GAP_PCT:
                insights.append(
                    f"{best_name} came out ahead, but not by a huge margin. {worst_name} stayed "
                    f"competitive throughout, which points to a slight strategic edge rather "
                    f"than total domination."
                )
            else:
                insights.append(
                    f"{best_name} clearly dominated this simulation, pulling far ahead of "
                    f"{worst_name}. A gap this large usually means one player's strategy was "
                    f"much better suited to this game."
                )
        else:
            insights.append(
                f"{best_name} came out on top overall, while {worst_name} ended with the lowest "
                f"score. With more than two players, alliances and rivalries can shift the balance."
            )

    transitions = (len(rounds) - 1) * len(player_ids)
    if transitions > 0:
        switch_rate = sum(count_switches(rounds, pid) for pid in player_ids) / transitions
        consistent, occasional, frequent = SWITCH_RATE_BANDS
        if switch_rate < consistent:
            insights.append(
                "Players were very consistent with their strategies, rarely changing their "
                "approach. They quickly found moves they were comfortable with and stuck to them."
            )
        elif switch_rate < occasional:
            insights.append(
                "Players occasionally switched strategies when they saw an opportunity, but "
                "mostly stuck to familiar approaches. This is typical of players who are learning."
            )
        elif switch_rate < frequent:
            insights.append(
                "There was a lot of strategic back-and-forth: players frequently changed their "
                "approach in response to what others were doing."
            )
        else:
            insights.append(
                "Strategies were extremely volatile, with players constantly changing their "
                "moves. Every move invited a counter-move, creating an unpredictable arms race."
            )

    if config.noise > HIGH_NOISE:
        insights.append(
            "The high randomness setting means players sometimes made \"mistakes\" or "
            "unexpected moves. This simulates real-world unpredictability and makes outcomes "
            "less predictable but often more realistic."
        )
    elif config.noise > 0:
        insights.append(
            "A small amount of randomness was mixed in, so players occasionally deviated from "
            "their usual pattern, as people sometimes do in real life."
        )

    if analysis.nash_equilibrium:
        insights.append(
            f"For context, game theory predicts this scenario has a Nash Equilibrium, a "
            f"situation where no player can improve their outcome by changing strategy alone. "
            f"Here's what theory says: \"{analysis.nash_equilibrium}\""
        )

    return insights


def generate_narrative(
    rounds: Sequence[SimulationRound],
    player_ids: Sequence[PlayerId],
    convergence: Convergence,
    analysis: GameAnalysis,
) -> str:
    """Tell the story of the simulation in a short paragraph."""
    if not player_ids:
        return ""

    names = [analysis.name_of(pid) for pid in player_ids]
    parts: list[str] = []

    if len(names) == 1:
        parts.append(f"{names[0]} played alone over {len(rounds)} rounds.")
    elif len(names) == 2:
        parts.append(f"{names[0]} and {names[1]} faced off over {len(rounds)} rounds.")
    else:
        parts.append(f"{', '.join(names[:-1])} and {names[-1]} competed over {len(rounds)} rounds.")

    early = rounds[: math.ceil(len(rounds) * 0.25)]
    early_switches = {pid: count_switches(early, pid) for pid in player_ids}
    most = max(player_ids, key=lambda pid: early_switches[pid])
    least = min(player_ids, key=lambda pid: early_switches[pid])
    if early_switches[most] > 2:
        parts.append(
            f"In the opening rounds, {analysis.name_of(most)} experimented with different "
            f"approaches, trying to find what works."
        )
    else:
        subject = "Both sides" if len(player_ids) == 2 else "Every player"
        parts.append(
            f"{subject} started with a clear plan from the beginning, committing to their "
            f"chosen strategies early on."
        )
    if most != least and early_switches[least] == 0:
        parts.append(f"Meanwhile, {analysis.name_of(least)} stayed consistent from the start.")

    midpoint = len(rounds) // 2
    if 0 < midpoint < len(rounds):
        scores = _ranked_scores(rounds[midpoint], player_ids)
        (leader, lead_score), (_, trail_score) = scores[0], scores[-1]
        if _gap_ratio(lead_score, trail_score) > 0.3:
            parts.append(f"By the halfway point, {analysis.name_of(leader)} had pulled ahead with a clear lead.")
        else:
            parts.append("At the halfway mark, the scores were still close and neither side had a decisive advantage.")

    if convergence.converged:
        locked = " and ".join(
            f"{analysis.name_of(pid)} locked in \"{strategy}\""
            for pid, strategy in convergence.final_strategies.items()
        )
        parts.append(
            f"By round {convergence.equilibrium_round}, the dust settled: {locked}. From that "
            f"point on, nobody had any reason to change."
        )
    else:
        parts.append(
            "Even by the final round, the players were still jockeying for position. No stable "
            "pattern emerged."
        )

    if rounds:
        scores = _ranked_scores(rounds[-1], player_ids)
        if len(scores) == 2:
            mean = (scores[0][1] + scores[1][1]) / 2
            if mean > 0 and (scores[0][1] - scores[1][1]) / mean < 0.05:
                parts.append("In the end, it was essentially a draw; both sides came away with similar results.")
            else:
                parts.append(f"When the final scores were tallied, {analysis.name_of(scores[0][0])} came out ahead.")
        else:
            parts.append(f"In the final standings, {analysis.name_of(scores[0][0])} finished first.")

    return " ".join(parts)


def _describe_frequency(name: str, rounds: Sequence[SimulationRound], player_id: PlayerId) -> str:
    frequency = Counter(r.strategies.get(player_id) for r in rounds)
    ranked = frequency.most_common()
    if len(ranked) == 1:
        return (
            f"{name} used \"{ranked[0][0]}\" every single round, completely committed to one "
            f"approach from start to finish."
        )
    if len(ranked) == 2:
        main_pct = round(ranked[0][1] / len(rounds) * 100)
        if main_pct >= 80:
            return (
                f"{name} mostly relied on \"{ranked[0][0]}\", only occasionally switching to "
                f"\"{ranked[1][0]}\" when the situation called for it."
            )
        return (
            f"{name} alternated between \"{ranked[0][0]}\" and \"{ranked[1][0]}\", using both "
            f"approaches throughout the game."
        )
    return f"{name} tried {len(ranked)} different strategies, with \"{ranked[0][0]}\" being the go-to choice."


def _describe_switching(rounds: Sequence[SimulationRound], player_id: PlayerId) -> str:
    switches = count_switches(rounds, player_id)
    if switches == 0:
        return "They never wavered or changed course."
    if switches <= 3:
        return "They only changed strategy a few times, suggesting they found a comfortable approach early."

    half = len(rounds) // 2
    early = count_switches(rounds[:half], player_id)
    late = count_switches(rounds[half:], player_id)
    if early > late * 2:
        return "They experimented a lot early on, then settled down as they figured out what works."
    if late > early * 2:
        return "They started steady but became more reactive later, perhaps responding to changes from other players."
    return "They kept adjusting throughout the game, never fully committing to a single approach."


def _describe_trajectory(rounds: Sequence[SimulationRound], player_id: PlayerId) -> str | None:
    if len(rounds) < 4:
        return None
    # Totals after the first quarter and after three quarters of the rounds
    q1_count = math.floor(len(rounds) * 0.25)
    q3_count = math.floor(len(rounds) * 0.75)
    q1 = rounds[q1_count - 1].cumulative_payoffs.get(player_id, 0.0)
    q3 = rounds[q3_count - 1].cumulative_payoffs.get(player_id, 0.0)
    final = rounds[-1].cumulative_payoffs.get(player_id, 0.0)
    early_avg = q1 / q1_count
    late_avg = (final - q3) / (len(rounds) - q3_count)

    if late_avg > early_avg * 1.3:
        return "Their results improved over time; they got better as the game went on."
    if early_avg > late_avg * 1.3:
        return "They started strong but their performance declined as opponents adapted."
    return "Their performance stayed fairly consistent throughout the game."


def generate_strategy_narrative(
    rounds: Sequence[SimulationRound],
    player_ids: Sequence[PlayerId],
    convergence: Convergence,
    analysis: GameAnalysis,
) -> dict[PlayerId, str]:
    """Per-player summary of strategy use, switching and performance."""
    narratives: dict[PlayerId, str] = {}
    if not rounds:
        return narratives

    for pid in player_ids:
        parts = [
            _describe_frequency(analysis.name_of(pid), rounds, pid),
            _describe_switching(rounds, pid),
        ]
        if convergence.converged and convergence.final_strategies.get(pid):
            parts.append(
                f"Ultimately, they settled on \"{convergence.final_strategies[pid]}\" as their final answer."
            )
        trajectory = _describe_trajectory(rounds, pid)
        if trajectory:
            parts.append(trajectory)
        narratives[pid] = " ".join(parts)

    return narratives
