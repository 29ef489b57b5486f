"""Command-line runner for Stratagem simulations.

Loads a GameAnalysis JSON file, runs one of the engines and prints a
plain-text summary. This is the only module in the package that reads
files or writes to stdout.

Usage:
    stratagem rounds scenario.json --strategy tit-for-tat --rounds 30 --seed 7
    stratagem population scenario.json --generations 80 --seed 7
    stratagem tournament scenario.json --seed 7
    stratagem sweep scenario.json --parameter noise
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from stratagem.engine import run_population_simulation, run_round_simulation
from stratagem.experiments import (
    PARAMETER_LABELS,
    PARAMETER_RANGES,
    rank_entries,
    run_policy_tournament,
    sweep_parameter,
)
from stratagem.models import GameAnalysis, PopulationConfig, SimulationConfig

EXIT_USAGE = 2


def load_analysis(path: Path) -> GameAnalysis:
    """Parse a scenario file into a GameAnalysis."""
    return GameAnalysis.model_validate_json(path.read_text())


def _simulation_config(args: argparse.Namespace) -> SimulationConfig:
    return SimulationConfig(
        rounds=args.rounds,
        noise=args.noise,
        learning_rate=args.learning_rate,
        strategy=args.strategy,
        seed=args.seed,
    )


def cmd_rounds(args: argparse.Namespace) -> None:
    analysis = load_analysis(args.scenario)
    result = run_round_simulation(analysis, _simulation_config(args))

    print(f"{analysis.title or 'Scenario'}: {len(result.rounds)} rounds, strategy={result.config.strategy}")
    for pid, total in result.final_payoffs.items():
        print(f"  {analysis.name_of(pid):<24} {total:10.2f}")
    if result.convergence.converged:
        print(f"Converged at round {result.convergence.equilibrium_round}: {result.convergence.final_strategies}")
    else:
        print("Did not converge")
    print()
    print(result.narrative)
    print()
    for insight in result.insights:
        print(f"- {insight}")


def cmd_population(args: argparse.Namespace) -> None:
    analysis = load_analysis(args.scenario)
    config = PopulationConfig(
        population_size=args.population_size,
        generations=args.generations,
        mutation_rate=args.mutation_rate,
        selection_pressure=args.selection_pressure,
        seed=args.seed,
    )
    result = run_population_simulation(analysis, config)

    final = result.generations[-1]
    print(f"{len(result.generations)} generations, population {config.population_size}")
    for strategy in result.all_strategies:
        count = final.strategy_counts.get(strategy, 0)
        fitness = final.strategy_fitness.get(strategy, 0.0)
        print(f"  {strategy:<24} {count:5d}  fitness {fitness:6.2f}")
    print(f"Dominant: {result.dominant_strategy}")
    if result.extinct_strategies:
        print(f"Extinct: {', '.join(result.extinct_strategies)}")
    print()
    for insight in result.insights:
        print(f"- {insight}")


def cmd_tournament(args: argparse.Namespace) -> None:
    analysis = load_analysis(args.scenario)
    entries = rank_entries(run_policy_tournament(analysis, _simulation_config(args)), args.sort)

    print(f"{'Policy':<22} {'Welfare':>10}  Converged")
    for entry in entries:
        converged = f"round {entry.convergence_round}" if entry.converged else "no"
        print(f"{entry.policy:<22} {entry.total_welfare:10.2f}  {converged}")


def cmd_sweep(args: argparse.Namespace) -> None:
    analysis = load_analysis(args.scenario)
    points = sweep_parameter(analysis, _simulation_config(args), args.parameter)

    print(f"Sensitivity to {PARAMETER_LABELS[args.parameter]}")
    for point in points:
        payoffs = "  ".join(f"{analysis.name_of(pid)}={v:.1f}" for pid, v in point.total_payoffs.items())
        print(f"  {point.parameter_value:>6}  {payoffs}  {'converged' if point.converged else ''}")


def _add_simulation_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--rounds", type=int, default=20, help="Rounds per run (default: 20)")
    parser.add_argument("--noise", type=float, default=0.1, help="Noise probability (default: 0.1)")
    parser.add_argument("--learning-rate", type=float, default=0.3, help="Adaptive learning rate (default: 0.3)")
    parser.add_argument("--strategy", default="adaptive", help="Policy name or 'mixed' (default: adaptive)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="stratagem", description="Run game-theory simulations")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    rounds = subparsers.add_parser("rounds", help="Round-by-round simulation")
    rounds.add_argument("scenario", type=Path)
    _add_simulation_args(rounds)
    rounds.set_defaults(func=cmd_rounds)

    population = subparsers.add_parser("population", help="Evolutionary population simulation")
    population.add_argument("scenario", type=Path)
    population.add_argument("--population-size", type=int, default=100)
    population.add_argument("--generations", type=int, default=50)
    population.add_argument("--mutation-rate", type=float, default=0.02)
    population.add_argument("--selection-pressure", type=float, default=0.5)
    population.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    population.set_defaults(func=cmd_population)

    tournament = subparsers.add_parser("tournament", help="Compare every policy on one scenario")
    tournament.add_argument("scenario", type=Path)
    _add_simulation_args(tournament)
    tournament.add_argument("--sort", choices=["payoff", "convergence", "alpha"], default="payoff")
    tournament.set_defaults(func=cmd_tournament)

    sweep = subparsers.add_parser("sweep", help="Sensitivity sweep over one parameter")
    sweep.add_argument("scenario", type=Path)
    _add_simulation_args(sweep)
    sweep.add_argument("--parameter", choices=sorted(PARAMETER_RANGES), default="noise")
    sweep.set_defaults(func=cmd_sweep)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``stratagem`` console script."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        args.func(args)
    except ValidationError as e:
        print(f"Invalid configuration or scenario:\n{e}", file=sys.stderr)
        return EXIT_USAGE
    except OSError as e:
        print(f"Cannot read scenario: {e}", file=sys.stderr)
        return EXIT_USAGE
    return 0


if __name__ == "__main__":
    sys.exit(main())
