"""Stratagem CLI module.

Provides an argparse command-line runner for the simulation engines.

Usage:
    stratagem rounds scenario.json

Or directly:
    python -m stratagem.cli.app rounds scenario.json
"""

from stratagem.cli.app import build_parser, main

__all__ = ["build_parser", "main"]
