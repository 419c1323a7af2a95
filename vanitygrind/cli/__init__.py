"""
Command Line Interface Module
=============================

Provides CLI parsing, interactive request resolution, output formatting,
and execution orchestration.

Submodules:
- parser: Argument parsing and passthrough collection
- resolver: Flag and prompt merging into a VanityRequest
- output: Console output formatting and display
- runner: Main execution orchestration
"""

from vanitygrind.cli.output import (
    print_collection_report,
    print_command,
    print_cost_advisory,
    print_dry_run,
)
from vanitygrind.cli.parser import create_argument_parser, normalize_args, parse_args
from vanitygrind.cli.resolver import RequestResolver
from vanitygrind.cli.runner import configure_logging, main, run_pipeline

__all__ = [
    # Parser
    "create_argument_parser",
    "parse_args",
    "normalize_args",
    # Resolver
    "RequestResolver",
    # Output
    "print_cost_advisory",
    "print_command",
    "print_dry_run",
    "print_collection_report",
    # Runner
    "run_pipeline",
    "main",
    "configure_logging",
]
