"""
vanitygrind - Vanity Address Generation Orchestrator
====================================================

vanitygrind builds and runs an external key grinder (solana-keygen grind
by default) for a chosen address prefix, suffix, or both.

Key Features:
- Flag-driven or interactive pattern selection
- Base58 validation before anything runs
- Expected-cost advisory with confirmation for long searches
- Shell-free argument vector with passthrough generator options
- Clean Ctrl+C handling that keeps partial results
- Collection of generated keypair files into an output directory

Modules:
- core: Domain logic (models, validation, command, process, collection)
- cli: Command-line interface
- cost_estimator: Search cost estimation and confirmation policy
- config: YAML configuration file support

Usage:
    # CLI
    python -m vanitygrind --type prefix --prefix Sun

    # Programmatic
    from vanitygrind.core import VanityRequest, build_command
"""

__version__ = "0.3.0"

# Re-export key classes for convenience
from vanitygrind.cli import main, run_pipeline
from vanitygrind.config import VanityConfig, load_config
from vanitygrind.core import (
    AddressType,
    CaseMode,
    CommandPlan,
    OutputCollector,
    ProcessRunner,
    RunResult,
    VanityRequest,
    build_command,
    validate_request,
)
from vanitygrind.cost_estimator import CostEstimator, estimate_search_cost, expected_attempts

__all__ = [
    # Version info
    "__version__",
    # Core
    "AddressType",
    "CaseMode",
    "VanityRequest",
    "CommandPlan",
    "RunResult",
    "validate_request",
    "build_command",
    "ProcessRunner",
    "OutputCollector",
    # Cost
    "CostEstimator",
    "estimate_search_cost",
    "expected_attempts",
    # Config
    "VanityConfig",
    "load_config",
    # CLI
    "main",
    "run_pipeline",
]
