"""
vanitygrind Core Module
=======================

Core domain logic for building and running a vanity generator invocation.

Submodules:
- models: Data models (VanityRequest, CommandPlan, RunResult, ...)
- errors: Error taxonomy and exit codes
- validator: Base58 and mode validation
- command: Argument vector construction
- process: Generator probing and execution
- collector: Artifact relocation
"""

from vanitygrind.core.collector import OutputCollector, snapshot_artifacts
from vanitygrind.core.command import build_command
from vanitygrind.core.errors import (
    DependencyMissing,
    InputError,
    Interrupted,
    SubprocessFailure,
    UserAbort,
    VanityGrindError,
)
from vanitygrind.core.models import (
    AddressType,
    CaseMode,
    CollectionReport,
    CommandPlan,
    CostEstimate,
    Routing,
    RunResult,
    VanityRequest,
)
from vanitygrind.core.process import ProcessRunner, probe_generator
from vanitygrind.core.validator import BASE58_ALPHABET, find_violation, validate_request

__all__ = [
    # Models
    "AddressType",
    "CaseMode",
    "VanityRequest",
    "CostEstimate",
    "CommandPlan",
    "RunResult",
    "Routing",
    "CollectionReport",
    # Errors
    "VanityGrindError",
    "InputError",
    "DependencyMissing",
    "UserAbort",
    "Interrupted",
    "SubprocessFailure",
    # Validation
    "BASE58_ALPHABET",
    "find_violation",
    "validate_request",
    # Command / process / output
    "build_command",
    "ProcessRunner",
    "probe_generator",
    "OutputCollector",
    "snapshot_artifacts",
]
