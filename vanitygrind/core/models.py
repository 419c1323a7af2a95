"""
Core Data Models
================

Domain models for a single vanity-address generation run.

These values are created once per invocation and threaded through the
pipeline: the resolved request, the derived command plan, and the result
of running the generator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class AddressType(str, Enum):
    """Where the pattern must appear in the generated address."""

    PREFIX = "prefix"
    SUFFIX = "suffix"
    BOTH = "both"


class CaseMode(str, Enum):
    SENSITIVE = "sensitive"
    INSENSITIVE = "insensitive"


class VanityRequest(BaseModel):
    """A fully resolved generation request.

    Frozen once built. Field values are not checked here; the validator
    decides whether a request may proceed so that every rejection carries
    its own reason.
    """

    model_config = ConfigDict(frozen=True)

    address_type: str = Field(description="One of prefix, suffix or both")
    prefix: str = Field(default="", description="Required for prefix and both")
    suffix: str = Field(default="", description="Required for suffix and both")
    count: int = Field(default=1, description="Number of matching addresses to generate")
    case_mode: str = Field(default=CaseMode.INSENSITIVE.value)
    out_dir: Path | None = Field(default=None, description="Where artifacts are moved after a run")
    auto_confirm: bool = False
    dry_run: bool = False
    passthrough_args: tuple[str, ...] = Field(
        default=(),
        description="Tokens forwarded verbatim to the generator",
    )

    @property
    def total_pattern_chars(self) -> int:
        return len(self.prefix) + len(self.suffix)

    @property
    def case_sensitive(self) -> bool:
        return self.case_mode == CaseMode.SENSITIVE.value


@dataclass(frozen=True)
class CostEstimate:
    """Expected search cost for a request.

    ``expected_attempts`` is an order-of-magnitude expectation, not a bound.
    """

    total_pattern_chars: int
    expected_attempts: int
    threshold: int
    requires_confirmation: bool


@dataclass(frozen=True)
class CommandPlan:
    """Argument vector for the generator plus the output-routing decision."""

    argv: tuple[str, ...]
    explicit_output_control: bool = False


@dataclass(frozen=True)
class RunResult:
    exit_code: int
    generated_files: frozenset[Path] = field(default_factory=frozenset)
    interrupted: bool = False

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0 and not self.interrupted


class Routing(str, Enum):
    """How the collector treated the generator's output."""

    MOVED = "moved"
    EXPLICIT = "explicit"
    WORKING_DIR = "working_dir"


@dataclass
class CollectionReport:
    routing: Routing
    destination: Path
    moved: list[Path] = field(default_factory=list)
    failed: dict[Path, str] = field(default_factory=dict)
    inventory: list[Path] = field(default_factory=list)
