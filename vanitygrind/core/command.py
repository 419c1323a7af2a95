"""
Command Construction
====================

Maps a validated request onto the generator's argument vector.

The vector is handed to the process layer as a list, never joined into a
string for a shell to re-parse.
"""

from __future__ import annotations

from vanitygrind.core.models import AddressType, CaseMode, CommandPlan, VanityRequest

DEFAULT_GENERATOR = "solana-keygen"
DEFAULT_SUBCOMMAND = "grind"

IGNORE_CASE_FLAG = "--ignore-case"

# Passthrough tokens that mean the caller routes output themselves
OUTPUT_CONTROL_FLAGS = ("--no-outfile", "--outfile")


def match_arguments(request: VanityRequest) -> list[str]:
    """Return the match flag and its PATTERN:COUNT value for *request*."""
    if request.address_type == AddressType.PREFIX.value:
        return ["--starts-with", f"{request.prefix}:{request.count}"]
    if request.address_type == AddressType.SUFFIX.value:
        return ["--ends-with", f"{request.suffix}:{request.count}"]
    if request.address_type == AddressType.BOTH.value:
        return ["--starts-and-ends-with", f"{request.prefix}:{request.suffix}:{request.count}"]
    raise ValueError(f"Invalid address type: {request.address_type}")


def has_output_control(tokens: tuple[str, ...] | list[str]) -> bool:
    for token in tokens:
        name = token.split("=", 1)[0]
        if name in OUTPUT_CONTROL_FLAGS:
            return True
    return False


def build_command(
    request: VanityRequest,
    generator: str = DEFAULT_GENERATOR,
    subcommand: str = DEFAULT_SUBCOMMAND,
) -> CommandPlan:
    """Build the argument vector for a validated request.

    Passthrough arguments go last so the generator's own parser sees them
    after the generated flags.

    Args:
        request: Validated request
        generator: Generator executable
        subcommand: Generator subcommand (empty string for none)

    Returns:
        CommandPlan with the argv and the output-routing flag

    Example:
        >>> plan = build_command(VanityRequest(address_type="prefix", prefix="Sun"))
        >>> plan.argv
        ('solana-keygen', 'grind', '--starts-with', 'Sun:1', '--ignore-case')
    """
    argv = [generator]
    if subcommand:
        argv.append(subcommand)

    argv.extend(match_arguments(request))

    if request.case_mode == CaseMode.INSENSITIVE.value:
        argv.append(IGNORE_CASE_FLAG)

    argv.extend(request.passthrough_args)

    return CommandPlan(
        argv=tuple(argv),
        explicit_output_control=has_output_control(request.passthrough_args),
    )
