"""
CLI Argument Parser
===================

Handles command-line argument parsing for vanitygrind.

Only the orchestrator's own flags are parsed. Every other token, and
everything after a bare ``--``, is kept in order as a passthrough argument
for the generator.
"""

import argparse

PASSTHROUGH_SEPARATOR = "--"


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all CLI options.

    Returns:
        Configured ArgumentParser instance

    Example:
        >>> parser = create_argument_parser()
        >>> args, extra = parser.parse_known_args(['--type', 'prefix', '--prefix', 'Sun'])
    """
    parser = argparse.ArgumentParser(
        prog="vanitygrind",
        description="Generate vanity addresses with an external key grinder "
        "(solana-keygen grind by default). Unrecognised options are passed "
        "through to the generator.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
        epilog="""
Examples:
  vanitygrind
  vanitygrind --type prefix --prefix Sun
  vanitygrind --type both --prefix A --suffix Z --count 2 --out-dir ./vanity-outputs
  vanitygrind --type suffix --suffix node --dry-run -- --use-mnemonic --word-count 24
        """,
    )

    pattern_group = parser.add_argument_group("Pattern")

    pattern_group.add_argument(
        "--type",
        type=str,
        metavar="{prefix,suffix,both}",
        help="Where the pattern must appear (prompted for when omitted)",
    )

    pattern_group.add_argument(
        "--prefix",
        type=str,
        help="Pattern the address must start with",
    )

    pattern_group.add_argument(
        "--suffix",
        type=str,
        help="Pattern the address must end with",
    )

    pattern_group.add_argument(
        "--count",
        type=str,
        metavar="N",
        help="Number of matching addresses to generate (default: 1)",
    )

    pattern_group.add_argument(
        "--case",
        type=str,
        metavar="{sensitive,insensitive}",
        help="Case matching mode (default: insensitive)",
    )

    run_group = parser.add_argument_group("Execution")

    run_group.add_argument(
        "--yes",
        action="store_true",
        help="Do not ask for confirmation before long searches",
    )

    run_group.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the generator command without running it",
    )

    run_group.add_argument(
        "--out-dir",
        type=str,
        metavar="PATH",
        help="Move generated keypair files into this directory (created if missing)",
    )

    run_group.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v for INFO, -vv for DEBUG)",
    )

    return parser


def split_passthrough(argv: list[str]) -> tuple[list[str], list[str]]:
    """Split *argv* at the first bare ``--``.

    Returns:
        Tokens to parse, and tokens that are passthrough unconditionally
    """
    if PASSTHROUGH_SEPARATOR in argv:
        index = argv.index(PASSTHROUGH_SEPARATOR)
        return argv[:index], argv[index + 1 :]
    return list(argv), []


def parse_args(argv: list[str], parser: argparse.ArgumentParser | None = None) -> argparse.Namespace:
    """Parse orchestrator flags and collect passthrough tokens.

    Args:
        argv: Command-line tokens (without the program name)
        parser: Parser to use (default: create_argument_parser())

    Returns:
        Namespace with a ``passthrough`` list in original order
    """
    parser = parser or create_argument_parser()
    own, after_separator = split_passthrough(argv)
    args, unknown = parser.parse_known_args(own)
    args.passthrough = unknown + after_separator
    return normalize_args(args)


def normalize_args(args: argparse.Namespace) -> argparse.Namespace:
    """Normalize parsed arguments (lower-case mode names).

    Args:
        args: Parsed argument namespace

    Returns:
        Normalized argument namespace
    """
    if args.type is not None:
        args.type = args.type.strip().lower()

    if args.case is not None:
        args.case = args.case.strip().lower()

    return args
