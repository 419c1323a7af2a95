"""
CLI Runner
==========

Main execution orchestration for the vanitygrind CLI.

This module ties together all components, in order:
- Request resolution (flags, then prompts)
- Validation
- Cost estimation and confirmation
- Command construction
- Running the generator
- Output collection
"""

from __future__ import annotations

import atexit
import logging
import shutil
import sys
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

import structlog

from vanitygrind.config import VanityConfig, load_config, merge_config_with_args
from vanitygrind.core.collector import OutputCollector
from vanitygrind.core.command import build_command
from vanitygrind.core.errors import EXIT_INTERRUPTED, EXIT_OK, Interrupted, SubprocessFailure, VanityGrindError
from vanitygrind.core.process import ProcessRunner, probe_generator
from vanitygrind.core.validator import validate_request
from vanitygrind.cost_estimator import CostEstimator

from .output import (
    console,
    print_banner,
    print_collection_report,
    print_command,
    print_cost_advisory,
    print_dry_run,
    print_error,
    print_generation_start,
    print_interrupted,
    print_notice,
    print_run_failure,
    print_security_reminder,
)
from .parser import parse_args
from .resolver import RequestResolver

if TYPE_CHECKING:
    import argparse

log = structlog.get_logger()

_LEVELS = {0: logging.WARNING, 1: logging.INFO}

# Open JSON log file, if any; replaced on every configure_logging call
_log_stream: TextIO | None = None


def close_log_file() -> None:
    global _log_stream
    if _log_stream is not None:
        _log_stream.close()
        _log_stream = None


atexit.register(close_log_file)


def configure_logging(verbosity: int = 0, log_file: str | None = None) -> None:
    """Configure structlog for the CLI.

    Any log file opened by a previous call is closed first.

    Args:
        verbosity: 0 for warnings, 1 for INFO, 2+ for DEBUG
        log_file: Append JSON lines to this file instead of rendering to stderr
    """
    global _log_stream
    level = _LEVELS.get(verbosity, logging.DEBUG)

    stream: TextIO | None = None
    if log_file:
        processors = [
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ]
        stream = Path(log_file).open("at", encoding="utf-8")
        logger_factory = structlog.WriteLoggerFactory(file=stream)
    else:
        processors = [
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(),
        ]
        logger_factory = structlog.PrintLoggerFactory(file=sys.stderr)

    close_log_file()
    _log_stream = stream

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=logger_factory,
        cache_logger_on_first_use=False,
    )


def check_dependency(config: VanityConfig, dry_run: bool) -> str | None:
    """Probe the generator unless this is a dry run.

    A dry run never spawns a process, so only a PATH lookup is done and a
    missing generator is logged rather than fatal.

    Returns:
        The generator's version line, or None for a dry run
    """
    if dry_run:
        if shutil.which(config.generator) is None:
            log.warning("Generator not found on PATH", generator=config.generator)
        return None
    return probe_generator(config.generator)


def run_pipeline(
    args: argparse.Namespace,
    config: VanityConfig,
    ask: Callable[[str], str] | None = None,
    interactive: bool | None = None,
    working_dir: Path | None = None,
) -> int:
    """Run one vanity generation request end to end.

    Args:
        args: Parsed CLI arguments (with passthrough tokens)
        config: Configuration merged with the CLI arguments
        ask: Prompt function (default: the Rich console's input)
        interactive: Whether prompts may be shown (default: stdin is a TTY)
        working_dir: Directory the generator writes into (default: cwd)

    Returns:
        Exit code (0 for success)

    Raises:
        VanityGrindError: For any failure, carrying its exit code
    """
    ask = ask or console.input
    working_dir = working_dir or Path.cwd()

    version = check_dependency(config, config.dry_run)
    print_banner(version)

    request = RequestResolver(config, ask=ask, interactive=interactive).resolve(args)
    validate_request(request)

    CostEstimator(
        threshold=config.confirm_threshold,
        advise=print_cost_advisory,
        ask=ask,
    ).review(request)

    plan = build_command(request, config.generator, config.subcommand)
    log.info("Command built", argv=list(plan.argv), explicit_output_control=plan.explicit_output_control)

    collector = OutputCollector(working_dir, config.artifact_suffix)
    runner = ProcessRunner(
        working_dir,
        config.artifact_suffix,
        show_plan=print_dry_run,
        on_interrupt=print_interrupted,
    )

    if request.dry_run:
        runner.run(plan, dry_run=True)
        return EXIT_OK

    collector.prepare(request.out_dir)
    print_command(plan)

    if not request.auto_confirm:
        try:
            ask("Press Enter to start generation, or Ctrl+C to cancel...")
        except EOFError:
            log.debug("No input for start prompt, continuing")

    print_generation_start()
    result = runner.run(plan)

    if result.interrupted:
        print_interrupted(working_dir)
        raise Interrupted("Generation interrupted")

    if result.exit_code != 0:
        print_run_failure(result.exit_code)
        raise SubprocessFailure(result.exit_code)

    report = collector.collect(result, plan, request.out_dir)
    print_collection_report(report)
    print_security_reminder(config.generator, config.subcommand)
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.

    Args:
        argv: Command-line tokens (default: sys.argv[1:])

    Returns:
        Exit code
    """
    args = parse_args(sys.argv[1:] if argv is None else list(argv))
    configure_logging(args.verbose)

    config = merge_config_with_args(load_config(start_dir=Path.cwd()), args)
    if config.log_file or config.verbosity != args.verbose:
        configure_logging(config.verbosity, config.log_file)

    try:
        return run_pipeline(args, config)
    except KeyboardInterrupt:
        print_interrupted(Path.cwd())
        log.warning("Interrupted before generation started")
        return EXIT_INTERRUPTED
    except Interrupted:
        return EXIT_INTERRUPTED
    except SubprocessFailure as e:
        log.error("Generator failed", exit_code=e.exit_code)
        return e.exit_code
    except VanityGrindError as e:
        if e.exit_code == EXIT_OK:
            print_notice(e.message)
        else:
            print_error(e.message)
        log.info("Stopped", reason=e.message, exit_code=e.exit_code, kind=type(e).__name__)
        return e.exit_code
