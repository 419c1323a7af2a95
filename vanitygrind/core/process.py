"""
Generator Process Runner
========================

Runs the external generator as a child process attached to the invoking
terminal, and probes that the generator is installed.

This module provides:
- probe_generator: presence and version check
- ProcessRunner: spawns the generator and traps Ctrl+C
"""

from __future__ import annotations

import shlex
import shutil
import signal
import subprocess
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import structlog

from vanitygrind.core.collector import DEFAULT_ARTIFACT_SUFFIX, snapshot_artifacts
from vanitygrind.core.errors import EXIT_INTERRUPTED, DependencyMissing
from vanitygrind.core.models import CommandPlan, RunResult

log = structlog.get_logger()

PROBE_TIMEOUT_SECONDS = 30


def probe_generator(binary: str) -> str:
    """Check that the generator is installed and runs.

    Args:
        binary: Executable name or path

    Returns:
        First line of the generator's ``--version`` output

    Raises:
        DependencyMissing: If the binary is absent or the probe fails
    """
    path = shutil.which(binary)
    if path is None:
        raise DependencyMissing(f"'{binary}' was not found on PATH")

    try:
        completed = subprocess.run(
            [path, "--version"],
            capture_output=True,
            text=True,
            timeout=PROBE_TIMEOUT_SECONDS,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        raise DependencyMissing(f"'{binary}' could not be run: {e}") from e

    if completed.returncode != 0:
        raise DependencyMissing(f"'{binary} --version' exited with status {completed.returncode}")

    version = completed.stdout.strip().splitlines()
    log.debug("Generator found", path=path, version=version[0] if version else "")
    return version[0] if version else binary


def format_argv(argv: tuple[str, ...] | list[str]) -> str:
    """Render an argument vector for display only."""
    return shlex.join(argv)


class ProcessRunner:
    """Runs a command plan and reports the child's exit status.

    Usage:
        runner = ProcessRunner(Path.cwd(), show_plan=print_command)
        result = runner.run(plan, dry_run=request.dry_run)
    """

    def __init__(
        self,
        working_dir: Path,
        artifact_suffix: str = DEFAULT_ARTIFACT_SUFFIX,
        show_plan: Callable[[CommandPlan], None] | None = None,
        on_interrupt: Callable[[Path], None] | None = None,
    ) -> None:
        self.working_dir = Path(working_dir)
        self.artifact_suffix = artifact_suffix
        self.show_plan = show_plan
        self.on_interrupt = on_interrupt
        self._original_sigint_handler: Any = None
        self._handler_installed = False

    def run(self, plan: CommandPlan, dry_run: bool = False) -> RunResult:
        """Spawn the generator and wait for it to exit.

        stdin, stdout and stderr are inherited so the generator can prompt
        and stream progress. Ctrl+C exits this process with status 130;
        files the generator already wrote stay where they are.

        With ``dry_run`` the plan is only shown and nothing is spawned.

        Args:
            plan: Command plan to execute
            dry_run: Show the plan instead of running it

        Returns:
            RunResult with the child's status and newly present artifacts

        Raises:
            DependencyMissing: If the generator cannot be spawned
        """
        if dry_run:
            log.info("Dry run, generator not started", argv=list(plan.argv))
            if self.show_plan is not None:
                self.show_plan(plan)
            return RunResult(exit_code=0)

        before = snapshot_artifacts(self.working_dir, self.artifact_suffix)

        self._install_signal_handler()
        try:
            log.info("Starting generator", argv=list(plan.argv), cwd=str(self.working_dir))
            try:
                process = subprocess.Popen(list(plan.argv), cwd=str(self.working_dir))
            except OSError as e:
                raise DependencyMissing(f"Could not start '{plan.argv[0]}': {e}") from e
            returncode = process.wait()
        finally:
            self._restore_signal_handler()

        after = snapshot_artifacts(self.working_dir, self.artifact_suffix)
        generated = after - before

        interrupted = returncode in (-signal.SIGINT, EXIT_INTERRUPTED)
        exit_code = returncode
        if returncode < 0:
            # Killed by a signal: report it the way a shell would
            exit_code = 128 - returncode

        log.info(
            "Generator exited",
            returncode=returncode,
            generated=len(generated),
            interrupted=interrupted,
        )
        return RunResult(exit_code=exit_code, generated_files=frozenset(generated), interrupted=interrupted)

    def _handle_interrupt(self, signum: int, frame: Any) -> None:
        log.warning("Interrupt received, stopping", signal=signum)
        if self.on_interrupt is not None:
            self.on_interrupt(self.working_dir)
        self._restore_signal_handler()
        sys.exit(EXIT_INTERRUPTED)

    def _install_signal_handler(self) -> None:
        """Install the Ctrl+C handler for the duration of a run."""
        self._original_sigint_handler = signal.getsignal(signal.SIGINT)
        signal.signal(signal.SIGINT, self._handle_interrupt)
        self._handler_installed = True

    def _restore_signal_handler(self) -> None:
        if self._handler_installed:
            original = self._original_sigint_handler
            signal.signal(signal.SIGINT, original if original is not None else signal.SIG_DFL)
            self._original_sigint_handler = None
            self._handler_installed = False
