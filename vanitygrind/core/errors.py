"""
Error Taxonomy
==============

Every failure path of the pipeline maps to exactly one of these exceptions,
and each exception carries the process exit code the CLI reports for it.
"""

EXIT_OK = 0
EXIT_INPUT_ERROR = 2
EXIT_DEPENDENCY_MISSING = 3
EXIT_INTERRUPTED = 130


class VanityGrindError(Exception):
    """Base class for all vanitygrind exceptions."""

    exit_code: int = 1

    def __init__(self, message: str = "", exit_code: int | None = None):
        super().__init__(message)
        self.message = message
        if exit_code is not None:
            self.exit_code = exit_code


class InputError(VanityGrindError):
    """A request failed validation or could not be resolved."""

    exit_code = EXIT_INPUT_ERROR


class DependencyMissing(VanityGrindError):
    """The external generator is absent or not functional."""

    exit_code = EXIT_DEPENDENCY_MISSING


class UserAbort(VanityGrindError):
    """The user declined to continue. Not an error."""

    exit_code = EXIT_OK


class Interrupted(VanityGrindError):
    exit_code = EXIT_INTERRUPTED


class SubprocessFailure(VanityGrindError):
    """The generator exited with a non-zero status."""

    def __init__(self, exit_code: int):
        super().__init__(f"Generator exited with status {exit_code}", exit_code=exit_code)
