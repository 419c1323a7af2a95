"""
Request Resolution
==================

Merges command-line flags, configuration defaults and interactive answers
into a single frozen VanityRequest.

Each interactive field has its own bounded retry loop: an invalid reply is
re-asked up to ``max_attempts`` times before resolution fails.
"""

from __future__ import annotations

import argparse
import re
import sys
from collections.abc import Callable
from pathlib import Path

import structlog

from vanitygrind.cli import output
from vanitygrind.config import VanityConfig
from vanitygrind.core.errors import InputError, UserAbort
from vanitygrind.core.models import AddressType, VanityRequest
from vanitygrind.core.validator import describe_invalid_pattern

log = structlog.get_logger()

_POSITIVE_INT = re.compile(r"^[1-9][0-9]*$")

# Menu choice -> address type; the remaining choices are handled separately
_MENU_TYPES = {
    "1": AddressType.PREFIX,
    "2": AddressType.SUFFIX,
    "3": AddressType.BOTH,
}
_MENU_EXAMPLE = "4"
_MENU_EXIT = "5"


def infer_address_type(prefix: str | None, suffix: str | None) -> str | None:
    """Infer the address type from which patterns were given."""
    if prefix and suffix:
        return AddressType.BOTH.value
    if prefix:
        return AddressType.PREFIX.value
    if suffix:
        return AddressType.SUFFIX.value
    return None


def parse_count(raw: str) -> int:
    """Parse a --count value.

    Raises:
        InputError: If the value is not an integer
    """
    try:
        return int(raw.strip())
    except ValueError as e:
        raise InputError(f"Count must be a positive integer, got '{raw}'") from e


class RequestResolver:
    """Builds a VanityRequest from flags, falling back to prompts.

    Usage:
        resolver = RequestResolver(config)
        request = resolver.resolve(args)
    """

    def __init__(
        self,
        config: VanityConfig,
        ask: Callable[[str], str] | None = None,
        interactive: bool | None = None,
    ) -> None:
        self.config = config
        self.ask = ask or output.console.input
        self.interactive = sys.stdin.isatty() if interactive is None else interactive
        self.max_attempts = max(1, config.max_prompt_attempts)

    def resolve(self, args: argparse.Namespace) -> VanityRequest:
        """Resolve parsed flags into a request.

        Args:
            args: Namespace from cli.parser.parse_args

        Returns:
            Frozen VanityRequest (not yet validated)

        Raises:
            UserAbort: If the user chose Exit or closed input
            InputError: If a required value cannot be obtained
        """
        prefix = args.prefix or ""
        suffix = args.suffix or ""
        address_type = args.type or infer_address_type(prefix, suffix)

        used_menu = False
        if address_type is None:
            self._require_interactive("--type")
            address_type = self._choose_address_type().value
            used_menu = True

        # A pattern the chosen type never matches on is not part of the search
        if address_type == AddressType.PREFIX.value and suffix:
            log.warning("Ignoring --suffix for a prefix search", suffix=suffix)
            suffix = ""
        elif address_type == AddressType.SUFFIX.value and prefix:
            log.warning("Ignoring --prefix for a suffix search", prefix=prefix)
            prefix = ""

        if address_type in (AddressType.PREFIX.value, AddressType.BOTH.value) and not prefix:
            if used_menu or self.interactive:
                prefix = self._ask_pattern("prefix", "e.g. 'MyWa11et'")

        if address_type in (AddressType.SUFFIX.value, AddressType.BOTH.value) and not suffix:
            if used_menu or self.interactive:
                suffix = self._ask_pattern("suffix", "e.g. 'node'")

        if args.count is not None:
            count = parse_count(args.count)
        elif used_menu:
            count = self._ask_count()
        else:
            count = self.config.default_count

        out_dir = Path(self.config.out_dir).expanduser() if self.config.out_dir else None

        request = VanityRequest(
            address_type=address_type,
            prefix=prefix,
            suffix=suffix,
            count=count,
            case_mode=self.config.case,
            out_dir=out_dir,
            auto_confirm=self.config.auto_confirm,
            dry_run=self.config.dry_run,
            passthrough_args=tuple(args.passthrough),
        )
        log.debug("Request resolved", request=request.model_dump(mode="json"), interactive=used_menu)
        return request

    def _require_interactive(self, flag: str) -> None:
        if not self.interactive:
            raise InputError(f"Missing {flag} and no terminal to ask on")

    def _prompt(self, message: str) -> str:
        try:
            return self.ask(message)
        except EOFError as e:
            raise UserAbort("Input closed, exiting.") from e

    def _exhausted(self, what: str) -> InputError:
        return InputError(f"Too many invalid replies for {what}")

    def _choose_address_type(self) -> AddressType:
        """Show the menu until a type is chosen."""
        attempts = 0
        while attempts < self.max_attempts:
            output.print_menu()
            reply = self._prompt("Choose an option [1-5]: ").strip()

            if reply in _MENU_TYPES:
                return _MENU_TYPES[reply]
            if reply == _MENU_EXAMPLE:
                output.print_advanced_example(self.config.generator, self.config.subcommand)
                continue
            if reply == _MENU_EXIT:
                raise UserAbort("Exiting.")

            attempts += 1
            output.print_invalid_reply(f"Invalid option '{reply}'")

        raise self._exhausted("the address type")

    def _ask_pattern(self, label: str, hint: str) -> str:
        output.print_base58_reminder()
        for _ in range(self.max_attempts):
            reply = self._prompt(f"Enter the desired {label} ({hint}): ").strip()
            if not reply:
                output.print_invalid_reply(f"The {label} cannot be empty.")
                continue
            reason = describe_invalid_pattern(label, reply)
            if reason:
                output.print_invalid_reply(reason)
                continue
            return reply
        raise self._exhausted(f"the {label}")

    def _ask_count(self) -> int:
        default = self.config.default_count
        for _ in range(self.max_attempts):
            reply = self._prompt(f"How many addresses should be generated? (default: {default}): ").strip()
            if not reply:
                return default
            if _POSITIVE_INT.match(reply):
                return int(reply)
            output.print_invalid_reply("Please enter a valid positive integer.")
        raise self._exhausted("the count")
