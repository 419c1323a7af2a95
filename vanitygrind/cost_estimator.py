"""
Cost Estimator for vanitygrind
==============================

Expected search cost for a vanity pattern and the confirmation policy for
long searches.

This module provides:
- expected_attempts: exact 58**n attempt count
- estimate_search_cost: CostEstimate for a request
- CostEstimator: shows the advisory and asks before long searches
"""
from __future__ import annotations

import re
from collections.abc import Callable

import structlog

from vanitygrind.core.errors import UserAbort
from vanitygrind.core.models import CostEstimate, VanityRequest

log = structlog.get_logger()


# Each pattern character is one of 58 equally likely symbols
ALPHABET_SIZE = 58

DEFAULT_CONFIRM_THRESHOLD = 5

_AFFIRMATIVE = re.compile(r"^(y|yes)$", re.IGNORECASE)


def expected_attempts(total_pattern_chars: int) -> int:
    """Expected number of candidate keys for a pattern of the given length.

    Uses integer exponentiation, so the result is exact for any length.

    Args:
        total_pattern_chars: Combined prefix and suffix length

    Returns:
        58 raised to ``total_pattern_chars``
    """
    if total_pattern_chars < 0:
        raise ValueError("Pattern length cannot be negative")
    return ALPHABET_SIZE**total_pattern_chars


def estimate_search_cost(request: VanityRequest, threshold: int = DEFAULT_CONFIRM_THRESHOLD) -> CostEstimate:
    """Estimate the cost of searching for *request*'s pattern.

    Case sensitivity is not folded into the figure; the generator's own
    cost for it depends on the letters in the pattern.

    Args:
        request: Validated request
        threshold: Pattern length above which confirmation is required

    Returns:
        CostEstimate for the request
    """
    total = request.total_pattern_chars
    return CostEstimate(
        total_pattern_chars=total,
        expected_attempts=expected_attempts(total),
        threshold=threshold,
        requires_confirmation=total > threshold and not request.auto_confirm,
    )


def is_affirmative(reply: str) -> bool:
    return bool(_AFFIRMATIVE.match(reply.strip()))


class CostEstimator:
    """Shows the cost advisory and enforces the confirmation policy.

    Usage:
        estimator = CostEstimator(threshold=5, advise=print_cost_advisory, ask=console.input)
        estimate = estimator.review(request)  # raises UserAbort on decline
    """

    def __init__(
        self,
        threshold: int = DEFAULT_CONFIRM_THRESHOLD,
        advise: Callable[[CostEstimate, VanityRequest], None] | None = None,
        ask: Callable[[str], str] | None = None,
    ) -> None:
        self.threshold = threshold
        self.advise = advise
        self.ask = ask

    def estimate(self, request: VanityRequest) -> CostEstimate:
        return estimate_search_cost(request, self.threshold)

    def review(self, request: VanityRequest) -> CostEstimate:
        """Estimate, always show the advisory, and confirm if required.

        Raises:
            UserAbort: If confirmation was required and not given
        """
        estimate = self.estimate(request)
        log.info(
            "Cost estimated",
            pattern_chars=estimate.total_pattern_chars,
            expected_attempts=estimate.expected_attempts,
            requires_confirmation=estimate.requires_confirmation,
        )

        if self.advise is not None:
            self.advise(estimate, request)

        if not estimate.requires_confirmation:
            return estimate

        if self.ask is None:
            raise UserAbort("Confirmation required for a long search; re-run with --yes to proceed")

        try:
            reply = self.ask("Are you sure you want to continue? (y/N): ")
        except EOFError:
            reply = ""

        if not is_affirmative(reply):
            log.info("Long search declined", reply=reply)
            raise UserAbort("Aborted by user.")

        return estimate
