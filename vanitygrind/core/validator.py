"""
Request Validation
==================

Checks a resolved request against the Base58 alphabet and the mode rules.

Validation fails fast: the first violated constraint is reported with its
own reason and nothing is corrected.
"""

from __future__ import annotations

from vanitygrind.core.errors import InputError
from vanitygrind.core.models import AddressType, CaseMode, VanityRequest

BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"

# Glyphs left out of Base58 because they are easily confused
AMBIGUOUS_CHARACTERS = "0OIl"

_BASE58_SET = frozenset(BASE58_ALPHABET)

_NEEDS_PREFIX = {AddressType.PREFIX.value, AddressType.BOTH.value}
_NEEDS_SUFFIX = {AddressType.SUFFIX.value, AddressType.BOTH.value}


def invalid_characters(pattern: str) -> list[str]:
    """Return the distinct characters of *pattern* outside the alphabet, in order."""
    seen: list[str] = []
    for char in pattern:
        if char not in _BASE58_SET and char not in seen:
            seen.append(char)
    return seen


def describe_invalid_pattern(label: str, pattern: str) -> str | None:
    """Return a reason if *pattern* contains non-Base58 characters."""
    bad = invalid_characters(pattern)
    if not bad:
        return None
    shown = ", ".join(repr(c) for c in bad)
    reason = f"{label.capitalize()} '{pattern}' contains characters outside the Base58 alphabet: {shown}"
    if any(c in AMBIGUOUS_CHARACTERS for c in bad):
        reason += " ('0', 'O', 'I' and 'l' are never valid)"
    return reason


def find_violation(request: VanityRequest) -> str | None:
    """Validate a request.

    Args:
        request: Resolved request

    Returns:
        Reason for the first violated constraint, None if valid
    """
    valid_types = {t.value for t in AddressType}
    if request.address_type not in valid_types:
        return f"Unknown address type '{request.address_type}' (expected one of: prefix, suffix, both)"

    if request.address_type in _NEEDS_PREFIX and not request.prefix:
        return f"A prefix is required for address type '{request.address_type}'"

    if request.address_type in _NEEDS_SUFFIX and not request.suffix:
        return f"A suffix is required for address type '{request.address_type}'"

    for label, pattern in (("prefix", request.prefix), ("suffix", request.suffix)):
        reason = describe_invalid_pattern(label, pattern)
        if reason:
            return reason

    if isinstance(request.count, bool) or not isinstance(request.count, int) or request.count < 1:
        return f"Count must be a positive integer, got {request.count!r}"

    valid_cases = {c.value for c in CaseMode}
    if request.case_mode not in valid_cases:
        return f"Unknown case mode '{request.case_mode}' (expected sensitive or insensitive)"

    if request.out_dir is not None and request.out_dir.exists() and not request.out_dir.is_dir():
        return f"Output path exists but is not a directory: {request.out_dir}"

    return None


def validate_request(request: VanityRequest) -> VanityRequest:
    """Raise InputError unless *request* satisfies every constraint."""
    reason = find_violation(request)
    if reason:
        raise InputError(reason)
    return request
