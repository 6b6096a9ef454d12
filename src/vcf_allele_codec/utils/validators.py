"""Input validation utilities for allele tokens."""

import re
from enum import Enum

VALID_BASES = frozenset("ACGTN")
SINGLE_BASES = frozenset("ACGT")

DELETION_LENGTH_PATTERN = re.compile(r"[0-9]+")


class EncodingRule(Enum):
    """The grammar rule an allele token violated."""

    EMPTY = "empty"
    SINGLE_BASE_ALPHABET = "single_base_alphabet"
    UNRECOGNIZED_MARKER = "unrecognized_marker"
    INSERTION_ALPHABET = "insertion_alphabet"
    DELETION_LENGTH = "deletion_length"


class ValidationError(ValueError):
    """Raised when input validation fails."""

    pass


class InvalidEncodingError(ValidationError):
    """Raised when a string is not a valid allele token.

    Attributes:
        raw: The offending input string.
        rule: The grammar rule that was violated.
    """

    def __init__(self, message: str, raw: str, rule: EncodingRule):
        super().__init__(message)
        self.raw = raw
        self.rule = rule


class NumberFormatError(InvalidEncodingError):
    """Raised when a deletion length is not a non-negative integer."""

    def __init__(self, message: str, raw: str):
        super().__init__(message, raw, EncodingRule.DELETION_LENGTH)


def is_valid_bases(bases: str) -> bool:
    """Check that a string only holds nucleotide codes.

    Comparison is case-insensitive. An empty string is trivially valid;
    callers that need a non-empty run check the length themselves.

    Args:
        bases: Candidate base string

    Returns:
        True if every character is one of A, C, G, T, N
    """
    return all(c in VALID_BASES for c in bases.upper())


def validate_single_base(value: str) -> str:
    """Validate and normalize a single-base allele call.

    Args:
        value: One-character allele string

    Returns:
        The uppercased base

    Raises:
        InvalidEncodingError: If value is not exactly one of A, C, G, T
    """
    normalized = value.upper()
    if len(normalized) != 1 or normalized not in SINGLE_BASES:
        raise InvalidEncodingError(
            f"Alleles of length 1 must be one of A, C, G, T; '{value}' was passed in",
            raw=value,
            rule=EncodingRule.SINGLE_BASE_ALPHABET,
        )
    return normalized


def validate_insertion_bases(value: str, raw: str | None = None) -> str:
    """Validate and normalize the inserted bases of an insertion allele.

    Args:
        value: Inserted bases, without the leading marker
        raw: Full token the bases came from, used in error reporting

    Returns:
        The uppercased base string

    Raises:
        InvalidEncodingError: If the string is empty or holds non-nucleotide codes
    """
    raw = value if raw is None else raw
    if not value or not is_valid_bases(value):
        raise InvalidEncodingError(
            f"The insertion base string contained invalid bases: '{raw}'. "
            f"Expected a non-empty run of A, C, G, T, N",
            raw=raw,
            rule=EncodingRule.INSERTION_ALPHABET,
        )
    return value.upper()


def parse_deletion_length(value: str, raw: str | None = None) -> int:
    """Parse the length of a deletion allele.

    Only plain decimal digits are accepted; signs, whitespace and digit
    separators are rejected even though ``int()`` would take them.

    Args:
        value: Length string, without the leading marker
        raw: Full token the length came from, used in error reporting

    Returns:
        The deletion length

    Raises:
        NumberFormatError: If value is not a non-negative decimal integer
    """
    raw = value if raw is None else raw
    if not DELETION_LENGTH_PATTERN.fullmatch(value):
        raise NumberFormatError(
            f"Invalid deletion length in '{raw}': '{value}' is not a non-negative integer",
            raw=raw,
        )
    try:
        return int(value)
    except ValueError as e:
        raise NumberFormatError(
            f"Invalid deletion length in '{raw}': {e}",
            raw=raw,
        ) from e
