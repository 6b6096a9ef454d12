"""Allele token encoding for VCF genotype fields.

A genotype allele is written as one compact token:

| Token      | Kind        | bases   | length |
|------------|-------------|---------|--------|
| ``A``      | SINGLE_BASE | ``A``   | 0      |
| ``.``      | UNCALLED    | ``.``   | 0      |
| ``IACGT``  | INSERTION   | ``ACGT``| 4      |
| ``D12``    | DELETION    | ``""``  | 12     |
| ``ACTG``   | MIXED       | ``ACTG``| 4      |

MIXED tokens are only accepted when the caller opts in with
``allow_multi_base_reference`` and are only meaningful in aggregate
(multi-allele) contexts, never as the sole encoding of a single call.
"""

import hashlib
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .utils.validators import (
    SINGLE_BASES,
    EncodingRule,
    InvalidEncodingError,
    NumberFormatError,
    ValidationError,
    is_valid_bases,
    parse_deletion_length,
    validate_insertion_bases,
    validate_single_base,
)

logger = logging.getLogger(__name__)

NO_CALL = "."
DELETION_MARKER = "D"
INSERTION_MARKER = "I"


class AlleleKind(Enum):
    """Call kind of a single allele token."""

    SINGLE_BASE = "single_base"
    INSERTION = "insertion"
    DELETION = "deletion"
    UNCALLED = "uncalled"
    MIXED = "mixed"

    @classmethod
    def from_string(cls, value: str) -> "AlleleKind":
        value_lower = value.strip().lower()
        for kind in cls:
            if kind.value == value_lower or kind.name.lower() == value_lower:
                return kind
        raise ValueError(
            f"Unknown allele kind: '{value}'. "
            f"Valid values: {', '.join(k.value for k in cls)}"
        )


@dataclass(frozen=True, eq=False)
class AlleleToken:
    """One parsed allele call.

    Instances are immutable. Build them with :func:`parse_allele` or the
    ``no_call``/``single_base``/``insertion``/``deletion`` constructors;
    direct construction is checked against the same invariants.

    Equality compares ``kind``, ``bases`` and ``length``. An UNCALLED token
    additionally equals any non-token whose ``str()`` is ``"."``. That rule
    is not symmetric when the other type's ``__eq__`` answers first, and it
    does not carry over to hashing:
    ``hash(AlleleToken.no_call()) != hash(".")``.
    """

    kind: AlleleKind
    bases: str
    length: int

    def __post_init__(self) -> None:
        if not isinstance(self.kind, AlleleKind):
            raise ValidationError(f"kind must be an AlleleKind, got {type(self.kind).__name__}")
        if isinstance(self.length, bool) or not isinstance(self.length, int):
            raise ValidationError(f"length must be an integer, got {type(self.length).__name__}")
        if self.length < 0:
            raise ValidationError(f"length must be non-negative, got {self.length}")

        kind = self.kind
        if kind is AlleleKind.SINGLE_BASE:
            valid = self.bases in SINGLE_BASES and self.length == 0
        elif kind is AlleleKind.UNCALLED:
            valid = self.bases == NO_CALL and self.length == 0
        elif kind is AlleleKind.DELETION:
            valid = self.bases == ""
        elif kind is AlleleKind.INSERTION:
            valid = (
                bool(self.bases)
                and self.bases.isupper()
                and is_valid_bases(self.bases)
                and self.length == len(self.bases)
            )
        else:
            valid = bool(self.bases) and self.length == len(self.bases)

        if not valid:
            raise ValidationError(
                f"Inconsistent {kind.name} allele: bases={self.bases!r}, length={self.length}"
            )

    @classmethod
    def parse(cls, raw: str, allow_multi_base_reference: bool = False) -> "AlleleToken":
        return parse_allele(raw, allow_multi_base_reference=allow_multi_base_reference)

    @classmethod
    def no_call(cls) -> "AlleleToken":
        return cls(AlleleKind.UNCALLED, NO_CALL, 0)

    @classmethod
    def single_base(cls, base: str) -> "AlleleToken":
        return cls(AlleleKind.SINGLE_BASE, validate_single_base(base), 0)

    @classmethod
    def insertion(cls, bases: str) -> "AlleleToken":
        normalized = validate_insertion_bases(bases, raw=INSERTION_MARKER + bases)
        return cls(AlleleKind.INSERTION, normalized, len(normalized))

    @classmethod
    def deletion(cls, length: int) -> "AlleleToken":
        if isinstance(length, int) and length < 0:
            raise NumberFormatError(
                f"Deletion length must be non-negative, got {length}",
                raw=f"{DELETION_MARKER}{length}",
            )
        return cls(AlleleKind.DELETION, "", length)

    @property
    def is_called(self) -> bool:
        return self.kind is not AlleleKind.UNCALLED

    @property
    def is_structural(self) -> bool:
        """True for insertions and deletions."""
        return self.kind in (AlleleKind.INSERTION, AlleleKind.DELETION)

    def render(self) -> str:
        """Return the canonical token string.

        The result parses back to an equal token for every kind except MIXED,
        which only round-trips when the caller passes
        ``allow_multi_base_reference=True`` and the bases do not start with a
        structural marker.
        """
        if self.kind is AlleleKind.INSERTION:
            return f"{INSERTION_MARKER}{self.bases}"
        if self.kind is AlleleKind.DELETION:
            return f"{DELETION_MARKER}{self.length}"
        return self.bases

    def __str__(self) -> str:
        return self.render()

    def __eq__(self, other: Any) -> bool:
        if other is None:
            return False
        if isinstance(other, AlleleToken):
            return (
                self.kind is other.kind
                and self.bases == other.bases
                and self.length == other.length
            )
        # Legacy interop: callers pass the no-call marker as a bare value.
        if self.kind is AlleleKind.UNCALLED:
            return str(other) == NO_CALL
        return False

    def __hash__(self) -> int:
        key = f"{self.bases}{self.length}{self.kind.name}"
        digest = hashlib.blake2b(key.encode("utf-8"), digest_size=8).digest()
        return int.from_bytes(digest, "big", signed=True)


def parse_allele(raw: str, allow_multi_base_reference: bool = False) -> AlleleToken:
    """Parse a genotype allele token.

    Length-1 tokens are either the no-call marker or a single base. Longer
    tokens must start with ``D`` (deletion length follows) or ``I`` (inserted
    bases follow), case-insensitively. Any other multi-character token is
    rejected unless ``allow_multi_base_reference`` is set, in which case it
    is kept verbatim as a MIXED token without alphabet validation.

    Args:
        raw: Token text, e.g. ``"A"``, ``"."``, ``"D5"``, ``"IACGT"``
        allow_multi_base_reference: Accept unrecognized multi-character
            tokens as MIXED instead of raising

    Returns:
        The parsed AlleleToken

    Raises:
        InvalidEncodingError: If the token violates the allele grammar
        NumberFormatError: If a deletion length is not a non-negative integer
    """
    if not raw:
        raise InvalidEncodingError(
            "Allele token is empty; expected a base, a deletion, an insertion, or no call (.)",
            raw=raw,
            rule=EncodingRule.EMPTY,
        )

    if len(raw) == 1:
        if raw == NO_CALL:
            return AlleleToken.no_call()
        return AlleleToken(AlleleKind.SINGLE_BASE, validate_single_base(raw), 0)

    marker = raw[0].upper()
    if marker == DELETION_MARKER:
        return AlleleToken(AlleleKind.DELETION, "", parse_deletion_length(raw[1:], raw=raw))

    if marker == INSERTION_MARKER:
        bases = validate_insertion_bases(raw[1:], raw=raw)
        return AlleleToken(AlleleKind.INSERTION, bases, len(bases))

    if not allow_multi_base_reference:
        raise InvalidEncodingError(
            f"Genotype encoding of '{raw}' was passed in, but is not a valid deletion, "
            f"insertion, base, or no call (.)",
            raw=raw,
            rule=EncodingRule.UNRECOGNIZED_MARKER,
        )

    logger.debug("Accepting unvalidated multi-base allele '%s' as MIXED", raw)
    return AlleleToken(AlleleKind.MIXED, raw, len(raw))
