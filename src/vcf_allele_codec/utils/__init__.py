"""Shared utility modules."""

from .validators import (
    SINGLE_BASES,
    VALID_BASES,
    EncodingRule,
    InvalidEncodingError,
    NumberFormatError,
    ValidationError,
    is_valid_bases,
    parse_deletion_length,
    validate_insertion_bases,
    validate_single_base,
)

__all__ = [
    "EncodingRule",
    "InvalidEncodingError",
    "NumberFormatError",
    "SINGLE_BASES",
    "VALID_BASES",
    "ValidationError",
    "is_valid_bases",
    "parse_deletion_length",
    "validate_insertion_bases",
    "validate_single_base",
]
