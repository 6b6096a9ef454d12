"""vcf-allele-codec: VCF genotype allele token parsing and rendering."""

__version__ = "0.1.0"

from .encoding import (  # noqa: E402
    DELETION_MARKER,
    INSERTION_MARKER,
    NO_CALL,
    AlleleKind,
    AlleleToken,
    parse_allele,
)
from .utils.validators import (  # noqa: E402
    EncodingRule,
    InvalidEncodingError,
    NumberFormatError,
    ValidationError,
    is_valid_bases,
)

__all__ = [
    "AlleleKind",
    "AlleleToken",
    "DELETION_MARKER",
    "EncodingRule",
    "INSERTION_MARKER",
    "InvalidEncodingError",
    "NO_CALL",
    "NumberFormatError",
    "ValidationError",
    "__version__",
    "is_valid_bases",
    "parse_allele",
]
