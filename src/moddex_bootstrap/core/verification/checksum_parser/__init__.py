"""Checksum manifest parsing.

Parsing is kept separate from hash computation in the verifier so that
each manifest format can be tested on plain strings.
"""

from moddex_bootstrap.core.verification.checksum_parser.base import (
    ChecksumEntry,
    ChecksumParser,
)
from moddex_bootstrap.core.verification.checksum_parser.bsd_parser import (
    BSDChecksumParser,
)
from moddex_bootstrap.core.verification.checksum_parser.detector import (
    find_checksum_entry,
)
from moddex_bootstrap.core.verification.checksum_parser.traditional_parser import (  # noqa: E501
    StandardChecksumParser,
    parse_bare_digest,
)

__all__ = [
    "BSDChecksumParser",
    "ChecksumEntry",
    "ChecksumParser",
    "StandardChecksumParser",
    "find_checksum_entry",
    "parse_bare_digest",
]
