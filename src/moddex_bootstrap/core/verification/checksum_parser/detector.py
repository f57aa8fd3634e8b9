"""Checksum format detection and entry lookup."""

from __future__ import annotations

from typing import TYPE_CHECKING

from moddex_bootstrap.core.verification.checksum_parser.bsd_parser import (
    BSDChecksumParser,
)
from moddex_bootstrap.core.verification.checksum_parser.traditional_parser import (  # noqa: E501
    StandardChecksumParser,
    parse_bare_digest,
)
from moddex_bootstrap.logger import get_logger

if TYPE_CHECKING:
    from moddex_bootstrap.core.verification.checksum_parser.base import (
        ChecksumEntry,
        ChecksumParser,
    )

logger = get_logger(__name__)

# Manifests may mix formats line by line; every parser gets the full text
_PARSERS: tuple[type[ChecksumParser], ...] = (
    StandardChecksumParser,
    BSDChecksumParser,
)


def find_checksum_entry(
    content: str,
    filename: str,
    allow_bare_digest: bool = False,  # noqa: FBT001, FBT002
) -> ChecksumEntry | None:
    """Find the manifest entry for ``filename``.

    Args:
        content: The manifest content.
        filename: The artifact filename to find.
        allow_bare_digest: Accept a manifest consisting of one digest only

    Returns:
        A ChecksumEntry or None if the manifest has no entry for the file.
    """
    if allow_bare_digest:
        entry = parse_bare_digest(content, filename)
        if entry:
            logger.debug("   Manifest holds a bare digest")
            return entry

    for parser_cls in _PARSERS:
        entry = parser_cls().parse(content, filename)
        if entry:
            return entry
    return None
