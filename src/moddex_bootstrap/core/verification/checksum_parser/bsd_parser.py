"""BSD checksum file parser implementation."""

from __future__ import annotations

import re
from typing import cast

from moddex_bootstrap.constants import (
    SUPPORTED_HASH_ALGORITHMS,
    HashType,
)
from moddex_bootstrap.core.verification.checksum_parser.base import (
    ChecksumEntry,
    ChecksumParser,
)

_BSD_CHECKSUM_PATTERN = re.compile(
    r"(?P<algo>SHA\d+)\s*\((?P<filename>.+)\)\s*=\s*(?P<hash>[A-Fa-f0-9]+)$",
    re.IGNORECASE,
)


class BSDChecksumParser(ChecksumParser):
    """Parser for BSD checksum format (e.g., "SHA256 (file) = hash")."""

    def parse(self, content: str, filename: str) -> ChecksumEntry | None:
        """Parse BSD checksum content.

        Args:
            content: The BSD checksum content.
            filename: The filename to find.

        Returns:
            A ChecksumEntry or None. Lines naming an unsupported algorithm
            are skipped.
        """
        for raw_line in content.splitlines():
            match = _BSD_CHECKSUM_PATTERN.match(raw_line.strip())
            if not match:
                continue

            file_in_manifest = match.group("filename").removeprefix("./")
            if file_in_manifest != filename:
                continue

            algo = match.group("algo").lower()
            if algo not in SUPPORTED_HASH_ALGORITHMS:
                continue

            return ChecksumEntry(
                filename, match.group("hash"), cast("HashType", algo)
            )

        return None
