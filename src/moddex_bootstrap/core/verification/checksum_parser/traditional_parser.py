"""Parser for coreutils-style manifests (``sha256sum`` output).

Lines look like ``<digest>  <filename>`` or ``<digest> *<filename>``.
Lookup is two-stage: an exact comparison of the filename field first,
then an anchored pattern that also accepts a leading directory.
"""

from __future__ import annotations

import re

from moddex_bootstrap.constants import (
    DEFAULT_HASH_TYPE,
    HASH_LENGTH_MAP,
    HashType,
)
from moddex_bootstrap.core.verification.checksum_parser.base import (
    ChecksumEntry,
    ChecksumParser,
)
from moddex_bootstrap.logger import get_logger

logger = get_logger(__name__)

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_DIGEST_PATTERN = r"[0-9a-fA-F]{128}|[0-9a-fA-F]{64}"


def _is_hex_digest(value: str) -> bool:
    return len(value) in HASH_LENGTH_MAP and all(
        char in _HEX_DIGITS for char in value
    )


def _algorithm_for(hash_value: str) -> HashType:
    return HASH_LENGTH_MAP.get(len(hash_value), DEFAULT_HASH_TYPE)


def _parse_sha256sums_line(line: str) -> tuple[str, str] | None:
    """Parse a single line from a SHA256SUMS style file.

    Args:
        line: The line to parse.

    Returns:
        A tuple of (hash_value, filename) or None if invalid.
    """
    expected_parts = 2
    parts = line.split(None, 1)
    if len(parts) != expected_parts:
        return None

    hash_value = parts[0]
    filename_part = parts[1].strip()
    filename_part = filename_part.removeprefix("*")
    filename_part = filename_part.removeprefix("./")

    return hash_value, filename_part


def _manifest_lines(content: str) -> list[tuple[int, str]]:
    lines = []
    for line_num, raw_line in enumerate(content.splitlines(), 1):
        line = raw_line.strip()
        if line and not line.startswith("#"):
            lines.append((line_num, line))
    return lines


def _find_exact(content: str, filename: str) -> str | None:
    for line_num, line in _manifest_lines(content):
        parsed = _parse_sha256sums_line(line)
        if not parsed:
            continue

        hash_value, file_in_manifest = parsed
        if not _is_hex_digest(hash_value):
            continue

        if file_in_manifest == filename:
            logger.debug("   Exact match on line %d", line_num)
            return hash_value
    return None


def _find_tolerant(content: str, filename: str) -> str | None:
    pattern = re.compile(
        rf"^({_DIGEST_PATTERN})\s+\*?(?:\S*/)?{re.escape(filename)}\s*$"
    )
    for line_num, line in _manifest_lines(content):
        match = pattern.match(line)
        if match:
            logger.debug("   Tolerant match on line %d: %s", line_num, line)
            return match.group(1)
    return None


def parse_bare_digest(content: str, filename: str) -> ChecksumEntry | None:
    """Accept a manifest that holds nothing but a single digest.

    Only meaningful for a per-artifact sibling manifest, where the
    filename is implied by the manifest name.
    """
    tokens = content.split()
    if len(tokens) == 1 and _is_hex_digest(tokens[0]):
        hash_value = tokens[0]
        return ChecksumEntry(filename, hash_value, _algorithm_for(hash_value))
    return None


class StandardChecksumParser(ChecksumParser):
    """Parser for traditional checksum files (SHA256SUMS, *.sha256)."""

    def parse(self, content: str, filename: str) -> ChecksumEntry | None:
        """Parse traditional checksum content.

        Args:
            content: The checksum content.
            filename: The filename to find.

        Returns:
            A ChecksumEntry or None.
        """
        logger.debug("   Looking for %s in traditional manifest", filename)
        hash_value = _find_exact(content, filename) or _find_tolerant(
            content, filename
        )
        if not hash_value:
            logger.debug("   No match found for %s", filename)
            return None

        return ChecksumEntry(filename, hash_value, _algorithm_for(hash_value))
