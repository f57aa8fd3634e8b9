"""Base classes and dataclasses for checksum parsing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from moddex_bootstrap.constants import HashType


@dataclass(frozen=True)
class ChecksumEntry:
    """Parsed checksum entry."""

    filename: str
    hash_value: str
    algorithm: HashType


class ChecksumParser:
    """Abstract base class for parsing checksum manifests.

    Concrete parsers look up the digest of a single artifact filename in
    the manifest text and return it as a ChecksumEntry.
    """

    def parse(self, content: str, filename: str) -> ChecksumEntry | None:
        """Parse checksum content for a specific file.

        Args:
            content: The manifest content.
            filename: The artifact filename to find.

        Returns:
            A ChecksumEntry or None if not found.
        """
        raise NotImplementedError
