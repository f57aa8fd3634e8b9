"""Release tag helpers."""

import re

from packaging.version import InvalidVersion, Version


def compare_versions(version1: str, version2: str) -> int:
    """Compare two release tags.

    Returns -1 if version1 < version2, 0 if equal, 1 if version1 > version2.
    Tags that are not valid versions compare by plain string equality and
    are otherwise treated as older, so an unparseable installed tag still
    triggers an update.
    """
    v1_clean = version1.strip().lstrip("v").lower()
    v2_clean = version2.strip().lstrip("v").lower()

    if v1_clean == v2_clean:
        return 0

    try:
        v1 = Version(v1_clean)
        v2 = Version(v2_clean)
    except InvalidVersion:
        return -1

    if v1 < v2:
        return -1
    if v1 > v2:
        return 1
    return 0


def tag_from_asset_name(name: str, prefix: str, suffix: str) -> str | None:
    """Extract the tag from an asset named ``<prefix>-<tag><suffix>``.

    Returns:
        The tag, or None if ``name`` does not follow the pattern

    """
    pattern = rf"^{re.escape(prefix)}-(.+){re.escape(suffix)}$"
    match = re.match(pattern, name)
    return match.group(1) if match else None
