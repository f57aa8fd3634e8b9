"""GitHub release discovery and asset location."""

from moddex_bootstrap.core.github.assets import (
    AssetLocator,
    AssetReference,
    ReleaseAssets,
)
from moddex_bootstrap.core.github.resolver import VersionResolver
from moddex_bootstrap.core.github.version_utils import (
    compare_versions,
    tag_from_asset_name,
)

__all__ = [
    "AssetLocator",
    "AssetReference",
    "ReleaseAssets",
    "VersionResolver",
    "compare_versions",
    "tag_from_asset_name",
]
