"""Top-level package for moddex-bootstrap.

Fetches a verified Moddex release bundle and hands off to its installer.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("moddex-bootstrap")
except PackageNotFoundError:
    # Fallback for development environments where package isn't installed
    __version__ = "dev"
