"""Centralized constants module for moddex-bootstrap.

This module serves as the single source of truth for all shared constants
across the moddex-bootstrap codebase. Constants are organized by logical
categories and use typing.Final annotations to ensure immutability.

Usage:
    from moddex_bootstrap.constants import DEFAULT_OWNER
"""

from typing import Final, Literal, get_args

# =============================================================================
# Release Source Constants
# =============================================================================

DEFAULT_OWNER: Final[str] = "aklozyp"
DEFAULT_REPO: Final[str] = "Moddex"

# Artifact naming: <prefix>-<tag><suffix>
DEFAULT_ASSET_PREFIX: Final[str] = "moddex"
DEFAULT_ASSET_SUFFIX: Final[str] = "-linux-amd64.tar.gz"

DEFAULT_GITHUB_URL: Final[str] = "https://github.com"
DEFAULT_API_URL: Final[str] = "https://api.github.com"

# A pinned version equal to this value means "resolve the latest release"
LATEST_ALIAS: Final[str] = "latest"

# Manifest naming conventions
SIBLING_MANIFEST_EXTENSION: Final[str] = ".sha256"
VERSIONED_MANIFEST_TEMPLATE: Final[str] = "{prefix}-{version}-SHA256SUMS"
GLOBAL_MANIFEST_NAME: Final[str] = "SHA256SUMS"

# =============================================================================
# Policy Constants
# =============================================================================

ResolverStrategy = Literal["redirect", "api"]
TransportName = Literal["auto", "requests", "aiohttp"]
VerificationPolicy = Literal["strict", "lenient"]
ExistingPolicy = Literal["fail", "replace"]

RESOLVER_STRATEGIES: Final[tuple[ResolverStrategy, ...]] = get_args(
    ResolverStrategy
)
TRANSPORT_NAMES: Final[tuple[TransportName, ...]] = get_args(TransportName)
VERIFICATION_POLICIES: Final[tuple[VerificationPolicy, ...]] = get_args(
    VerificationPolicy
)
EXISTING_POLICIES: Final[tuple[ExistingPolicy, ...]] = get_args(
    ExistingPolicy
)

# Probe order used by transport = auto
TRANSPORT_PROBE_ORDER: Final[tuple[TransportName, ...]] = (
    "requests",
    "aiohttp",
)

DEFAULT_RESOLVER: Final[ResolverStrategy] = "redirect"
DEFAULT_TRANSPORT: Final[TransportName] = "auto"
DEFAULT_VERIFICATION: Final[VerificationPolicy] = "strict"
DEFAULT_ON_EXISTING: Final[ExistingPolicy] = "fail"

# =============================================================================
# Hash Constants
# =============================================================================

HashType = Literal["sha256", "sha512"]

DEFAULT_HASH_TYPE: Final[HashType] = "sha256"
SUPPORTED_HASH_ALGORITHMS: Final[tuple[str, ...]] = ("sha256", "sha512")
HASH_LENGTH_MAP: Final[dict[int, HashType]] = {
    64: "sha256",
    128: "sha512",
}
HASH_CHUNK_SIZE: Final[int] = 1024 * 1024

# =============================================================================
# Bundle Constants
# =============================================================================

ENTRY_POINT_RELATIVE_PATH: Final[str] = "scripts/install.sh"
ENTRY_POINT_MAX_DEPTH: Final[int] = 4
WORKSPACE_PREFIX: Final[str] = "moddex-bootstrap-"
DEFAULT_INSTALLED_VERSION_FILE: Final[str] = "/opt/moddex/VERSION"
# An installation without a version file is recognised by its application jar
INSTALLED_MARKER_NAME: Final[str] = "app.jar"

# =============================================================================
# Network Constants
# =============================================================================

DEFAULT_RETRY_ATTEMPTS: Final[int] = 1
DEFAULT_TIMEOUT_SECONDS: Final[int] = 30
DOWNLOAD_CHUNK_SIZE: Final[int] = 8192
HTTP_NOT_FOUND: Final[int] = 404
HTTP_SERVER_ERROR: Final[int] = 500
GITHUB_API_ACCEPT: Final[str] = "application/vnd.github+json"
USER_AGENT_TEMPLATE: Final[str] = "moddex-bootstrap/{version}"

# =============================================================================
# Configuration Constants
# =============================================================================

CONFIG_FILE_NAME: Final[str] = "settings.conf"
DEFAULT_CONFIG_SUBDIR: Final[str] = ".config"
CONFIG_DIR_NAME: Final[str] = "moddex-bootstrap"
CONFIG_DIR_ENV: Final[str] = "MODDEX_BOOTSTRAP_CONFIG_DIR"

SECTION_DEFAULT: Final[str] = "DEFAULT"
SECTION_NETWORK: Final[str] = "network"

KEY_OWNER: Final[str] = "owner"
KEY_REPO: Final[str] = "repo"
KEY_ASSET_PREFIX: Final[str] = "asset_prefix"
KEY_ASSET_SUFFIX: Final[str] = "asset_suffix"
KEY_VERSION: Final[str] = "version"
KEY_INSTALL_DIR: Final[str] = "install_dir"
KEY_AUTO_RUN: Final[str] = "auto_run"
KEY_RESOLVER: Final[str] = "resolver"
KEY_TRANSPORT: Final[str] = "transport"
KEY_VERIFICATION: Final[str] = "verification"
KEY_ON_EXISTING: Final[str] = "on_existing"
KEY_GITHUB_URL: Final[str] = "github_url"
KEY_API_URL: Final[str] = "api_url"
KEY_INSTALLED_VERSION_FILE: Final[str] = "installed_version_file"
KEY_WORKSPACE_ROOT: Final[str] = "workspace_root"
KEY_LOG_LEVEL: Final[str] = "log_level"
KEY_CONSOLE_LOG_LEVEL: Final[str] = "console_log_level"
KEY_RETRY_ATTEMPTS: Final[str] = "retry_attempts"
KEY_TIMEOUT_SECONDS: Final[str] = "timeout_seconds"

# Environment variable overrides, in the order they are applied.
# MODDEX_BUNDLE_DIR wins over MODDEX_INSTALL_DIR.
ENV_OVERRIDES: Final[tuple[tuple[str, str], ...]] = (
    ("OWNER", KEY_OWNER),
    ("REPO", KEY_REPO),
    ("ASSET_SUFFIX", KEY_ASSET_SUFFIX),
    ("VERSION", KEY_VERSION),
    ("AUTO_RUN", KEY_AUTO_RUN),
    ("MODDEX_INSTALL_DIR", KEY_INSTALL_DIR),
    ("MODDEX_BUNDLE_DIR", KEY_INSTALL_DIR),
    ("MODDEX_VERIFICATION", KEY_VERIFICATION),
)
GITHUB_TOKEN_ENV: Final[str] = "GITHUB_TOKEN"

TRUE_VALUES: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})
FALSE_VALUES: Final[frozenset[str]] = frozenset({"0", "false", "no", "off"})

# =============================================================================
# Logging Constants
# =============================================================================

LOGGER_ROOT_NAME: Final[str] = "moddex_bootstrap"
LOG_DIR_ENV: Final[str] = "MODDEX_BOOTSTRAP_LOG_DIR"
LOG_DIR_NAME: Final[str] = "logs"
LOG_FILE_NAME: Final[str] = "moddex-bootstrap.log"
DEFAULT_LOG_LEVEL: Final[str] = "INFO"
DEFAULT_CONSOLE_LOG_LEVEL: Final[str] = "INFO"

# Rotate once the file reaches this size (bytes)
LOG_ROTATION_THRESHOLD_BYTES: Final[int] = 1024 * 1024
LOG_BACKUP_COUNT: Final[int] = 3

LOG_CONSOLE_FORMAT: Final[str] = "[%(levelname)s] %(message)s"
LOG_CONSOLE_DATE_FORMAT: Final[str] = "%H:%M:%S"
LOG_FILE_FORMAT: Final[str] = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "%(funcName)s:%(lineno)d - %(message)s"
)
LOG_FILE_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

LOG_COLORS: Final[dict[str, str]] = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
    "RESET": "\033[0m",
}

# =============================================================================
# Exit Codes
# =============================================================================

EXIT_SUCCESS: Final[int] = 0
EXIT_FAILURE: Final[int] = 1
EXIT_USAGE: Final[int] = 2
