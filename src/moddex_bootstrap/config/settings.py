"""Layered configuration for moddex-bootstrap.

Settings are resolved once per run, lowest precedence first:

1. Built-in defaults (``ConfigManager.get_defaults``)
2. ``settings.conf`` in the configuration directory (INI)
3. Environment variables (OWNER, REPO, ASSET_SUFFIX, VERSION, AUTO_RUN,
   MODDEX_INSTALL_DIR, MODDEX_BUNDLE_DIR, MODDEX_VERIFICATION, GITHUB_TOKEN)
4. Command line flags

The result is a frozen :class:`BootstrapConfig` that is handed to each
component at construction time; nothing reads the environment afterwards.
"""

import configparser
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TypeVar

from moddex_bootstrap.config.parser import CommentAwareConfigParser
from moddex_bootstrap.config.paths import Paths
from moddex_bootstrap.constants import (
    DEFAULT_API_URL,
    DEFAULT_ASSET_PREFIX,
    DEFAULT_ASSET_SUFFIX,
    DEFAULT_CONSOLE_LOG_LEVEL,
    DEFAULT_GITHUB_URL,
    DEFAULT_INSTALLED_VERSION_FILE,
    DEFAULT_LOG_LEVEL,
    DEFAULT_ON_EXISTING,
    DEFAULT_OWNER,
    DEFAULT_REPO,
    DEFAULT_RESOLVER,
    DEFAULT_RETRY_ATTEMPTS,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_TRANSPORT,
    DEFAULT_VERIFICATION,
    ENV_OVERRIDES,
    EXISTING_POLICIES,
    FALSE_VALUES,
    GITHUB_TOKEN_ENV,
    KEY_API_URL,
    KEY_ASSET_PREFIX,
    KEY_ASSET_SUFFIX,
    KEY_AUTO_RUN,
    KEY_CONSOLE_LOG_LEVEL,
    KEY_GITHUB_URL,
    KEY_INSTALL_DIR,
    KEY_INSTALLED_VERSION_FILE,
    KEY_LOG_LEVEL,
    KEY_ON_EXISTING,
    KEY_OWNER,
    KEY_REPO,
    KEY_RESOLVER,
    KEY_RETRY_ATTEMPTS,
    KEY_TIMEOUT_SECONDS,
    KEY_TRANSPORT,
    KEY_VERIFICATION,
    KEY_VERSION,
    KEY_WORKSPACE_ROOT,
    LATEST_ALIAS,
    RESOLVER_STRATEGIES,
    SECTION_DEFAULT,
    SECTION_NETWORK,
    TRANSPORT_NAMES,
    TRUE_VALUES,
    VERIFICATION_POLICIES,
    ExistingPolicy,
    ResolverStrategy,
    TransportName,
    VerificationPolicy,
)
from moddex_bootstrap.exceptions import ConfigurationError
from moddex_bootstrap.logger import get_logger

logger = get_logger(__name__)

_Choice = TypeVar("_Choice", bound=str)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Keys that may also be set in the [network] section (section wins)
_NETWORK_KEYS = (KEY_RETRY_ATTEMPTS, KEY_TIMEOUT_SECONDS)


@dataclass(frozen=True, slots=True)
class BootstrapConfig:
    """Immutable, fully resolved settings for one bootstrap run."""

    owner: str = DEFAULT_OWNER
    repo: str = DEFAULT_REPO
    asset_prefix: str = DEFAULT_ASSET_PREFIX
    asset_suffix: str = DEFAULT_ASSET_SUFFIX
    version: str = ""
    install_dir: Path | None = None
    auto_run: bool = True
    resolver: ResolverStrategy = DEFAULT_RESOLVER
    transport: TransportName = DEFAULT_TRANSPORT
    verification: VerificationPolicy = DEFAULT_VERIFICATION
    on_existing: ExistingPolicy = DEFAULT_ON_EXISTING
    github_url: str = DEFAULT_GITHUB_URL
    api_url: str = DEFAULT_API_URL
    installed_version_file: Path = Path(DEFAULT_INSTALLED_VERSION_FILE)
    workspace_root: Path | None = None
    log_level: str = DEFAULT_LOG_LEVEL
    console_log_level: str = DEFAULT_CONSOLE_LOG_LEVEL
    retry_attempts: int = DEFAULT_RETRY_ATTEMPTS
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS
    github_token: str | None = field(default=None, repr=False)

    @property
    def pinned_version(self) -> str | None:
        """Return the pinned tag verbatim, or None to resolve the latest."""
        if not self.version or self.version == LATEST_ALIAS:
            return None
        return self.version

    @property
    def lenient_verification(self) -> bool:
        """Whether an unavailable manifest is tolerated."""
        return self.verification == "lenient"

    @property
    def replace_existing(self) -> bool:
        """Whether an existing install directory may be replaced."""
        return self.on_existing == "replace"


def _parse_bool(key: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    msg = f"expected a boolean (1/0, true/false), got {value!r}"
    raise ConfigurationError(msg, target=key)


def _parse_int(key: str, value: str, minimum: int = 1) -> int:
    try:
        parsed = int(value.strip())
    except ValueError as e:
        msg = f"expected an integer, got {value!r}"
        raise ConfigurationError(msg, target=key) from e
    if parsed < minimum:
        msg = f"must be at least {minimum}, got {parsed}"
        raise ConfigurationError(msg, target=key)
    return parsed


def _parse_choice(
    key: str, value: str, choices: tuple[_Choice, ...]
) -> _Choice:
    lowered = value.strip().lower()
    for choice in choices:
        if choice == lowered:
            return choice
    msg = f"expected one of {', '.join(choices)}, got {value!r}"
    raise ConfigurationError(msg, target=key)


def _parse_level(key: str, value: str) -> str:
    levels = tuple(level.lower() for level in _LOG_LEVELS)
    return _parse_choice(key, value, levels).upper()


def _optional_path(value: str) -> Path | None:
    stripped = value.strip()
    return Paths.expand_path(stripped) if stripped else None


class ConfigManager:
    """Builds a BootstrapConfig from defaults, file, environment and CLI."""

    def __init__(
        self,
        config_dir: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize config manager.

        Args:
            config_dir: Configuration directory (default: Paths.config_dir())
            environ: Environment mapping (defaults to os.environ)

        """
        self.config_dir = config_dir or Paths.config_dir()
        self.settings_file = Paths.settings_file(self.config_dir)
        self.environ = os.environ if environ is None else environ

    @staticmethod
    def get_defaults() -> dict[str, str]:
        """Get default configuration values as raw strings."""
        return {
            KEY_OWNER: DEFAULT_OWNER,
            KEY_REPO: DEFAULT_REPO,
            KEY_ASSET_PREFIX: DEFAULT_ASSET_PREFIX,
            KEY_ASSET_SUFFIX: DEFAULT_ASSET_SUFFIX,
            KEY_VERSION: "",
            KEY_INSTALL_DIR: "",
            KEY_AUTO_RUN: "1",
            KEY_RESOLVER: DEFAULT_RESOLVER,
            KEY_TRANSPORT: DEFAULT_TRANSPORT,
            KEY_VERIFICATION: DEFAULT_VERIFICATION,
            KEY_ON_EXISTING: DEFAULT_ON_EXISTING,
            KEY_GITHUB_URL: DEFAULT_GITHUB_URL,
            KEY_API_URL: DEFAULT_API_URL,
            KEY_INSTALLED_VERSION_FILE: DEFAULT_INSTALLED_VERSION_FILE,
            KEY_WORKSPACE_ROOT: "",
            KEY_LOG_LEVEL: DEFAULT_LOG_LEVEL,
            KEY_CONSOLE_LOG_LEVEL: DEFAULT_CONSOLE_LOG_LEVEL,
            KEY_RETRY_ATTEMPTS: str(DEFAULT_RETRY_ATTEMPTS),
            KEY_TIMEOUT_SECONDS: str(DEFAULT_TIMEOUT_SECONDS),
        }

    def _read_settings_file(self) -> dict[str, str]:
        """Read known keys from settings.conf, if present."""
        if not self.settings_file.exists():
            logger.debug("No settings file at %s", self.settings_file)
            return {}

        parser = CommentAwareConfigParser(inline_comment_prefixes=(";",))
        try:
            parser.read(self.settings_file, encoding="utf-8")
        except (configparser.Error, OSError, UnicodeDecodeError) as e:
            msg = f"cannot parse settings file: {e}"
            raise ConfigurationError(
                msg, target=str(self.settings_file)
            ) from e

        values: dict[str, str] = {}
        known = set(self.get_defaults())
        for key in parser.defaults():
            if key in known:
                values[key] = parser.get(SECTION_DEFAULT, key)
            else:
                logger.warning(
                    "Ignoring unknown setting '%s' in %s",
                    key,
                    self.settings_file,
                )

        if parser.has_section(SECTION_NETWORK):
            for key in _NETWORK_KEYS:
                if parser.has_option(SECTION_NETWORK, key):
                    values[key] = parser.get(SECTION_NETWORK, key)

        logger.debug(
            "Loaded %d setting(s) from %s", len(values), self.settings_file
        )
        return values

    def _read_environment(self) -> dict[str, str]:
        """Collect non-empty environment overrides."""
        values: dict[str, str] = {}
        for env_name, key in ENV_OVERRIDES:
            value = self.environ.get(env_name, "")
            if value:
                values[key] = value
        return values

    @staticmethod
    def _normalize_cli(overrides: Mapping[str, Any]) -> dict[str, str]:
        """Convert CLI values to raw strings, dropping unset ones."""
        values: dict[str, str] = {}
        for key, value in overrides.items():
            if value is None:
                continue
            if isinstance(value, bool):
                values[key] = "1" if value else "0"
            else:
                values[key] = str(value)
        return values

    def load(
        self, cli_overrides: Mapping[str, Any] | None = None
    ) -> BootstrapConfig:
        """Resolve the configuration for this run.

        Args:
            cli_overrides: Values from command line flags; None means unset

        Returns:
            Frozen BootstrapConfig

        Raises:
            ConfigurationError: If any value is invalid

        """
        raw = self.get_defaults()
        raw.update(self._read_settings_file())
        raw.update(self._read_environment())
        raw.update(self._normalize_cli(cli_overrides or {}))

        token = self.environ.get(GITHUB_TOKEN_ENV, "").strip() or None
        return self._build(raw, token)

    @staticmethod
    def _build(raw: Mapping[str, str], token: str | None) -> BootstrapConfig:
        """Validate raw strings and build the frozen config."""
        for key in (KEY_OWNER, KEY_REPO, KEY_ASSET_PREFIX, KEY_ASSET_SUFFIX):
            if not raw[key].strip():
                raise ConfigurationError("must not be empty", target=key)

        installed_version_file = _optional_path(
            raw[KEY_INSTALLED_VERSION_FILE]
        ) or Path(DEFAULT_INSTALLED_VERSION_FILE)

        return BootstrapConfig(
            owner=raw[KEY_OWNER].strip(),
            repo=raw[KEY_REPO].strip(),
            asset_prefix=raw[KEY_ASSET_PREFIX].strip(),
            asset_suffix=raw[KEY_ASSET_SUFFIX].strip(),
            version=raw[KEY_VERSION].strip(),
            install_dir=_optional_path(raw[KEY_INSTALL_DIR]),
            auto_run=_parse_bool(KEY_AUTO_RUN, raw[KEY_AUTO_RUN]),
            resolver=_parse_choice(
                KEY_RESOLVER, raw[KEY_RESOLVER], RESOLVER_STRATEGIES
            ),
            transport=_parse_choice(
                KEY_TRANSPORT, raw[KEY_TRANSPORT], TRANSPORT_NAMES
            ),
            verification=_parse_choice(
                KEY_VERIFICATION, raw[KEY_VERIFICATION], VERIFICATION_POLICIES
            ),
            on_existing=_parse_choice(
                KEY_ON_EXISTING, raw[KEY_ON_EXISTING], EXISTING_POLICIES
            ),
            github_url=raw[KEY_GITHUB_URL].strip().rstrip("/"),
            api_url=raw[KEY_API_URL].strip().rstrip("/"),
            installed_version_file=installed_version_file,
            workspace_root=_optional_path(raw[KEY_WORKSPACE_ROOT]),
            log_level=_parse_level(KEY_LOG_LEVEL, raw[KEY_LOG_LEVEL]),
            console_log_level=_parse_level(
                KEY_CONSOLE_LOG_LEVEL, raw[KEY_CONSOLE_LOG_LEVEL]
            ),
            retry_attempts=_parse_int(
                KEY_RETRY_ATTEMPTS, raw[KEY_RETRY_ATTEMPTS]
            ),
            timeout_seconds=_parse_int(
                KEY_TIMEOUT_SECONDS, raw[KEY_TIMEOUT_SECONDS]
            ),
            github_token=token,
        )
