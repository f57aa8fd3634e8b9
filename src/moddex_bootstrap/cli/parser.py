"""CLI argument parser for moddex-bootstrap.

Arguments after a literal ``--`` are not parsed; they are passed through
to the installer untouched.
"""

import argparse
from argparse import Namespace
from collections.abc import Sequence
from typing import Any

from moddex_bootstrap.constants import (
    KEY_ASSET_SUFFIX,
    KEY_AUTO_RUN,
    KEY_INSTALL_DIR,
    KEY_ON_EXISTING,
    KEY_RESOLVER,
    KEY_VERIFICATION,
    KEY_VERSION,
    RESOLVER_STRATEGIES,
)

INSTALLER_ARGS_SEPARATOR = "--"


def split_installer_args(
    argv: Sequence[str],
) -> tuple[list[str], list[str]]:
    """Split ``argv`` at the first ``--``.

    Returns:
        (bootstrap arguments, installer arguments)

    """
    args = list(argv)
    if INSTALLER_ARGS_SEPARATOR in args:
        index = args.index(INSTALLER_ARGS_SEPARATOR)
        return args[:index], args[index + 1 :]
    return args, []


class CLIParser:
    """Command-line argument parser for moddex-bootstrap."""

    def __init__(self, prog: str = "moddex-bootstrap") -> None:
        """Initialize the CLI parser.

        Args:
            prog: Program name shown in usage and help output

        """
        self.prog = prog

    def parse_args(self, argv: Sequence[str]) -> Namespace:
        """Parse bootstrap arguments (without the installer part).

        Raises:
            SystemExit: With code 2 on a usage error, 0 after --help

        """
        return self.create_parser().parse_args(list(argv))

    def create_parser(self) -> argparse.ArgumentParser:
        """Create the argument parser."""
        parser = argparse.ArgumentParser(
            prog=self.prog,
            description=(
                "Download, verify and extract a Moddex release bundle, "
                "then run its installer."
            ),
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Environment overrides (command line flags win):
  OWNER, REPO             GitHub repository to install from
  ASSET_SUFFIX            Artifact suffix (default -linux-amd64.tar.gz)
  VERSION                 Release tag to install ("latest" = newest)
  AUTO_RUN                1 to run the installer, 0 to only extract
  MODDEX_BUNDLE_DIR       Bundle directory (alias MODDEX_INSTALL_DIR)
  MODDEX_VERIFICATION     strict (default) or lenient
  GITHUB_TOKEN            Token for the GitHub API resolver
  MODDEX_BOOTSTRAP_CONFIG_DIR, MODDEX_BOOTSTRAP_LOG_DIR

Examples:
  %(prog)s                                # latest release, run installer
  %(prog)s --version v1.2.3 --no-run --install-dir ~/moddex
  %(prog)s --asset-suffix=-linux-arm64.tar.gz
  %(prog)s --check
  %(prog)s --update --yes
  %(prog)s -- --mode local               # arguments for install.sh
            """,
        )
        self._add_release_options(parser)
        self._add_install_options(parser)
        self._add_update_options(parser)
        self._add_global_options(parser)
        return parser

    def _add_release_options(self, parser: argparse.ArgumentParser) -> None:
        group = parser.add_argument_group("release selection")
        group.add_argument(
            "--version",
            metavar="TAG",
            help="Release tag to install (default: latest)",
        )
        group.add_argument(
            "--asset-suffix",
            metavar="SUFFIX",
            help=(
                "Artifact suffix after the tag; use --asset-suffix=VALUE "
                "for values starting with '-'"
            ),
        )
        group.add_argument(
            "--resolver",
            choices=RESOLVER_STRATEGIES,
            help="How to discover the latest release (default: redirect)",
        )

    def _add_install_options(self, parser: argparse.ArgumentParser) -> None:
        group = parser.add_argument_group("installation")
        group.add_argument(
            "--install-dir",
            "--bundle-dir",
            dest="install_dir",
            metavar="PATH",
            help="Extract the bundle here instead of a temporary directory",
        )
        run_group = group.add_mutually_exclusive_group()
        run_group.add_argument(
            "--run",
            dest="auto_run",
            action="store_const",
            const=True,
            help="Run the installer after extraction (default)",
        )
        run_group.add_argument(
            "--no-run",
            dest="auto_run",
            action="store_const",
            const=False,
            help="Only extract; requires --install-dir",
        )
        group.add_argument(
            "--replace",
            action="store_true",
            help="Replace a non-empty install directory instead of failing",
        )
        group.add_argument(
            "--allow-unverified",
            action="store_true",
            help=(
                "Proceed WITHOUT checksum verification when no manifest "
                "can be fetched (a mismatch still fails)"
            ),
        )

    def _add_update_options(self, parser: argparse.ArgumentParser) -> None:
        group = parser.add_argument_group("updates")
        mode = group.add_mutually_exclusive_group()
        mode.add_argument(
            "--check",
            action="store_true",
            help="Show installed and latest versions, then exit",
        )
        mode.add_argument(
            "--update",
            action="store_true",
            help="Install the latest release unless already up to date",
        )
        group.add_argument(
            "-y",
            "--yes",
            action="store_true",
            help="Answer yes to the install prompt of --update",
        )

    def _add_global_options(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "-v",
            "--verbose",
            action="store_true",
            help="Show debug output",
        )
        parser.add_argument(
            "--about",
            action="store_true",
            help="Show moddex-bootstrap version and exit",
        )


def config_overrides(args: Namespace) -> dict[str, Any]:
    """Map parsed arguments to configuration keys (None means unset)."""
    return {
        KEY_VERSION: args.version,
        KEY_ASSET_SUFFIX: args.asset_suffix,
        KEY_RESOLVER: args.resolver,
        KEY_INSTALL_DIR: args.install_dir,
        KEY_AUTO_RUN: args.auto_run,
        KEY_ON_EXISTING: "replace" if args.replace else None,
        KEY_VERIFICATION: "lenient" if args.allow_unverified else None,
    }
