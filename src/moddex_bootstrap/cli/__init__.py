"""CLI module for moddex-bootstrap."""

from moddex_bootstrap.cli.parser import CLIParser
from moddex_bootstrap.cli.runner import CLIRunner

__all__ = ["CLIParser", "CLIRunner"]
