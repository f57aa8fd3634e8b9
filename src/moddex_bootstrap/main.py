"""Main CLI entry point for moddex-bootstrap."""

import sys

from moddex_bootstrap.cli import CLIRunner


def main() -> None:
    """Run the CLI application and exit with its status code."""
    sys.exit(CLIRunner().run(sys.argv[1:]))


if __name__ == "__main__":
    main()
