"""CLI runner for moddex-bootstrap.

Turns parsed arguments into a configuration, runs the acquisition
pipeline (or the update check) and maps the outcome to an exit code.
"""

from argparse import Namespace
from collections.abc import Callable, Sequence

from moddex_bootstrap import __version__
from moddex_bootstrap.cli.parser import (
    CLIParser,
    config_overrides,
    split_installer_args,
)
from moddex_bootstrap.config import BootstrapConfig, ConfigManager
from moddex_bootstrap.constants import EXIT_FAILURE, EXIT_SUCCESS, EXIT_USAGE
from moddex_bootstrap.core import (
    AcquisitionPipeline,
    UpdateChecker,
    run_handoff,
)
from moddex_bootstrap.core.github import VersionResolver
from moddex_bootstrap.core.transport import Transport, select_transport
from moddex_bootstrap.exceptions import BootstrapError
from moddex_bootstrap.logger import (
    flush_all_handlers,
    get_logger,
    restore_console_level,
    set_console_level_temporarily,
    update_logger_from_config,
)

logger = get_logger(__name__)

INSTALL_PROMPT = "Moddex is not installed. Install now? [y/N] "


def _default_prompt(question: str) -> bool:
    try:
        answer = input(question)
    except EOFError:
        return False
    return answer.strip().lower().startswith("y")


class CLIRunner:
    """CLI runner and orchestrator."""

    def __init__(
        self,
        config_manager: ConfigManager | None = None,
        transport: Transport | None = None,
        prompt: Callable[[str], bool] = _default_prompt,
    ) -> None:
        """Initialize CLI runner.

        Args:
            config_manager: Settings loader (default reads the user config)
            transport: Transport override, selected from config if None
            prompt: Asks a yes/no question, returns True for yes

        """
        self.config_manager = config_manager or ConfigManager()
        self.transport = transport
        self.prompt = prompt

    def run(self, argv: Sequence[str]) -> int:
        """Run the CLI application and return the exit code."""
        cli_argv, installer_args = split_installer_args(argv)
        try:
            args = CLIParser().parse_args(cli_argv)
        except SystemExit as e:
            return e.code if isinstance(e.code, int) else EXIT_USAGE

        if args.about:
            print(__version__)
            return EXIT_SUCCESS

        try:
            return self._execute(args, installer_args)
        except BootstrapError as e:
            logger.error("%s", e)  # noqa: TRY400
            return EXIT_FAILURE
        except KeyboardInterrupt:
            logger.error("Operation cancelled by user")
            return EXIT_FAILURE
        except Exception:
            logger.exception("Unexpected error")
            return EXIT_FAILURE
        finally:
            if args.verbose:
                restore_console_level()
            flush_all_handlers()

    def _execute(self, args: Namespace, installer_args: list[str]) -> int:
        config = self.config_manager.load(config_overrides(args))
        update_logger_from_config(config.console_log_level, config.log_level)
        if args.verbose:
            set_console_level_temporarily("DEBUG")

        transport = self.transport or select_transport(config)

        if args.check:
            return self._check(config, transport)

        if not config.auto_run and config.install_dir is None:
            logger.error(
                "--no-run needs --install-dir; a temporary bundle would be "
                "deleted before it could be used"
            )
            return EXIT_USAGE

        version = None
        if args.update:
            status = UpdateChecker(
                config, VersionResolver(config, transport)
            ).check()
            if status.state == "up-to-date":
                logger.info("Already up-to-date (%s).", status.installed)
                return EXIT_SUCCESS
            if status.state == "not-installed" and not (
                args.yes or self.prompt(INSTALL_PROMPT)
            ):
                logger.info("Aborted.")
                return EXIT_SUCCESS
            logger.info("Updating to %s ...", status.latest)
            version = status.latest

        return self._acquire(config, transport, installer_args, version)

    @staticmethod
    def _check(config: BootstrapConfig, transport: Transport) -> int:
        resolver = VersionResolver(config, transport)
        status = UpdateChecker(config, resolver).check()
        print(f"Installed version: {status.installed or 'not installed'}")
        print(f"Latest available:  {status.latest}")
        if status.state == "up-to-date":
            print("Already up-to-date.")
        elif status.state == "update-available":
            print("Update available: run with --update")
        return EXIT_SUCCESS

    @staticmethod
    def _acquire(
        config: BootstrapConfig,
        transport: Transport,
        installer_args: list[str],
        version: str | None,
    ) -> int:
        pipeline = AcquisitionPipeline(config, transport, installer_args)
        with pipeline.run(version) as result:
            if not config.auto_run:
                logger.info("Skipping automatic execution (AUTO_RUN=0).")
                logger.info(
                    "You can run the installer manually via: %s",
                    result.handoff.display(),
                )
                return EXIT_SUCCESS
            return run_handoff(result.handoff)
