"""Tests for command line parsing."""

import pytest

from moddex_bootstrap.cli import CLIParser
from moddex_bootstrap.cli.parser import config_overrides, split_installer_args


def test_split_installer_args():
    argv = ["--version", "v1", "--", "--mode", "local", "--", "x"]

    assert split_installer_args(argv) == (
        ["--version", "v1"],
        ["--mode", "local", "--", "x"],
    )


def test_split_without_separator():
    assert split_installer_args(["--check"]) == (["--check"], [])


def test_defaults_leave_config_untouched():
    args = CLIParser().parse_args([])

    assert all(value is None for value in config_overrides(args).values())


def test_flags_map_to_config_keys():
    args = CLIParser().parse_args(
        [
            "--version",
            "v1.2.3",
            "--install-dir",
            "/opt/bundle",
            "--no-run",
            "--asset-suffix=-linux-arm64.tar.gz",
            "--resolver",
            "api",
            "--allow-unverified",
            "--replace",
        ]
    )

    assert config_overrides(args) == {
        "version": "v1.2.3",
        "asset_suffix": "-linux-arm64.tar.gz",
        "resolver": "api",
        "install_dir": "/opt/bundle",
        "auto_run": False,
        "on_existing": "replace",
        "verification": "lenient",
    }


def test_bundle_dir_alias():
    args = CLIParser().parse_args(["--bundle-dir", "/srv/moddex"])

    assert args.install_dir == "/srv/moddex"


@pytest.mark.parametrize(
    "argv",
    [
        ["--unknown"],
        ["--run", "--no-run"],
        ["--check", "--update"],
        ["--resolver", "scrape"],
        ["--version"],
    ],
)
def test_usage_errors_exit_2(argv):
    with pytest.raises(SystemExit) as exc_info:
        CLIParser().parse_args(argv)

    assert exc_info.value.code == 2


def test_help_lists_environment_overrides(capsys):
    with pytest.raises(SystemExit) as exc_info:
        CLIParser().parse_args(["--help"])

    assert exc_info.value.code == 0
    out = capsys.readouterr().out
    for name in ("MODDEX_BUNDLE_DIR", "AUTO_RUN", "--allow-unverified"):
        assert name in out
