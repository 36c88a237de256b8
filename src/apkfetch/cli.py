# src/apkfetch/cli.py

import argparse
import sys
from typing import Any, Dict, List, Optional

from apkfetch import actions, log_utils
from apkfetch.config import (
    DownloadConfig,
    build_config,
    inputs_from_env,
    load_config_file,
)
from apkfetch.download.orchestrator import ReleaseDownloadOrchestrator
from apkfetch.exceptions import ApkfetchError
from apkfetch.utils import get_package_version

EXIT_OK = 0
EXIT_FAILURE = 1


def _add_selection_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("org", help="Catalog organization (e.g. google-inc)")
    parser.add_argument("repo", help="Catalog app slug (e.g. youtube)")
    parser.add_argument(
        "--version-pattern",
        dest="version_pattern",
        metavar="REGEX",
        help="Only consider versions whose listing label matches this regular expression",
    )
    parser.add_argument(
        "--include-prerelease",
        dest="include_prerelease",
        action="store_true",
        default=None,
        help="Also consider alpha and beta versions",
    )
    parser.add_argument(
        "--config",
        dest="config_path",
        metavar="FILE",
        help="YAML configuration file (defaults to the user config file when present)",
    )
    parser.add_argument(
        "--base-url",
        dest="base_url",
        metavar="URL",
        help="Catalog origin",
    )
    parser.add_argument(
        "--timeout",
        dest="request_timeout",
        type=float,
        metavar="SECONDS",
        help="Per-request timeout",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        metavar="LEVEL",
        help="Log level (DEBUG, INFO, WARNING, ERROR)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="apkfetch",
        description="apkfetch - resolve and download app releases from APKMirror",
    )
    subparsers = parser.add_subparsers(dest="command")

    download_parser = subparsers.add_parser(
        "download", help="Resolve a release and download it"
    )
    _add_selection_arguments(download_parser)
    download_parser.add_argument(
        "--version",
        dest="version",
        help="Exact version to download (skips version detection)",
    )
    download_parser.add_argument(
        "--bundle",
        action="store_true",
        default=None,
        help="Download the BUNDLE (.apkm) variant instead of the APK",
    )
    download_parser.add_argument("--arch", help="Required architecture (e.g. arm64-v8a)")
    download_parser.add_argument("--dpi", help="Required screen density (e.g. nodpi)")
    download_parser.add_argument(
        "--filename",
        metavar="TEMPLATE",
        help="Output filename; may use ${version}, ${variant}, ${arch}, ${dpi}, "
        "${minSdk}, ${signature}, ${date} and ${release}",
    )
    download_parser.add_argument(
        "--no-overwrite",
        dest="overwrite",
        action="store_false",
        default=None,
        help="Skip the download when the output file already exists",
    )
    download_parser.add_argument(
        "--output-dir",
        dest="output_dir",
        metavar="DIR",
        help="Directory to write the artifact to",
    )
    download_parser.add_argument(
        "--log-file",
        dest="log_dir",
        metavar="DIR",
        help="Also write a rotating log file to this directory",
    )

    versions_parser = subparsers.add_parser(
        "versions", help="List the versions available for an app"
    )
    _add_selection_arguments(versions_parser)

    subparsers.add_parser(
        "action",
        help="Run as a GitHub Action (inputs from INPUT_* variables, outputs to $GITHUB_OUTPUT)",
    )

    subparsers.add_parser("version", help="Display apkfetch version")
    return parser


def _cli_layer(args: argparse.Namespace) -> Dict[str, Any]:
    """Options given on the command line; unset flags are left out."""
    skip = {"command", "config_path", "log_dir"}
    return {
        key: value
        for key, value in vars(args).items()
        if key not in skip and value is not None
    }


def _apply_log_settings(config: DownloadConfig, log_dir: Optional[str] = None) -> None:
    if config.log_level:
        log_utils.set_log_level(config.log_level)
    if log_dir:
        log_utils.add_file_logging(log_dir, config.log_level or "INFO")


def _report_failure(config: Optional[DownloadConfig], error: ApkfetchError) -> int:
    if config is not None:
        log_utils.logger.error(f"{config.org}/{config.repo}: {error}")
    else:
        log_utils.logger.error(str(error))
    return EXIT_FAILURE


def _run_download(config: DownloadConfig, publish: bool = False) -> int:
    with ReleaseDownloadOrchestrator(config) as orchestrator:
        outcome = orchestrator.run()

    if outcome.skipped:
        log_utils.logger.info("Download has been skipped because file already exists!")
        return EXIT_OK

    log_utils.logger.info(
        f"{config.repo} successfully downloaded to '{outcome.download.file_path}'!"
    )
    if publish:
        actions.write_outputs(outcome.as_outputs())
    return EXIT_OK


def _handle_download_command(args: argparse.Namespace) -> int:
    config = None
    try:
        config = build_config(load_config_file(args.config_path), _cli_layer(args))
        _apply_log_settings(config, args.log_dir)
        return _run_download(config)
    except ApkfetchError as error:
        return _report_failure(config, error)


def _handle_action_command() -> int:
    config = None
    try:
        config = build_config(load_config_file(), inputs_from_env())
        _apply_log_settings(config)
        return _run_download(config, publish=True)
    except ApkfetchError as error:
        return _report_failure(config, error)


def _handle_versions_command(args: argparse.Namespace) -> int:
    config = None
    try:
        config = build_config(load_config_file(args.config_path), _cli_layer(args))
        _apply_log_settings(config)
        with ReleaseDownloadOrchestrator(config) as orchestrator:
            entries = orchestrator.list_versions()
    except ApkfetchError as error:
        return _report_failure(config, error)

    if not entries:
        log_utils.logger.info("No versions matched.")
    for entry in entries:
        print(f"{entry.display_text}\t{entry.link_path}")
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point for the apkfetch command-line interface.

    Dispatches the `download`, `versions`, `action` and `version` subcommands.

    Returns:
        int: Process exit status (0 on success or skip, 1 on failure).
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "download":
        return _handle_download_command(args)
    if args.command == "versions":
        return _handle_versions_command(args)
    if args.command == "action":
        return _handle_action_command()
    if args.command == "version":
        print(f"apkfetch {get_package_version()}")
        return EXIT_OK

    parser.print_help()
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
