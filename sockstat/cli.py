"""Command-line interface for sockstat."""

import argparse
import sys
from pathlib import Path

from sockstat import __version__
from sockstat.core import (
    Config,
    ConsoleLogger,
    Context,
    Output,
    build_config,
    load_settings,
    parse_sockstat,
)
from sockstat.lib import SourceError, SourceUnavailable, check_source, read_source


EXAMPLES = """\
Examples:
  sockstat --json
  sockstat --log-level DEBUG
  sockstat --json --log-level WARNING
  sockstat --path /tmp/test-sockstat --json
"""


class InvalidArgument(Exception):
    """Bad command-line usage."""

    pass


class ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting on bad usage."""

    def error(self, message: str):
        raise InvalidArgument(message)


def create_parser() -> ArgumentParser:
    """Create the argument parser."""
    parser = ArgumentParser(
        prog="sockstat",
        description="Report socket usage and memory from /proc/net/sockstat",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output socket summary in JSON format",
    )
    parser.add_argument(
        "--log-level",
        metavar="LEVEL",
        help="Set log level (DEBUG, INFO, WARNING, ERROR; default: INFO)",
    )
    parser.add_argument(
        "--path",
        help="Path to sockstat file (default: /proc/net/sockstat)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        metavar="FILE",
        help="YAML config file (default: ~/.config/sockstat/config.yaml and ./.sockstat.yaml)",
    )
    parser.add_argument(
        "--log-file",
        metavar="FILE",
        help="Also append log entries to FILE as JSON lines",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Display version information",
    )
    parser.add_argument(
        "--help",
        action="store_true",
        help="Display this help message",
    )
    return parser


def parse_args(parser: ArgumentParser, args: list[str]) -> argparse.Namespace:
    """
    Parse arguments, rejecting anything the parser doesn't know.

    Raises:
        InvalidArgument: On unknown options, stray arguments or missing values
    """
    opts, unknown = parser.parse_known_args(args)
    if unknown:
        raise InvalidArgument(f"Unknown option: {unknown[0]}")
    return opts


def load_config(opts: argparse.Namespace) -> Config:
    """Layer config files under the command-line options."""
    paths = None
    if opts.config is not None:
        if not opts.config.exists():
            raise InvalidArgument(f"Config file not found: {opts.config}")
        paths = [opts.config]

    settings, warnings = load_settings(paths)
    return build_config(
        settings,
        log_level=opts.log_level,
        json_output=opts.json,
        path=opts.path,
        log_file=opts.log_file,
        warnings=warnings,
    )


def open_logger(config: Config) -> ConsoleLogger:
    """
    Build the logger, opening its log file up front.

    Raises:
        InvalidArgument: If the log file can't be opened
    """
    logger = ConsoleLogger(min_level=config.log_level, log_path=config.log_file)
    try:
        logger.open()
    except OSError as e:
        raise InvalidArgument(f"Cannot open log file {config.log_file}: {e}")
    return logger


def print_socket_summary(
    config: Config,
    output: Output,
    context: Context,
    logger: ConsoleLogger,
) -> int:
    """
    Read the statistics source and print it in the configured format.

    Returns:
        0 on success, 1 if the source couldn't be read
    """
    try:
        check_source(config.path, context)
    except SourceUnavailable as e:
        logger.error(f"Error: {e}")
        output.error(str(e))
        return 1

    logger.info("Welcome to the Socket Summary Analyzer")

    start = context.monotonic()
    logger.info(f"Reading socket statistics from {config.path}...")
    try:
        content = read_source(config.path, context)
    except SourceError as e:
        logger.error(str(e))
        logger.error("Failed to retrieve socket summary")
        output.error(str(e))
        return 1

    elapsed = context.monotonic() - start
    logger.info(f"Success! Retrieved socket summary in {elapsed:.4f}s.")

    if config.json_output:
        report = parse_sockstat(content, logger)
        missing = report.missing_categories()
        if missing:
            logger.debug(f"Not reported on this system: {', '.join(missing)}")
        output.emit(report.to_dict())
        output.set_summary(
            f"sockets={report.sockets.used}, tcp_inuse={report.tcp.inuse}"
        )
    else:
        output.emit_raw(content)
        output.set_summary(f"lines={len(content.splitlines())}")

    logger.debug(f"Result: {output.summary}")
    logger.info("Socket Summary:")
    output.render(config.output_format)
    return 0


def run(args: list[str], output: Output, context: Context) -> int:
    """
    Main entry point.

    Args:
        args: Command-line arguments
        output: Output helper
        context: Execution context

    Returns:
        0 = success, 1 = error
    """
    parser = create_parser()

    try:
        opts = parse_args(parser, args)
        if opts.help:
            parser.print_help()
            return 0
        if opts.version:
            print(f"sockstat {__version__}")
            return 0
        config = load_config(opts)
        logger = open_logger(config)
    except InvalidArgument as e:
        ConsoleLogger().error(str(e))
        output.error(str(e))
        parser.print_usage()
        return 1

    with logger:
        for warning in config.warnings:
            logger.warning(warning)
            output.warning(warning)
        logger.debug(
            f"Configuration: path={config.path}, "
            f"format={config.output_format}, log_level={config.log_level}"
        )
        return print_socket_summary(config, output, context, logger)


def main(argv: list[str] | None = None) -> int:
    """Console script entry point."""
    if argv is None:
        argv = sys.argv[1:]
    return run(argv, Output(), Context())


if __name__ == "__main__":
    sys.exit(main())
