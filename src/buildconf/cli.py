"""Command line interface for buildconf."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from buildconf.common import LogContext, setup_logging
from buildconf.errors import ConfigError, CycleError
from buildconf.loader import APP_NAME, ConfigLoader

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_CYCLE_ERROR = 3
EXIT_CLEAN_FAILED = 4

logger = logging.getLogger(__package__ or __name__)


def show_command(loader: ConfigLoader) -> int:
    """Print the resolved configuration as JSON."""
    configuration = loader.configuration
    print(configuration.model_dump_json(indent=2))
    return EXIT_OK


def order_command(loader: ConfigLoader) -> int:
    """Print subprojects in evaluation order, one per line."""
    for name in loader.configuration.evaluation_order:
        print(name)
    return EXIT_OK


def clean_command(loader: ConfigLoader) -> int:
    """Delete the redirected build directory."""
    loader.load()
    result = loader.clean_action.run()
    if not result.ok:
        return EXIT_CLEAN_FAILED
    print(json.dumps({"target_dir": str(result.target_dir), "removed": result.removed}))
    return EXIT_OK


COMMANDS = {
    "show": show_command,
    "order": order_command,
    "clean": clean_command,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Resolve a declarative project build configuration"
    )
    parser.add_argument(
        "command",
        choices=sorted(COMMANDS),
        help="show: print resolved configuration; order: print evaluation order; "
             "clean: delete the build directory"
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to the project file (default: <project-dir>/buildconf.toml)"
    )
    parser.add_argument(
        "--project-dir",
        type=Path,
        help="Project directory (default: directory of --config, or the current directory)"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Log level (overrides config)"
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    # Errors before the config is read still need a handler
    setup_logging(level=args.log_level or "INFO")

    try:
        loader = ConfigLoader.from_file(config_path=args.config, project_dir=args.project_dir)
    except ConfigError as e:
        logger.error(e.message)
        return EXIT_CONFIG_ERROR

    logging_config = loader.project.logging
    setup_logging(
        level=args.log_level or logging_config.level,
        format=logging_config.format,
        log_file=Path(logging_config.file) if logging_config.file else None,
    )

    with LogContext(logger, command=args.command):
        try:
            return COMMANDS[args.command](loader)
        except CycleError as e:
            logger.error(e.message)
            return EXIT_CYCLE_ERROR
        except ConfigError as e:
            logger.error(e.message)
            return EXIT_CONFIG_ERROR


if __name__ == "__main__":
    sys.exit(main())
