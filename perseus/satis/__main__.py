"""CLI interface for updating a Satis file after a mirror run."""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from ..common.config import PerseusConfig, load_typed_config
from ..common.logger import setup_logger
from .exceptions import SatisError
from .provider import JsonFileProvider
from .registry import Satis


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m perseus.satis",
        description="Add mirrored repositories to a Satis configuration file",
    )
    parser.add_argument(
        "--config",
        default="perseus.yaml",
        help="perseus configuration file (defaults are used if it is missing)",
    )
    parser.add_argument(
        "--satis-file",
        help="Satis file to update (overrides satis.file from the configuration)",
    )
    parser.add_argument("urls", nargs="*", metavar="URL", help="mirrored repository URL")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the Satis update CLI."""
    args = build_parser().parse_args(argv)

    try:
        config = load_typed_config(args.config)
    except FileNotFoundError:
        config = PerseusConfig()
    except (yaml.YAMLError, TypeError, ValueError) as e:
        setup_logger("perseus").error(f"Invalid configuration file {args.config}: {e}")
        return 1

    try:
        logger = setup_logger(
            "perseus",
            log_dir=config.logging.log_dir,
            level=config.logging.level,
            file_logging=config.logging.file_logging,
        )
    except (ValueError, OSError) as e:
        setup_logger("perseus").error(f"Invalid logging configuration: {e}")
        return 1

    satis_file = Path(args.satis_file or config.satis.file)
    urls = list(config.mirror.repositories) + list(args.urls)

    try:
        if satis_file.exists():
            satis = Satis.from_file(satis_file)
        else:
            logger.info(f"Satis file {satis_file} does not exist, starting empty")
            satis = Satis(JsonFileProvider())

        for url in urls:
            satis.add_repository(url, config.satis.repository_type)

        satis.write_file(satis_file, config.satis.file_mode)
    except (SatisError, OSError) as e:
        logger.error(f"Error during update of Satis file {satis_file}: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
