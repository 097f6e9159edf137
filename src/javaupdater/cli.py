"""
Command line entry point: check for and install a JDK update.

Settings are read from the [javaupdater] table of a TOML file (``javaupdater.toml``
in the working directory by default) and can be overridden by flags.
"""

import argparse
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from javaupdater.java_updater import JavaUpdater
from javaupdater.javaupdater_config import JavaUpdaterConfig
from javaupdater.javaupdater_exceptions import JavaUpdaterException
from javaupdater.javaupdater_logger import JavaUpdaterLogger

DEFAULT_CONFIG_FILE = "javaupdater.toml"

CONFIG_SCHEMA = """
# javaupdater configuration

[javaupdater]
# Major version of the JDK to keep up to date
java_version = "17"

# Only "adoptium" is supported
java_vendor = "adoptium"

# linux, mac or windows (optional, defaults to the running platform)
# platform = "linux"

# Root for jdk/<platform> and the download cache (optional, defaults to a folder in the user temp dir)
# install_root = "/opt/javaupdater"

# Timeout in seconds for catalog queries and downloads
# request_timeout = 60
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="javaupdater",
        description="Install or update a JDK from the Adoptium release catalog.",
        epilog=CONFIG_SCHEMA,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--config", help=f"TOML configuration file (default: ./{DEFAULT_CONFIG_FILE} if present)")
    parser.add_argument("--java-version", dest="java_version", help="Major version, e.g. 17")
    parser.add_argument("--vendor", dest="java_vendor", help="JDK vendor, e.g. adoptium")
    parser.add_argument("--platform", choices=["linux", "mac", "windows"], help="Target platform")
    parser.add_argument("--install-root", dest="install_root", help="Root directory for installations")
    parser.add_argument("--timeout", dest="request_timeout", type=float, help="Network timeout in seconds")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def load_config(args: argparse.Namespace) -> JavaUpdaterConfig:
    """
    Merges the TOML configuration with the command line overrides
    """
    values: Dict[str, Any] = {}
    config_path = args.config
    if config_path is None and os.path.exists(DEFAULT_CONFIG_FILE):
        config_path = DEFAULT_CONFIG_FILE
    if config_path is not None:
        values.update(vars(JavaUpdaterConfig.from_toml(config_path)))

    for key in ("java_version", "java_vendor", "platform", "install_root", "request_timeout"):
        value = getattr(args, key)
        if value is not None:
            values[key] = value
    return JavaUpdaterConfig.from_dict(values)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger = JavaUpdaterLogger()

    try:
        config = load_config(args)
        updater = JavaUpdater.from_config(config, logger)
        result = updater.execute(config.java_version, config.java_vendor)
    except JavaUpdaterException as e:
        logger.log(f"Java update failed: {e.message}", logging.ERROR)
        return 1

    print(f"{result.status}: Java {result.java_version} ({result.java_vendor}) at {result.install_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
