import sys
import dataclasses
from pathlib import Path
from typing import Optional
from logging import getLogger

import click

from . import exc
from .logging import configure_logging, LOG_LEVELS
from .config import load_config, default_config_file
from .svc import build_site
from .version import get_version

logger = getLogger(__name__)

config_file_option = click.option(
    "-f",
    "--config-file",
    default=None,
    help="Path to config file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)


@click.command("blogsite-build", help="Render the posts into the output directory")
@config_file_option
@click.option(
    "--fail-fast",
    is_flag=True,
    default=False,
    help="Stop at the first broken post instead of reporting them all at the end",
)
@click.option("--workers", type=click.IntRange(min=1), default=None)
@click.option("--log-level", type=click.Choice(LOG_LEVELS), default=None)
@click.version_option(get_version())
def build(
    config_file: Optional[Path],
    fail_fast: bool,
    workers: Optional[int],
    log_level: Optional[str],
) -> None:
    if config_file is None:
        config_file = default_config_file()
    config = load_config(config_file)

    overrides = {
        k: v
        for k, v in [
            ("fail_fast", True if fail_fast else None),
            ("workers", workers),
            ("log_level", log_level),
        ]
        if v is not None
    }
    config = dataclasses.replace(config, **overrides)
    configure_logging(config.log_level)

    try:
        report = build_site(config)
    except exc.BlogsiteException as e:
        logger.error("build aborted: %s", e)
        sys.exit(1)

    if not report.ok():
        logger.error("%d file(s) failed", len(report.errors))
        sys.exit(1)


@click.command("blogsite-config", help="Show the configuration")
@config_file_option
def config_cli(config_file: Optional[Path]):
    configure_logging()

    if config_file is None:
        config_file = default_config_file()

    logger.info(load_config(config_file))
