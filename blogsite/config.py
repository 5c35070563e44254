from logging import getLogger
from pathlib import Path
from typing import Optional
from dataclasses import dataclass

import toml

logger = getLogger(__name__)


@dataclass
class Config:
    """Where the site lives and how to build it.

    Layouts get the post, never this object.

    """

    source_dir: Path
    layouts_dir: Path
    output_dir: Path
    default_layout: str = "post"
    base_url: Optional[str] = None
    site_title: str = "blog"
    site_description: str = ""

    # abort on the first broken post rather than collecting all the errors
    fail_fast: bool = False
    workers: int = 1
    log_level: str = "INFO"


def load_config(config_file: Path) -> Config:
    """Loads the configuration at the given path.

    Relative directories are taken to be relative to the directory the config
    file is in (whether or not it exists).

    """
    logger.info("loading config from %s", config_file)
    if config_file.exists():
        with open(config_file, encoding="utf-8") as config_f:
            as_dict = toml.load(config_f)
    else:
        logger.warning("config file ('%s') not found, using defaults", config_file)
        as_dict = {}
    base_dir = config_file.parent
    return Config(
        source_dir=base_dir / as_dict.get("source_dir", "_posts"),
        layouts_dir=base_dir / as_dict.get("layouts_dir", "_layouts"),
        output_dir=base_dir / as_dict.get("output_dir", "_site"),
        default_layout=as_dict.get("default_layout", "post"),
        base_url=as_dict.get("base_url"),
        site_title=as_dict.get("site_title", "blog"),
        site_description=as_dict.get("site_description", ""),
        fail_fast=as_dict.get("fail_fast", False),
        workers=int(as_dict.get("workers", 1)),
        log_level=as_dict.get("log_level", "INFO"),
    )


def default_config_file() -> Path:
    """Returns the location of the default config file"""
    return Path.cwd() / "blogsite.toml"
