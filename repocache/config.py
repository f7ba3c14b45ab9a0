"""Configuration to locate the repository cache and the git program"""

import configparser
import logging
import os
import platform
from typing import Optional, Any

from pathlib import Path

from repocache.constants import APP_NAME, DEFAULT_GIT_PROGRAM

logger = logging.getLogger(__name__)

_home = os.path.expanduser("~")

xdg_config_home = os.environ.get("XDG_CONFIG_HOME") or os.path.join(_home, ".config")
xdg_cache_home = os.environ.get("XDG_CACHE_HOME") or os.path.join(_home, ".cache")

# Environment overrides, checked before the config file
CACHE_DIR_ENV = "REPOCACHE_DIR"
GIT_PROGRAM_ENV = "REPOCACHE_GIT"

default_cfg = {
    "dirs": {"cache": os.path.join(xdg_cache_home, APP_NAME)},
    "git": {"program": DEFAULT_GIT_PROGRAM},
}

if platform.system() == "Darwin":
    # macOS
    config_dir = Path("~/Library/Application Support/repocache").expanduser()
else:
    # Linux or others
    config_dir = Path(os.path.join(xdg_config_home, APP_NAME))


def get_config_file():
    return config_dir / f"{APP_NAME}.cfg"


class ConfigAccessor:
    """
    Read-only view of the user configuration file.

    A missing file, section or key falls back to the given default.

    Usage:
        config = ConfigAccessor()
        program = config.get("git", "program", default="git")
    """

    def __init__(self, config_path: Optional[Path] = None):
        """
        Args:
            config_path: Path to the configuration file. If None, uses the default path.
        """
        if config_path is None:
            self.config_path = get_config_file()
        else:
            self.config_path = Path(config_path)

        self.config = configparser.ConfigParser()
        if self.config_path.exists():
            logger.debug(f"Reading configuration from {self.config_path}")
            self.config.read(self.config_path)

    def get(self, section: str, key: str, default: Any = None) -> Any:
        """
        Get the value of ``key`` in ``section``, or ``default`` if it is not set.
        """
        try:
            return self.config[section][key]
        except KeyError:
            return default


def get_cache_dir(config: Optional[ConfigAccessor] = None) -> Path:
    """
    Get the base directory of the repository cache.

    ``$REPOCACHE_DIR`` wins over ``[dirs] cache`` from the config file, which
    wins over ``$XDG_CACHE_HOME/repocache``. The directory is not created.

    Args:
        config: Configuration to read from (defaults to the user config file)

    Returns:
        Path to the cache base directory
    """
    cache_dir_str = os.environ.get(CACHE_DIR_ENV)
    if not cache_dir_str:
        if config is None:
            config = ConfigAccessor()
        cache_dir_str = config.get("dirs", "cache", default_cfg["dirs"]["cache"])
    return Path(cache_dir_str).expanduser()


def get_git_program(config: Optional[ConfigAccessor] = None) -> str:
    """
    Get the git program to invoke.

    Args:
        config: Configuration to read from (defaults to the user config file)

    Returns:
        Path or bare name of the git executable
    """
    program = os.environ.get(GIT_PROGRAM_ENV)
    if program:
        return program
    if config is None:
        config = ConfigAccessor()
    return config.get("git", "program", default_cfg["git"]["program"])
