"""Upward search for a project's dev config file."""

from __future__ import annotations

import logging
import os

# Priority order within a single directory.
CONFIG_FILES = (
    "dev.config.py",
    "dev_config.py",
    "dev-tools.config.py",
    "dev_tools_config.py",
)


def find_config_file(start_dir: str | os.PathLike[str]) -> str | None:
    """Find a config file by walking up from ``start_dir`` to the filesystem root.

    The nearest directory wins; ``CONFIG_FILES`` order only breaks ties inside
    one directory. Existence checks that fail with an OSError count as a miss.

    Args:
        start_dir: Directory to start the search from (inclusive).

    Returns:
        Absolute path of the first matching file, or None if the root was
        reached without a match.
    """
    current_dir = os.path.abspath(os.fspath(start_dir))

    while True:
        logging.debug(f"Looking for dev config in {current_dir}")
        for file_name in CONFIG_FILES:
            config_path = os.path.join(current_dir, file_name)
            if os.path.exists(config_path):
                logging.info(f"Found dev config: {config_path}")
                return config_path

        parent_dir = os.path.dirname(current_dir)
        if parent_dir == current_dir:
            logging.debug(f"Reached filesystem root without a config file (started at {start_dir})")
            return None

        current_dir = parent_dir
