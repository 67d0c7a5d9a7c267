"""Exceptions raised while resolving the dev environment."""

from __future__ import annotations


class DevEnvError(Exception):
    """Base class for all devenv errors."""


class ConfigNotFoundError(DevEnvError, FileNotFoundError):
    """No recognized config file exists between the start directory and the root."""

    def __init__(self, start_dir: str) -> None:
        self.start_dir = start_dir
        super().__init__(
            f"No config file found from {start_dir!r} upward. Create dev.config.py with: "
            "config = define_dev_config(project_prefix=..., services={...})"
        )


class InvalidConfigError(DevEnvError, ValueError):
    """A config file was found but its exported ``config`` has the wrong shape."""

    def __init__(self, path: str, reason: str | None = None) -> None:
        self.path = path
        message = (
            f'Invalid config in "{path}". Use define_dev_config() and assign it to '
            "a module-level `config`."
        )
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class DevEnvNotLoadedError(DevEnvError, RuntimeError):
    """The synchronous accessor was used before a successful load."""

    def __init__(self) -> None:
        super().__init__("Dev environment not loaded. Call load_dev_env() first.")
