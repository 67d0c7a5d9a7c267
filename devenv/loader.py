"""Load, validate and cache the dev environment.

The cache lives in a :class:`DevEnvContext`. Module-level helpers
(:func:`load_dev_env`, :func:`get_dev_env`, :func:`clear_dev_env_cache`) act on
a process default context; code that needs isolation (tests, embedding tools)
creates its own context instead.
"""

from __future__ import annotations

import asyncio
import importlib.machinery
import importlib.util
import itertools
import logging
import os
import sys
from typing import Any, Callable, Mapping

from .environment import AppConfig, DevConfig, DevEnvironment, ServiceConfig, create_dev_environment
from .errors import ConfigNotFoundError, DevEnvNotLoadedError, InvalidConfigError
from .locator import find_config_file

# Module-level name a config file must assign its config to.
CONFIG_EXPORT = "config"

_module_ids = itertools.count()


class _ConfigFileLoader(importlib.machinery.SourceFileLoader):
    """Source loader that never reads or writes bytecode caches."""

    def get_code(self, fullname: str) -> Any:
        return self.source_to_code(self.get_data(self.path), self.path)


def load_config_module(path: str) -> Any:
    """Execute the config file at ``path`` and return its ``config`` attribute.

    Every call executes the file again in a fresh module object. Errors raised
    by the file itself propagate unchanged.

    Returns:
        The exported value, or None when the module defines no ``config``.
    """
    module_name = f"_devenv_config_{next(_module_ids)}"
    loader = _ConfigFileLoader(module_name, path)
    spec = importlib.util.spec_from_file_location(module_name, path, loader=loader)
    if spec is None:
        raise InvalidConfigError(path, "not importable as a Python module")

    module = importlib.util.module_from_spec(spec)
    # Registered while executing so dataclasses and friends can find the module.
    sys.modules[module_name] = module
    # The config directory goes first on sys.path so helper modules next to it import.
    config_dir = os.path.dirname(os.path.abspath(path))
    sys.path.insert(0, config_dir)
    try:
        loader.exec_module(module)
    finally:
        sys.modules.pop(module_name, None)
        if config_dir in sys.path:
            sys.path.remove(config_dir)

    logging.debug(f"Executed config module {path} as {module_name}")
    return getattr(module, CONFIG_EXPORT, None)


def _get_field(raw: Any, name: str) -> Any:
    if isinstance(raw, Mapping):
        return raw.get(name)
    return getattr(raw, name, None)


def _check_entries(path: str, kind: str, entries: Mapping[str, Any], entry_type: type) -> None:
    for name, entry in entries.items():
        if isinstance(entry, entry_type):
            port = entry.port
        elif isinstance(entry, Mapping):
            port = entry.get("port")
        else:
            raise InvalidConfigError(path, f"{kind}.{name} must be a mapping or {entry_type.__name__}")

        if port is None:
            continue
        try:
            int(port)
        except (TypeError, ValueError):
            raise InvalidConfigError(path, f"{kind}.{name}.port must be an integer, got {port!r}") from None


def validate_config(raw: Any, path: str) -> DevConfig:
    """Check the exported config and convert it to a DevConfig.

    Accepts a DevConfig, any mapping, or an object exposing the same
    attributes.

    Raises:
        InvalidConfigError: If ``raw`` is missing, ``project_prefix`` is empty,
            ``services`` is empty or not a mapping, or a service or app entry
            is malformed (wrong type, non-integer port).
    """
    if raw is None:
        raise InvalidConfigError(path, f"no `{CONFIG_EXPORT}` defined")

    project_prefix = _get_field(raw, "project_prefix")
    if not project_prefix or not isinstance(project_prefix, str):
        raise InvalidConfigError(path, "project_prefix must be a non-empty string")

    services = _get_field(raw, "services")
    if not services or not isinstance(services, Mapping):
        raise InvalidConfigError(path, "services must be a non-empty mapping")
    _check_entries(path, "services", services, ServiceConfig)

    apps = _get_field(raw, "apps") or {}
    if not isinstance(apps, Mapping):
        raise InvalidConfigError(path, "apps must be a mapping")
    _check_entries(path, "apps", apps, AppConfig)

    if isinstance(raw, DevConfig):
        return raw

    if isinstance(raw, Mapping):
        extra = {k: v for k, v in raw.items() if k not in ("project_prefix", "services", "apps")}
    else:
        extra = dict(_get_field(raw, "extra") or {})

    return DevConfig(
        project_prefix=project_prefix,
        services=dict(services),
        apps=dict(apps),
        extra=extra,
    )


class DevEnvContext:
    """Owns one cached DevEnvironment and the loads that populate it.

    Only ``load(reload=True)`` and ``clear()`` replace the cached value.
    Concurrent loads with the same start directory and reload flag share one
    in-flight task.
    """

    def __init__(self, factory: Callable[[DevConfig], DevEnvironment] = create_dev_environment) -> None:
        self._factory = factory
        self._env: DevEnvironment | None = None
        self._config_path: str | None = None
        self._inflight: tuple[tuple[str, bool], asyncio.Future[DevEnvironment]] | None = None

    @property
    def loaded(self) -> bool:
        return self._env is not None

    @property
    def config_path(self) -> str | None:
        """Path of the config file behind the cached environment."""
        return self._config_path

    async def load(self, cwd: str | os.PathLike[str] | None = None, reload: bool = False) -> DevEnvironment:
        """Return the cached environment, loading it first if needed.

        Args:
            cwd: Directory to start the config search from. Defaults to the
                current working directory.
            reload: Search and load again even if a value is cached.

        Raises:
            ConfigNotFoundError: No config file between ``cwd`` and the root.
            InvalidConfigError: The config file exports a malformed config.
        """
        if self._env is not None and not reload:
            return self._env

        start_dir = os.path.abspath(os.fspath(cwd) if cwd is not None else os.getcwd())
        key = (start_dir, reload)

        while self._inflight is not None:
            inflight_key, task = self._inflight
            if inflight_key == key:
                return await asyncio.shield(task)
            # A different load is running; let it settle before starting ours.
            await asyncio.wait({task})
            if self._env is not None and not reload:
                return self._env

        task = asyncio.ensure_future(self._load_from(start_dir))
        self._inflight = (key, task)
        task.add_done_callback(self._forget_inflight)
        return await asyncio.shield(task)

    def _forget_inflight(self, task: asyncio.Future[DevEnvironment]) -> None:
        if self._inflight is not None and self._inflight[1] is task:
            self._inflight = None

    async def _load_from(self, start_dir: str) -> DevEnvironment:
        config_path = await asyncio.to_thread(find_config_file, start_dir)
        if config_path is None:
            raise ConfigNotFoundError(start_dir)

        raw = await asyncio.to_thread(load_config_module, config_path)
        config = validate_config(raw, config_path)
        env = self._factory(config)

        self._env = env
        self._config_path = config_path
        logging.info(f"Loaded dev environment '{config.project_prefix}' from {config_path}")
        return env

    def get(self) -> DevEnvironment:
        """Return the cached environment without doing any I/O.

        Raises:
            DevEnvNotLoadedError: If nothing has been loaded since the last clear.
        """
        if self._env is None:
            raise DevEnvNotLoadedError()
        return self._env

    def clear(self) -> None:
        self._env = None
        self._config_path = None


_default_context = DevEnvContext()


def default_context() -> DevEnvContext:
    """Return the process-wide context used by the module-level helpers."""
    return _default_context


async def load_dev_env(cwd: str | os.PathLike[str] | None = None, reload: bool = False) -> DevEnvironment:
    """Load the dev environment into the default context (cached).

    Example::

        env = await load_dev_env()
        env.ports["postgres"]  # 5432
        env.urls["api"]        # http://localhost:3000
    """
    return await _default_context.load(cwd=cwd, reload=reload)


def get_dev_env() -> DevEnvironment:
    """Return the environment cached by a previous :func:`load_dev_env` call."""
    return _default_context.get()


def clear_dev_env_cache() -> None:
    _default_context.clear()
