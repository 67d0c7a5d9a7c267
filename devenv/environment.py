"""Dev config types and the factory that turns a config into a DevEnvironment.

Config files build a ``DevConfig`` with :func:`define_dev_config`; the loader
validates it and passes it to :func:`create_dev_environment`, which resolves
ports and URLs for every service and app.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Mapping


@dataclass
class ServiceConfig:
    """A backing service such as a database or cache."""

    port: int | None = None
    image: str | None = None
    host: str = "localhost"
    protocol: str = "http"
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class AppConfig:
    """An application the developer runs locally."""

    port: int | None = None
    host: str = "localhost"
    protocol: str = "http"
    command: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class DevConfig:
    project_prefix: str
    services: dict[str, ServiceConfig | Mapping[str, Any]]
    apps: dict[str, AppConfig | Mapping[str, Any]] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)


def define_dev_config(
    *,
    project_prefix: str,
    services: Mapping[str, ServiceConfig | Mapping[str, Any]],
    apps: Mapping[str, AppConfig | Mapping[str, Any]] | None = None,
    **extra: Any,
) -> DevConfig:
    """Build a DevConfig for use in a ``dev.config.py`` file.

    Validation happens when the file is loaded, not here.
    """
    return DevConfig(
        project_prefix=project_prefix,
        services=dict(services),
        apps=dict(apps or {}),
        extra=extra,
    )


@dataclass(frozen=True)
class DevEnvironment:
    """Resolved dev environment derived from a validated DevConfig."""

    project_prefix: str
    services: dict[str, ServiceConfig]
    apps: dict[str, AppConfig]
    ports: dict[str, int]
    urls: dict[str, str]
    extra: dict[str, Any] = field(default_factory=dict)

    def container_name(self, service: str) -> str:
        if service not in self.services:
            raise KeyError(f"Unknown service: {service}")
        return f"{self.project_prefix}-{service}"

    def as_dict(self) -> dict[str, Any]:
        """Plain-dict view; values in ``extra`` are shared, not copied."""
        return {
            "project_prefix": self.project_prefix,
            "services": {name: _fields_of(entry) for name, entry in self.services.items()},
            "apps": {name: _fields_of(entry) for name, entry in self.apps.items()},
            "ports": dict(self.ports),
            "urls": dict(self.urls),
            "extra": dict(self.extra),
        }


def _fields_of(entry: Any) -> dict[str, Any]:
    return {f.name: getattr(entry, f.name) for f in fields(entry)}


def _split_known(entry: Mapping[str, Any], known: tuple[str, ...]) -> tuple[dict, dict]:
    fields_ = {k: v for k, v in entry.items() if k in known}
    extra = {k: v for k, v in entry.items() if k not in known}
    return fields_, extra


def _to_service(entry: ServiceConfig | Mapping[str, Any]) -> ServiceConfig:
    if isinstance(entry, ServiceConfig):
        return entry
    known, extra = _split_known(entry, ("port", "image", "host", "protocol"))
    return ServiceConfig(**known, extra=extra)


def _to_app(entry: AppConfig | Mapping[str, Any]) -> AppConfig:
    if isinstance(entry, AppConfig):
        return entry
    known, extra = _split_known(entry, ("port", "host", "protocol", "command"))
    return AppConfig(**known, extra=extra)


def create_dev_environment(config: DevConfig) -> DevEnvironment:
    """Derive ports and URLs from a validated config.

    Entries without a port are kept but get no port or URL. When a service and
    an app share a name, the app's values take precedence.

    Args:
        config: Validated dev config.

    Returns:
        A new DevEnvironment; ``config`` is not modified.
    """
    services = {name: _to_service(entry) for name, entry in config.services.items()}
    apps = {name: _to_app(entry) for name, entry in (config.apps or {}).items()}

    ports: dict[str, int] = {}
    urls: dict[str, str] = {}
    for name, entry in [*services.items(), *apps.items()]:
        if entry.port is None:
            continue
        port = int(entry.port)
        ports[name] = port
        urls[name] = f"{entry.protocol}://{entry.host}:{port}"

    return DevEnvironment(
        project_prefix=config.project_prefix,
        services=services,
        apps=apps,
        ports=ports,
        urls=urls,
        extra=dict(config.extra),
    )
