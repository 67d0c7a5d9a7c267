"""Shared test fixtures for the devenv test suite."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Callable, Iterator

import pytest

from devenv.loader import default_context

VALID_CONFIG = """
from devenv import define_dev_config

config = define_dev_config(
    project_prefix="shop",
    services={
        "postgres": {"port": 5432, "image": "postgres:16"},
        "redis": {"port": 6379},
    },
    apps={"api": {"port": 3000, "command": "uvicorn shop.api:app"}},
)
"""


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "unit: fast tests without external dependencies")


@pytest.fixture(autouse=True)
def clean_default_context() -> Iterator[None]:
    """Keep the process-wide cache from leaking between tests."""
    default_context().clear()
    yield
    default_context().clear()


@pytest.fixture
def write_config() -> Callable[..., Path]:
    """Factory fixture: write a config file into a directory and return its path."""

    def _write(directory: Path, source: str = VALID_CONFIG, name: str = "dev.config.py") -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / name
        path.write_text(textwrap.dedent(source))
        return path

    return _write


@pytest.fixture
def project_tree(tmp_path: Path, write_config: Callable[..., Path]) -> dict[str, Path]:
    """A project root holding a valid config and a nested working directory."""
    root = tmp_path / "project"
    config_path = write_config(root)
    nested = root / "packages" / "api"
    nested.mkdir(parents=True)
    return {"root": root, "config": config_path, "nested": nested}
