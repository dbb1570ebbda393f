"""Shared fixtures: a temp registry file and an in-memory Path variable with Windows path rules."""

from pathlib import Path

import pytest

from pathgroups.codec import PathListCodec
from pathgroups.environment import EnvironmentPathSync, ProcessEnvironmentStore
from pathgroups.groups import GroupOperations
from pathgroups.registry import PathRegistry


class CountingStore(ProcessEnvironmentStore):
    """Process store that remembers how often it was written."""

    def __init__(self, variable, environ):
        super().__init__(variable, environ)
        self.writes = 0

    def write(self, value):
        self.writes += 1
        super().write(value)


@pytest.fixture
def codec() -> PathListCodec:
    return PathListCodec.for_platform("windows")


@pytest.fixture
def environ() -> dict:
    return {"Path": r"C:\Windows;C:\Windows\System32"}


@pytest.fixture
def store(environ) -> CountingStore:
    return CountingStore("Path", environ)


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    return tmp_path / "data" / "PathGroups" / "pathgroups.json"


@pytest.fixture
def registry(config_file, codec) -> PathRegistry:
    return PathRegistry(config_file, codec)


@pytest.fixture
def sync(store, codec) -> EnvironmentPathSync:
    return EnvironmentPathSync(store, codec)


@pytest.fixture
def ops(registry, sync) -> GroupOperations:
    return GroupOperations(registry, sync)
