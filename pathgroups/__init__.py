"""Named groups of PATH entries, kept in a JSON registry and synced to the live variable."""

from pathgroups.codec import PathListCodec
from pathgroups.config import Scope, Settings
from pathgroups.environment import EnvironmentPathSync, ProcessEnvironmentStore, WindowsRegistryStore
from pathgroups.errors import (
    ConfigNotFoundError,
    ConfigParseError,
    ConfigReadError,
    ConfigWriteError,
    ConfigurationError,
    EnvironmentWriteError,
    NotFoundError,
    PathGroupsError,
    UnknownGroupError,
)
from pathgroups.groups import GroupOperations
from pathgroups.registry import PathEntry, PathRegistry

__version__ = "0.1.0"
