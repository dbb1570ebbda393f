"""Exceptions raised by pathgroups."""

from pathlib import Path
from typing import Iterable, Union


class PathGroupsError(Exception):
    """Base class for every error this package raises on purpose."""


class ConfigurationError(PathGroupsError):
    """Invalid runtime settings (bad scope name, bad boolean, ...)."""


class ConfigNotFoundError(PathGroupsError):
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(f"Path group configuration not found: {self.path}")


# Short name used by callers that only care about "registry absent".
NotFoundError = ConfigNotFoundError


class ConfigParseError(PathGroupsError):
    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Could not parse path group configuration {self.path}: {reason}")


class ConfigReadError(PathGroupsError):
    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Could not read path group configuration {self.path}: {reason}")


class ConfigWriteError(PathGroupsError):
    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Could not write path group configuration {self.path}: {reason}")


class UnknownGroupError(PathGroupsError):
    """One or more requested groups have no registered paths."""

    def __init__(self, groups: Iterable[str]):
        self.groups = tuple(groups)
        names = ", ".join(f"'{g}'" for g in self.groups)
        label = "group" if len(self.groups) == 1 else "groups"
        super().__init__(f"Unknown path {label}: {names}")


class EnvironmentWriteError(PathGroupsError):
    def __init__(self, variable: str, scope: str, reason: str):
        self.variable = variable
        self.scope = scope
        self.reason = reason
        super().__init__(f"Could not set {scope} environment variable '{variable}': {reason}")
