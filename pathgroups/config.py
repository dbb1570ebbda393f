"""Runtime settings: where the registry lives and which variable it drives."""

import dataclasses
import enum
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from pathgroups.codec import PathListCodec
from pathgroups.errors import ConfigurationError

IS_WINDOWS = sys.platform.startswith("win")

APP_DIR_NAME = "PathGroups"
CONFIG_FILE_NAME = "pathgroups.json"

ENV_CONFIG = "PATHGROUPS_CONFIG"
ENV_VARIABLE = "PATHGROUPS_VARIABLE"
ENV_SCOPE = "PATHGROUPS_SCOPE"
ENV_CASE_SENSITIVE = "PATHGROUPS_CASE_SENSITIVE"

TRUTHY = {"1", "true", "yes", "on"}
FALSY = {"0", "false", "no", "off"}


class Scope(str, enum.Enum):
    PROCESS = "process"
    USER = "user"
    MACHINE = "machine"

    @classmethod
    def parse(cls, value: str) -> "Scope":
        try:
            return cls(value.strip().lower())
        except ValueError:
            choices = ", ".join(s.value for s in cls)
            raise ConfigurationError(f"Invalid scope '{value}' (expected one of: {choices})") from None


def default_config_file(environ: Mapping[str, str] = os.environ) -> Path:
    """Per-machine data location of the registry file."""
    if IS_WINDOWS:
        base = Path(environ.get("ProgramData", r"C:\ProgramData"))
        return base / APP_DIR_NAME / CONFIG_FILE_NAME
    return Path("/var/lib") / APP_DIR_NAME.lower() / CONFIG_FILE_NAME


def parse_bool(value: str, name: str) -> bool:
    v = value.strip().lower()
    if v in TRUTHY:
        return True
    if v in FALSY:
        return False
    raise ConfigurationError(f"Invalid boolean for {name}: '{value}'")


@dataclass(frozen=True)
class Settings:
    config_file: Path
    variable: str = "Path" if IS_WINDOWS else "PATH"
    scope: Scope = Scope.MACHINE if IS_WINDOWS else Scope.PROCESS
    list_delimiter: str = os.pathsep
    path_separator: str = os.sep
    case_sensitive: Optional[bool] = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = os.environ) -> "Settings":
        config_file = environ.get(ENV_CONFIG)
        settings = cls(config_file=Path(config_file) if config_file else default_config_file(environ))

        overrides = {}
        if environ.get(ENV_VARIABLE):
            overrides["variable"] = environ[ENV_VARIABLE]
        if environ.get(ENV_SCOPE):
            overrides["scope"] = Scope.parse(environ[ENV_SCOPE])
        if environ.get(ENV_CASE_SENSITIVE):
            overrides["case_sensitive"] = parse_bool(environ[ENV_CASE_SENSITIVE], ENV_CASE_SENSITIVE)
        return dataclasses.replace(settings, **overrides) if overrides else settings

    def with_overrides(self, config_file=None, variable=None, scope=None) -> "Settings":
        """Apply command line overrides; None leaves a field alone."""
        changes = {}
        if config_file:
            changes["config_file"] = Path(config_file)
        if variable:
            changes["variable"] = variable
        if scope:
            changes["scope"] = scope if isinstance(scope, Scope) else Scope.parse(scope)
        return dataclasses.replace(self, **changes)

    def codec(self) -> PathListCodec:
        return PathListCodec(self.list_delimiter, self.path_separator, self.case_sensitive)
