"""Group level operations tying the registry to the live path variable."""

import logging
from typing import Iterable, List, MutableMapping, Optional, Tuple

from pathgroups.config import Settings
from pathgroups.environment import EnvironmentPathSync, open_store
from pathgroups.errors import PathGroupsError
from pathgroups.registry import PathEntry, PathRegistry

log = logging.getLogger(__name__)


class GroupOperations:
    def __init__(self, registry: PathRegistry, sync: EnvironmentPathSync):
        self.registry = registry
        self.sync = sync

    @classmethod
    def from_settings(cls, settings: Settings,
                      environ: Optional[MutableMapping[str, str]] = None) -> "GroupOperations":
        codec = settings.codec()
        registry = PathRegistry(settings.config_file, codec)
        sync = EnvironmentPathSync(open_store(settings, environ), codec)
        return cls(registry, sync)

    def add_to_path(self, path_group: str, new_path: str, add_to_system_path: bool = True) -> None:
        """Register new_path under path_group, adding it to the live variable first.

        A failed environment write leaves the registry untouched. A failed
        registry save after a successful environment write is not rolled back.
        """
        if add_to_system_path:
            self.sync.add_paths([new_path])
        try:
            self.registry.upsert(new_path, path_group)
        except PathGroupsError:
            if add_to_system_path:
                log.error("%s was updated but the registry was not; the two are now out of step",
                          self.sync.variable)
            raise

    def add_groups_to_path(self, path_groups: Optional[Iterable[str]] = None) -> List[str]:
        mapping = self.registry.load(strict=True)
        paths = self.registry.groups_of(mapping, path_groups)
        return self.sync.add_paths(sorted(paths))

    def remove_groups_from_path(self, path_groups: Optional[Iterable[str]] = None) -> List[str]:
        mapping = self.registry.load(strict=True)
        paths = self.registry.groups_of(mapping, path_groups)
        if not paths:
            return []
        return self.sync.remove_paths(paths)

    def list_groups(self) -> List[Tuple[PathEntry, bool]]:
        """Registered entries, each with whether it is in the live variable."""
        entries = self.registry.entries(self.registry.load())
        codec = self.sync.codec
        live = {codec.key(p) for p in self.sync.read_current()}
        return [(e, codec.key(e.path) in live) for e in entries]

    def remove_from_registry(self, path: str) -> bool:
        return self.registry.remove(path)
