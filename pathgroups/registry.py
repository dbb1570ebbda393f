"""
Path group registry
- JSON file mapping normalized path -> group name
- Whole-file rewrite on every save (temp file + os.replace)
- Group resolution with all unknown names reported at once
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Dict, Iterable, List, Optional, Set, Union

from pathgroups.codec import PathListCodec
from pathgroups.errors import (
    ConfigNotFoundError,
    ConfigParseError,
    ConfigReadError,
    ConfigWriteError,
    UnknownGroupError,
)

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PathEntry:
    path: str
    group: str


class PathRegistry:
    def __init__(self, config_file: Union[str, Path], codec: Optional[PathListCodec] = None):
        self.config_file = Path(config_file)
        self.codec = codec or PathListCodec()

    # ---- Persistence ----------------------------------------------------------

    def load(self, strict: bool = False) -> Dict[str, str]:
        """Read the registry.

        A missing file is an empty registry, or ConfigNotFoundError when strict.
        Malformed content always raises ConfigParseError; other read failures
        raise ConfigReadError.
        """
        try:
            raw = self.config_file.read_bytes()
        except FileNotFoundError:
            if strict:
                raise ConfigNotFoundError(self.config_file) from None
            return {}
        except OSError as ex:
            log.debug("Reading registry %s failed: %s", self.config_file, ex)
            raise ConfigReadError(self.config_file, ex.strerror or str(ex)) from ex

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as ex:
            log.debug("Registry %s is not UTF-8: %s", self.config_file, ex)
            raise ConfigParseError(self.config_file, str(ex)) from ex

        if not text.strip():
            # A file truncated to nothing is still "no entries", not garbage
            return {}

        try:
            data = json.loads(text)
        except json.JSONDecodeError as ex:
            log.debug("Invalid JSON in %s: %s", self.config_file, ex)
            raise ConfigParseError(self.config_file, str(ex)) from ex

        return self._validate(data)

    def _validate(self, data) -> Dict[str, str]:
        if not isinstance(data, dict):
            reason = f"expected a JSON object, got {type(data).__name__}"
            log.debug("Invalid registry %s: %s", self.config_file, reason)
            raise ConfigParseError(self.config_file, reason)

        bad = [k for k, v in data.items() if not isinstance(v, str)]
        if bad:
            reason = "group names must be strings (bad entries: " + ", ".join(bad) + ")"
            log.debug("Invalid registry %s: %s", self.config_file, reason)
            raise ConfigParseError(self.config_file, reason)
        return dict(data)

    def save(self, mapping: Dict[str, str]) -> None:
        target = self.config_file
        tmp = None
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with NamedTemporaryFile("w", dir=str(target.parent), prefix=f".{target.name}.",
                                    suffix=".tmp", delete=False, encoding="utf-8") as tmp:
                json.dump(mapping, tmp, indent=2, sort_keys=True)
                tmp.write("\n")
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp.name, target)
        except OSError as ex:
            log.debug("Saving registry %s failed: %s", target, ex)
            if tmp is not None:
                try:
                    os.unlink(tmp.name)
                except FileNotFoundError:
                    pass
                except OSError as cleanup:
                    log.debug("Could not remove %s: %s", tmp.name, cleanup)
            raise ConfigWriteError(target, str(ex)) from ex
        log.info("Saved %d registry entr%s to %s", len(mapping), "y" if len(mapping) == 1 else "ies", target)

    # ---- Mutations ------------------------------------------------------------

    def upsert(self, path: str, group: str) -> str:
        """Register path under group (last write wins); returns the stored key."""
        norm = self.codec.normalize(path)
        key = self.codec.key(norm)
        mapping = self.load()

        for existing in [k for k in mapping if self.codec.key(k) == key]:
            del mapping[existing]
        mapping[norm] = group

        self.save(mapping)
        log.info("Registered %s in group '%s'", norm, group)
        return norm

    def remove(self, path: str) -> bool:
        key = self.codec.key(path)
        mapping = self.load()
        matches = [k for k in mapping if self.codec.key(k) == key]
        if not matches:
            return False
        for k in matches:
            log.info("Unregistered %s (group '%s')", k, mapping.pop(k))
        self.save(mapping)
        return True

    # ---- Queries --------------------------------------------------------------

    def groups_of(self, mapping: Dict[str, str], group_names: Optional[Iterable[str]] = None) -> Set[str]:
        """Paths belonging to any of group_names; every path when none are given."""
        names = list(dict.fromkeys(group_names or ()))
        if not names:
            return set(mapping)

        wanted = set(names)
        found = {p for p, g in mapping.items() if g in wanted}
        present = set(mapping.values())
        missing = [n for n in names if n not in present]
        if missing:
            raise UnknownGroupError(missing)
        return found

    @staticmethod
    def entries(mapping: Dict[str, str]) -> List[PathEntry]:
        return [PathEntry(p, g) for p, g in sorted(mapping.items(), key=lambda kv: (kv[1], kv[0]))]
