"""
Live PATH-style variable access
- Stores: process environment (any OS), user / machine registry (Windows)
- EnvironmentPathSync: idempotent add / remove against the live list,
  writing back only when something actually changed
"""

import logging
import os
from typing import Iterable, List, MutableMapping, Optional

from pathgroups.codec import PathListCodec
from pathgroups.config import Scope, Settings
from pathgroups.errors import EnvironmentWriteError

log = logging.getLogger(__name__)


# ---- Stores -------------------------------------------------------------------

class ProcessEnvironmentStore:
    """Variable in a process environment mapping (os.environ by default)."""

    scope = Scope.PROCESS

    def __init__(self, variable: str, environ: Optional[MutableMapping[str, str]] = None):
        self.variable = variable
        self.environ = os.environ if environ is None else environ

    def read(self) -> str:
        return self.environ.get(self.variable, "")

    def write(self, value: str) -> None:
        try:
            if value:
                self.environ[self.variable] = value
            else:
                self.environ.pop(self.variable, None)
        except (OSError, ValueError) as ex:
            raise EnvironmentWriteError(self.variable, self.scope.value, str(ex)) from ex


# HKEY root names, looked up on winreg when a store is created
REGISTRY_KEYS = {
    Scope.USER: ("HKEY_CURRENT_USER", r"Environment"),
    Scope.MACHINE: ("HKEY_LOCAL_MACHINE", r"SYSTEM\CurrentControlSet\Control\Session Manager\Environment"),
}

HWND_BROADCAST = 0xFFFF
WM_SETTINGCHANGE = 0x001A
SMTO_ABORTIFHUNG = 0x0002
BROADCAST_TIMEOUT_MS = 5000


class WindowsRegistryStore:
    """User or machine environment variable kept in the Windows registry."""

    def __init__(self, variable: str, scope: Scope):
        if scope not in REGISTRY_KEYS:
            raise EnvironmentWriteError(variable, scope.value, "not a registry-backed scope")
        try:
            import winreg
        except ImportError:
            raise EnvironmentWriteError(
                variable, scope.value, "user/machine scope needs Windows; use the process scope here"
            ) from None
        self._winreg = winreg
        self.variable = variable
        self.scope = scope
        root_name, self.subkey = REGISTRY_KEYS[scope]
        self.root = getattr(winreg, root_name)

    def _read_with_type(self):
        winreg = self._winreg
        try:
            with winreg.OpenKey(self.root, self.subkey, 0, winreg.KEY_READ) as key:
                value, value_type = winreg.QueryValueEx(key, self.variable)
        except FileNotFoundError:
            return "", winreg.REG_EXPAND_SZ
        # Keep %VAR% references unexpanded on the way back in
        if value_type not in (winreg.REG_SZ, winreg.REG_EXPAND_SZ):
            value_type = winreg.REG_EXPAND_SZ
        return str(value or ""), value_type

    def read(self) -> str:
        return self._read_with_type()[0]

    def write(self, value: str) -> None:
        winreg = self._winreg
        try:
            _, value_type = self._read_with_type()
            with winreg.OpenKey(self.root, self.subkey, 0, winreg.KEY_SET_VALUE) as key:
                winreg.SetValueEx(key, self.variable, 0, value_type, value)
        except OSError as ex:
            raise EnvironmentWriteError(self.variable, self.scope.value, str(ex)) from ex
        self._broadcast()

    def _broadcast(self) -> None:
        """Tell running shells/explorer that the environment changed."""
        import ctypes
        from ctypes import wintypes

        result = wintypes.DWORD()
        ok = ctypes.windll.user32.SendMessageTimeoutW(
            HWND_BROADCAST, WM_SETTINGCHANGE, 0, "Environment",
            SMTO_ABORTIFHUNG, BROADCAST_TIMEOUT_MS, ctypes.byref(result),
        )
        if not ok:
            log.warning("WM_SETTINGCHANGE broadcast timed out; new processes may need a re-login")


def open_store(settings: Settings, environ: Optional[MutableMapping[str, str]] = None):
    if settings.scope == Scope.PROCESS:
        return ProcessEnvironmentStore(settings.variable, environ)
    return WindowsRegistryStore(settings.variable, settings.scope)


# ---- Sync -----------------------------------------------------------------------

class EnvironmentPathSync:
    def __init__(self, store, codec: Optional[PathListCodec] = None):
        self.store = store
        self.codec = codec or PathListCodec()

    @property
    def variable(self) -> str:
        return self.store.variable

    def read_current(self) -> List[str]:
        return [self.codec.normalize(p) for p in self.codec.decode(self.store.read())]

    def contains(self, path: str) -> bool:
        key = self.codec.key(path)
        return any(self.codec.key(p) == key for p in self.read_current())

    def add_paths(self, paths: Iterable[str]) -> List[str]:
        """Append paths that are not present yet; returns what was appended."""
        current = self.read_current()
        seen = {self.codec.key(p) for p in current}
        added: List[str] = []
        for p in paths:
            norm = self.codec.normalize(p)
            k = self.codec.key(norm)
            if not norm or k in seen:
                continue
            seen.add(k)
            added.append(norm)

        if added:
            self.store.write(self.codec.encode(current + added))
            for p in added:
                log.info("Added %s to %s (%s)", p, self.variable, self.store.scope.value)
        return added

    def remove_paths(self, paths: Iterable[str]) -> List[str]:
        """Drop every entry matching one of paths; absent paths are ignored."""
        doomed = {self.codec.key(p) for p in paths}
        current = self.read_current()
        kept: List[str] = []
        removed: List[str] = []
        for p in current:
            (removed if self.codec.key(p) in doomed else kept).append(p)

        if removed:
            self.store.write(self.codec.encode(kept))
            for p in removed:
                log.info("Removed %s from %s (%s)", p, self.variable, self.store.scope.value)
        return removed
