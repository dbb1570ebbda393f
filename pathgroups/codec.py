"""
Path list codec
- Split / join delimiter-separated path lists (PATH style)
- Normalize slashes to the platform separator
- Comparison keys honoring the case policy of the target platform
"""

import os
from typing import Iterable, List, Optional


# ---- Platform presets ---------------------------------------------------------

PLATFORMS = {
    # name: (list delimiter, path separator, case sensitive)
    "windows": (";", "\\", False),
    "posix": (":", "/", True),
}


class PathListCodec:
    def __init__(self, delimiter: str = os.pathsep, separator: str = os.sep,
                 case_sensitive: Optional[bool] = None):
        self.delimiter = delimiter
        self.separator = separator
        # Backslash separators mean Windows path semantics unless told otherwise
        if case_sensitive is None:
            case_sensitive = separator != "\\"
        self.case_sensitive = case_sensitive

    @classmethod
    def for_platform(cls, name: str) -> "PathListCodec":
        delimiter, separator, case_sensitive = PLATFORMS[name]
        return cls(delimiter, separator, case_sensitive)

    def decode(self, raw: Optional[str]) -> List[str]:
        """Split a raw list into entries; empty entries are dropped."""
        if not raw:
            return []
        return [p for p in raw.split(self.delimiter) if p]

    def normalize(self, path: str) -> str:
        return path.replace("/", self.separator)

    def encode(self, paths: Iterable[str]) -> str:
        return self.delimiter.join(paths)

    def key(self, path: str) -> str:
        """Value used for every equality check between two paths."""
        norm = self.normalize(path)
        return norm if self.case_sensitive else norm.casefold()

    def __repr__(self) -> str:
        return (f"PathListCodec(delimiter={self.delimiter!r}, separator={self.separator!r}, "
                f"case_sensitive={self.case_sensitive!r})")
