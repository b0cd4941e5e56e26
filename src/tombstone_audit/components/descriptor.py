"""SSTable file name descriptor.

Parses data file names such as ``nb-1-big-Data.db`` (3.0+) or
``ks-tbl-jb-5-Data.db`` (legacy) to find the on-disk format version.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..core.errors import UnsupportedFormatError

# First "big" format version storing rows as first-class entries (3.0)
FIRST_ROWS_VERSION = "ma"
ROW_FORMATS = {"big", "bti"}


@dataclass(frozen=True)
class Descriptor:
    """Components of an SSTable file name."""

    directory: Path
    version: str
    generation: str
    format: str
    component: str
    keyspace: str | None = None
    table: str | None = None

    @classmethod
    def from_path(cls, path: str | Path) -> Descriptor:
        path = Path(path)
        parts = path.name.split("-")

        if len(parts) == 4:
            version, generation, fmt, component = parts
            return cls(path.parent, version, generation, fmt, component)

        if len(parts) == 5:
            keyspace, table, version, generation, component = parts
            return cls(path.parent, version, generation, "big", component, keyspace, table)

        raise UnsupportedFormatError(f"Not an SSTable file name: {path.name}")

    @property
    def stores_rows(self) -> bool:
        """Whether this version uses the rows-as-first-class layout."""
        if self.format == "bti":
            return True
        return self.format == "big" and self.version >= FIRST_ROWS_VERSION

    def check_supported(self) -> None:
        if self.format not in ROW_FORMATS:
            raise UnsupportedFormatError(f"Unknown SSTable format '{self.format}'")
        if not self.stores_rows:
            raise UnsupportedFormatError(
                f"pre-3.0 SSTable is not supported (version '{self.version}')"
            )
