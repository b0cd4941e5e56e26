"""Scanner backend built on Cassandra's ``sstabledump`` tool.

sstabledump prints an SSTable as one JSON array with an object per partition.
The array is streamed with ijson events so rows are decoded one at a time.
"""

from __future__ import annotations

import logging
import subprocess
import tempfile
from collections.abc import Iterable, Iterator
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import IO, Any

import ijson

from ..core.errors import ScannerError
from ..core.types import (
    EMPTY_LIVENESS,
    LIVE,
    Cell,
    ColumnDefinition,
    ComplexColumnData,
    DeletionTime,
    LivenessInfo,
    NO_DELETION_TIME,
    NO_TIMESTAMP,
    Partition,
    RangeMarker,
    Row,
    Unfiltered,
)
from .descriptor import Descriptor

logger = logging.getLogger(__name__)

ROW_TYPES = {"row", "static_block"}
MARKER_TYPES = {"range_tombstone_bound", "range_tombstone_boundary"}


def _epoch(value: Any, scale: int) -> int:
    """Convert a raw number or a formatted date from the dump to an integer."""
    if isinstance(value, (int, Decimal)) or str(value).lstrip("-").isdigit():
        return int(value)
    try:
        return int(datetime.fromisoformat(str(value)).timestamp() * scale)
    except ValueError as e:
        raise ScannerError(f"Unparseable time value in dump: {value!r}") from e


def decode_deletion(info: dict | None) -> DeletionTime:
    if not info:
        return LIVE
    marked = info.get("marked_deleted")
    local = info.get("local_delete_time")
    return DeletionTime(
        marked_for_delete_at=NO_TIMESTAMP if marked is None else _epoch(marked, 1_000_000),
        local_deletion_time=NO_DELETION_TIME if local is None else _epoch(local, 1),
    )


def decode_liveness(info: dict | None) -> LivenessInfo:
    if not info:
        return EMPTY_LIVENESS
    tstamp = info.get("tstamp")
    return LivenessInfo(
        timestamp=NO_TIMESTAMP if tstamp is None else _epoch(tstamp, 1_000_000),
        ttl=int(info.get("ttl", 0)),
    )


def _is_complex_deletion(cell: dict) -> bool:
    # Complex deletions are written as a bare {name, deletion_info} object
    info = cell.get("deletion_info")
    return (
        info is not None
        and "marked_deleted" in info
        and "path" not in cell
        and "value" not in cell
    )


def decode_row(obj: dict) -> Row:
    columns: dict[str, ColumnDefinition] = {}
    complex_data: dict[str, ComplexColumnData] = {}
    cells: list[Cell] = []

    for raw in obj.get("cells", []):
        name = raw["name"]

        if _is_complex_deletion(raw):
            column = ColumnDefinition(name, is_complex=True)
            columns[name] = column
            complex_data[name] = ComplexColumnData(column, decode_deletion(raw["deletion_info"]))
            continue

        path = tuple(raw.get("path", ()))
        if path:
            column = columns.setdefault(name, ColumnDefinition(name, is_complex=True))
            complex_data.setdefault(name, ComplexColumnData(column))
        else:
            columns.setdefault(name, ColumnDefinition(name))

        cells.append(
            Cell(
                column=name,
                is_tombstone="deletion_info" in raw,
                is_expiring="ttl" in raw,
                path=path,
            )
        )

    return Row(
        clustering=tuple(obj.get("clustering", ())),
        deletion=decode_deletion(obj.get("deletion_info")),
        liveness=decode_liveness(obj.get("liveness_info")),
        cells=tuple(cells),
        columns=tuple(columns.values()),
        complex_data=tuple(complex_data.values()),
    )


def decode_unfiltered(obj: dict) -> Unfiltered:
    kind = obj.get("type")
    if kind in ROW_TYPES:
        return decode_row(obj)
    if kind in MARKER_TYPES:
        bound = obj.get("start") or obj.get("end") or {}
        return RangeMarker(kind=kind, clustering=tuple(bound.get("clustering", ())))
    raise ScannerError(f"Unknown entry type in dump: {kind!r}")


def decode_partition(header: dict, entries: Iterable[Unfiltered] = ()) -> Partition:
    return Partition(
        key=tuple(header.get("key", ())),
        deletion=decode_deletion(header.get("deletion_info")),
        entries=entries,
    )


def _build(events: Iterator[tuple], event: str, value: Any) -> Any:
    """Assemble one JSON value whose first event has just been read."""
    builder = ijson.ObjectBuilder()
    builder.event(event, value)
    depth = 1 if event in ("start_map", "start_array") else 0
    while depth:
        try:
            _, event, value = next(events)
        except StopIteration:
            raise ScannerError("sstabledump output ended inside a value") from None
        builder.event(event, value)
        if event in ("start_map", "start_array"):
            depth += 1
        elif event in ("end_map", "end_array"):
            depth -= 1
    return builder.value


class DumpScanner:
    """Stream partitions from sstabledump JSON output.

    A partition is yielded as soon as its header has been parsed; its rows
    are decoded one at a time as the partition is iterated.

    Args:
        stream: Binary stream holding the JSON array
        source: Name used in error messages
        process: sstabledump child process writing to ``stream``, if any
        stderr: File capturing the child's stderr
    """

    def __init__(
        self,
        stream: IO[bytes],
        source: str = "<stream>",
        process: subprocess.Popen | None = None,
        stderr: IO[bytes] | None = None,
    ):
        self.source = source
        self._stream = stream
        self._process = process
        self._stderr = stderr

    def _events(self) -> Iterator[tuple]:
        try:
            yield from ijson.parse(self._stream)
        except ijson.JSONError as e:
            self._check_exit()
            raise ScannerError(f"Malformed sstabledump output for {self.source}: {e}") from e

    def _rows(self, events: Iterator[tuple]) -> Iterator[Unfiltered]:
        for prefix, event, value in events:
            if prefix == "item.rows" and event == "end_array":
                return
            if prefix == "item.rows.item":
                yield decode_unfiltered(_build(events, event, value))

    def __iter__(self) -> Iterator[Partition]:
        events = self._events()
        header: dict | None = None
        yielded = False

        for prefix, event, value in events:
            if prefix == "item" and event == "start_map":
                header, yielded = None, False
            elif prefix == "item.partition":
                header = _build(events, event, value)
            elif prefix == "item.rows" and event == "start_array":
                if header is None:
                    raise ScannerError(f"Rows before partition header in {self.source}")
                rows = self._rows(events)
                yielded = True
                yield decode_partition(header, rows)
                # Skip whatever the consumer left unread
                for _ in rows:
                    pass
            elif prefix == "item" and event == "end_map" and not yielded:
                yield decode_partition(header or {})

        self._check_exit()

    def _check_exit(self) -> None:
        if self._process is None:
            return
        returncode = self._process.wait()
        if returncode != 0:
            raise ScannerError(
                f"sstabledump exited with {returncode} for {self.source}: {self._read_stderr()}"
            )

    def _read_stderr(self) -> str:
        if self._stderr is None:
            return ""
        self._stderr.seek(0)
        return self._stderr.read().decode("utf-8", errors="replace").strip()

    def close(self) -> None:
        """Release the stream and reap the child process."""
        self._stream.close()
        if self._process is not None:
            if self._process.poll() is None:
                self._process.kill()
            self._process.wait()
            self._process = None
        if self._stderr is not None:
            self._stderr.close()
            self._stderr = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class SSTableDumpBackend:
    """Open scanners by running ``sstabledump`` on each data file.

    Args:
        command: sstabledump executable name or path
    """

    def __init__(self, command: str = "sstabledump"):
        self.command = command

    def open_scanner(self, data_file: Path) -> DumpScanner:
        Descriptor.from_path(data_file).check_supported()

        args = [self.command, str(data_file)]
        logger.debug(f"Running {' '.join(args)}")

        stderr = tempfile.TemporaryFile()
        try:
            process = subprocess.Popen(args, stdout=subprocess.PIPE, stderr=stderr)
        except OSError as e:
            stderr.close()
            raise ScannerError(f"Failed to run {self.command}: {e}") from e

        return DumpScanner(process.stdout, source=str(data_file), process=process, stderr=stderr)
