"""
CSV telemetry logging for lander runs.

Buffers rows in memory and writes in batches to minimize I/O overhead.
Implements context manager protocol for safe resource handling.
"""
from __future__ import annotations

import csv
from pathlib import Path
from typing import Any, TextIO

FIELD_COLUMNS = {
    "p": ["p_x", "p_y", "p_z"],
    "v": ["v_x", "v_y", "v_z"],
    "altitude": ["altitude"],
    "climb_rate": ["climb_rate"],
    "throttle": ["throttle"],
    "fuel": ["fuel"],
    "parachute": ["parachute"],
}
DEFAULT_FIELDS = list(FIELD_COLUMNS)


def field_values(lander: Any, field: str) -> list[float]:
    """Values of one telemetry field, in ``FIELD_COLUMNS`` order."""
    if field == "p":
        return [float(x) for x in lander.state.position]
    if field == "v":
        return [float(x) for x in lander.state.velocity]
    if field == "altitude":
        return [lander.altitude]
    if field == "climb_rate":
        return [lander.climb_rate]
    if field == "throttle":
        return [lander.throttle]
    if field == "fuel":
        return [lander.fuel]
    return [1.0 if lander.parachute_deployed else 0.0]


def telemetry_row(lander: Any, fields: list[str] | None = None) -> dict[str, float]:
    """
    One telemetry sample keyed by CSV column name.

    Same columns as the CSVLogger header, so a list of rows saved with
    ``save_simulation_history`` reads back like a logged run.
    """
    row = {"t": float(lander.t)}
    for field in fields if fields is not None else DEFAULT_FIELDS:
        row.update(zip(FIELD_COLUMNS[field], field_values(lander, field)))
    return row


class CSVLogger:
    """
    Buffered CSV logger for lander telemetry.

    Parameters
    ----------
    filepath : str | Path
        Output CSV file path
    buffer_size : int
        Number of rows to buffer before writing. Higher = fewer writes but more memory.
    fields : list[str] | None
        Fields to log. Default: all of ``FIELD_COLUMNS``
        ("p", "v", "altitude", "climb_rate", "throttle", "fuel", "parachute").

    Notes
    -----
    The first column is always simulation time ``t``. The ``parachute``
    column is 1 when deployed, 0 otherwise.

    1. Context manager (recommended):
    >>> with CSVLogger("output.csv") as logger:
    ...     while not lander.step():
    ...         logger.log(lander)

    2. Auto-managed (via Lander):
    >>> lander = Lander.with_logging("descent")
    >>> lander.run(duration=600.0)
    """

    def __init__(
        self,
        filepath: str | Path,
        buffer_size: int = 1000,
        fields: list[str] | None = None
    ) -> None:
        self.filepath = Path(filepath)
        self.buffer_size = buffer_size
        self.fields = fields if fields is not None else list(DEFAULT_FIELDS)

        invalid = set(self.fields) - set(FIELD_COLUMNS)
        if invalid:
            raise ValueError(
                f"Invalid fields: {invalid}. Valid options: {set(FIELD_COLUMNS)}"
            )

        self._buffer: list[list[str]] = []
        self._file: TextIO | None = None
        self._writer: Any = None  # csv.writer is a function, not a type
        self._header_written = False

        self.filepath.parent.mkdir(parents=True, exist_ok=True)

    def __enter__(self) -> CSVLogger:
        """Open file for writing."""
        self._file = open(self.filepath, "w", newline="", encoding="utf-8")
        self._writer = csv.writer(self._file)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Close file, flushing any remaining data."""
        self.close()

    @property
    def header(self) -> list[str]:
        hdr = ["t"]
        for field in self.fields:
            hdr.extend(FIELD_COLUMNS[field])
        return hdr

    def _write_header(self) -> None:
        if self._writer:
            self._writer.writerow(self.header)
            if self._file:
                self._file.flush()  # Ensure header written immediately
        self._header_written = True

    def log(self, lander: Any) -> None:
        """
        Log current lander state to buffer.

        Automatically opens file on first call if not using context manager.
        Writes to disk when buffer is full.
        """
        if self._file is None:
            self.__enter__()

        if not self._header_written:
            self._write_header()

        row = [f"{lander.t:.10f}"]
        for field in self.fields:
            row.extend(f"{v:.10e}" for v in field_values(lander, field))

        self._buffer.append(row)

        if len(self._buffer) >= self.buffer_size:
            self.flush()

    def flush(self) -> None:
        """Write buffered data to disk and clear buffer."""
        if self._writer and self._buffer:
            self._writer.writerows(self._buffer)
            if self._file:
                self._file.flush()
            self._buffer.clear()

    def close(self) -> None:
        """Flush remaining data and close file."""
        self.flush()
        if self._file:
            self._file.close()
            self._file = None
            self._writer = None
