"""Telemetry tables on disk (pandas)."""
from __future__ import annotations

from pathlib import Path

import pandas as pd


def save_simulation_history(history: list[dict[str, float]], filepath: str | Path) -> Path:
    """
    Write in-memory telemetry rows to a CSV file.

    Args:
        history: Rows from ``telemetry_row``, e.g. [{'t': 0.1, 'altitude': 9999.9, ...}, ...]
        filepath: Destination path (e.g. 'output/descent/history.csv')

    Returns:
        The path written.

    Raises:
        ValueError: if ``history`` is empty.
    """
    if not history:
        raise ValueError("Simulation history is empty. Nothing to save.")

    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)

    pd.DataFrame(history).to_csv(path, index=False)
    print(f"[Lander] History saved to {path.absolute()}")
    return path


def load_telemetry(filepath: str | Path) -> pd.DataFrame:
    """
    Load a telemetry CSV written by CSVLogger or save_simulation_history.

    Raises:
        ValueError: if the file has no time column 't'.
    """
    df = pd.read_csv(filepath)
    if "t" not in df.columns:
        raise ValueError(f"Telemetry file {filepath} has no 't' column.")
    return df
