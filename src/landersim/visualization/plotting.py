from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure
from mpl_toolkits.mplot3d import Axes3D  # noqa: F401  (registers 3D projection)

from landersim import constants as C
from landersim.utils.io import load_telemetry

REQUIRED_DESCENT_COLUMNS = ("t", "altitude", "climb_rate", "throttle")


def _finish(fig: Figure, save_path: str | Path | None, show: bool) -> Figure:
    fig.tight_layout()
    if save_path:
        Path(save_path).parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(save_path, dpi=150)
    if show:
        plt.show()
    return fig


def plot_descent(
    csv_path: str | Path,
    save_path: str | Path | None = None,
    show: bool = True,
    planet_radius: float = C.MARS_RADIUS,
) -> Figure:
    """
    Altitude, climb rate and throttle against time.

    Parameters
    ----------
    csv_path : str | Path
        Telemetry CSV from CSVLogger.
    save_path : str | Path | None
        If given, save the figure to this path (png/svg).
    show : bool
        Whether to call plt.show().
    planet_radius : float
        Used to derive altitude when the CSV only has positions.

    Returns
    -------
    fig : Figure
    """
    df = load_telemetry(csv_path)
    if "altitude" not in df.columns and {"p_x", "p_y", "p_z"} <= set(df.columns):
        df["altitude"] = np.linalg.norm(df[["p_x", "p_y", "p_z"]].to_numpy(), axis=1) - planet_radius
    missing = [c for c in REQUIRED_DESCENT_COLUMNS if c not in df.columns]
    if missing:
        raise KeyError(f"Columns {missing} not found in CSV.")

    fig, axes = plt.subplots(3, 1, figsize=(8, 8), sharex=True)
    axes[0].plot(df["t"], df["altitude"])
    axes[0].set_ylabel("altitude [m]")
    axes[1].plot(df["t"], df["climb_rate"])
    axes[1].axhline(0.0, color="k", lw=0.5)
    axes[1].set_ylabel("climb rate [m/s]")
    axes[2].plot(df["t"], df["throttle"], label="throttle")
    if "parachute" in df.columns:
        axes[2].plot(df["t"], df["parachute"], "--", label="parachute")
    if "fuel" in df.columns:
        axes[2].plot(df["t"], df["fuel"], ":", label="fuel")
    axes[2].set_ylim(-0.05, 1.05)
    axes[2].set_xlabel("t [s]")
    axes[2].legend(loc="best")
    for ax in axes:
        ax.grid(True, alpha=0.3)
    return _finish(fig, save_path, show)


def plot_altitude_vs_descent_rate(
    csv_path: str | Path,
    save_path: str | Path | None = None,
    show: bool = True,
) -> Figure:
    """Phase portrait used to tune control laws (descent rate vs altitude)."""
    df = load_telemetry(csv_path)
    fig, ax = plt.subplots(figsize=(6, 5))
    ax.plot(df["altitude"], -df["climb_rate"])
    ax.set_xlabel("altitude [m]")
    ax.set_ylabel("descent rate [m/s]")
    ax.grid(True, alpha=0.3)
    return _finish(fig, save_path, show)


def plot_trajectory_3d(
    csv_path: str | Path,
    save_path: str | Path | None = None,
    show: bool = True,
    planet_radius: float = C.MARS_RADIUS,
) -> Figure:
    """
    Planet-centred 3D trajectory with a wireframe planet for scale.

    Returns
    -------
    fig : Figure
    """
    df = load_telemetry(csv_path)
    for c in ("p_x", "p_y", "p_z"):
        if c not in df.columns:
            raise KeyError(f"Column '{c}' not found in CSV.")

    fig = plt.figure(figsize=(7, 7))
    ax = fig.add_subplot(111, projection="3d")
    ax.plot(df["p_x"], df["p_y"], df["p_z"], lw=1.5)

    u, v = np.mgrid[0:2 * np.pi:24j, 0:np.pi:12j]
    ax.plot_wireframe(
        planet_radius * np.cos(u) * np.sin(v),
        planet_radius * np.sin(u) * np.sin(v),
        planet_radius * np.cos(v),
        color="tab:red", alpha=0.2, lw=0.5,
    )
    ax.set_xlabel("x [m]")
    ax.set_ylabel("y [m]")
    ax.set_zlabel("z [m]")
    return _finish(fig, save_path, show)
