"""
Tests for the telemetry IO and plotting helpers.
"""
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import pytest

from landersim import constants as C
from landersim.utils.io import load_telemetry, save_simulation_history
from landersim.visualization import plotting


@pytest.fixture
def telemetry_csv(tmp_path):
    """Synthetic descent telemetry."""
    t = np.linspace(0.0, 100.0, 101)
    h = 10000.0 - 90.0 * t
    history = [
        {
            "t": ti,
            "p_x": 0.0,
            "p_y": -(C.MARS_RADIUS + hi),
            "p_z": 0.0,
            "altitude": hi,
            "climb_rate": -90.0,
            "throttle": 0.5 if hi < 4000.0 else 0.0,
            "fuel": 1.0,
            "parachute": 0.0,
        }
        for ti, hi in zip(t, h)
    ]
    path = tmp_path / "logs" / "simulation.csv"
    save_simulation_history(history, str(path))
    return path


def test_save_and_load_round_trip(telemetry_csv):
    df = load_telemetry(telemetry_csv)
    assert isinstance(df, pd.DataFrame)
    assert len(df) == 101
    assert df["altitude"].iloc[0] == pytest.approx(10000.0)


def test_save_empty_history_fails(tmp_path):
    with pytest.raises(ValueError, match="empty"):
        save_simulation_history([], str(tmp_path / "x.csv"))


def test_load_requires_time_column(tmp_path):
    path = tmp_path / "bad.csv"
    pd.DataFrame({"x": [1, 2]}).to_csv(path, index=False)
    with pytest.raises(ValueError, match="'t'"):
        load_telemetry(path)


def test_plot_descent_saves(telemetry_csv, tmp_path):
    out = tmp_path / "plots" / "descent.png"
    fig = plotting.plot_descent(telemetry_csv, save_path=out, show=False)
    assert out.exists()
    assert len(fig.axes) == 3
    plt.close(fig)


def test_plot_descent_derives_altitude(tmp_path):
    path = tmp_path / "positions.csv"
    pd.DataFrame({
        "t": [0.0, 1.0],
        "p_x": [0.0, 0.0],
        "p_y": [0.0, 0.0],
        "p_z": [C.MARS_RADIUS + 100.0, C.MARS_RADIUS + 90.0],
        "climb_rate": [-10.0, -10.0],
        "throttle": [0.0, 0.0],
    }).to_csv(path, index=False)
    fig = plotting.plot_descent(path, show=False)
    line = fig.axes[0].get_lines()[0]
    assert np.allclose(line.get_ydata(), [100.0, 90.0])
    plt.close(fig)


def test_plot_descent_missing_columns(tmp_path):
    path = tmp_path / "bad.csv"
    pd.DataFrame({"t": [0.0], "throttle": [0.0]}).to_csv(path, index=False)
    with pytest.raises(KeyError):
        plotting.plot_descent(path, show=False)


def test_plot_trajectory_3d(telemetry_csv, tmp_path):
    out = tmp_path / "traj.png"
    fig = plotting.plot_trajectory_3d(telemetry_csv, save_path=out, show=False)
    assert out.exists()
    plt.close(fig)


def test_phase_portrait(telemetry_csv):
    fig = plotting.plot_altitude_vs_descent_rate(telemetry_csv, show=False)
    assert fig.axes[0].get_xlabel() == "altitude [m]"
    plt.close(fig)
