"""
Example 02: Effect of the parachute on a 10 km descent.

Runs scenario 1 twice, with and without the chute, records the per-step
telemetry and prints the descent rate at fixed altitudes.
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

import pandas as pd

from landersim import Lander, ParachuteStatus

CHECKPOINTS = [8000.0, 5000.0, 2000.0, 500.0]

def descent_profile(status):
    lander = Lander(record_history=True)
    lander.load_scenario(1)
    lander.parachute_status = status
    lander.run(duration=3600.0, log_interval=0)
    df = pd.DataFrame(lander.history)
    rates = {}
    for h in CHECKPOINTS:
        below = df[df["altitude"] <= h]
        if not below.empty:
            rates[h] = -below["climb_rate"].iloc[0]
    return rates

if __name__ == "__main__":
    closed = descent_profile(ParachuteStatus.NOT_DEPLOYED)
    opened = descent_profile(ParachuteStatus.DEPLOYED)
    print(f"{'altitude':>10} {'no chute':>10} {'chute':>10}")
    for h in CHECKPOINTS:
        print(f"{h:10.0f} {closed.get(h, float('nan')):10.2f} {opened.get(h, float('nan')):10.2f}")
