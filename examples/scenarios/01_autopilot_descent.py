"""
Example 01: Autopilot descent from 10 km using the Scenario API.

Runs scenario 1 with the gain-scheduled autopilot engaged and writes
telemetry and plots under ./output.
"""
import sys
from pathlib import Path

# Setup path for local development (not needed if installed via pip)
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from landersim.api.scenario import Scenario

def run_example():
    scenario = Scenario(1, name="01_autopilot_descent") \
        .use_preset("autopilot") \
        .enable_plotting(show=False) \
        .run(duration=1500.0, log_interval=50.0)

    lander = scenario.lander
    print(f"Simulation complete. Results saved to {lander.output_path}")
    if lander.landed:
        print(f"Touchdown at t={lander.t_touchdown:.1f}s, safe={lander.safe_landing}")

if __name__ == "__main__":
    run_example()
