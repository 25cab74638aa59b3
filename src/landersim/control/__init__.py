from .autopilot import (
    CONTROLLERS,
    Controller,
    GainScheduledAutopilot,
    NoAutopilot,
    ProportionalAutopilot,
    make_controller,
)
