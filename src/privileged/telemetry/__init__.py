"""Telemetry - structured decision logs.

Import directly from submodules:
    from privileged.telemetry.decision_logger import DecisionEventLogger
"""

__all__: list[str] = []  # Direct submodule imports required (see docstring)
