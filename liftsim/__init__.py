"""Elevator bank simulator: SCAN elevators, a greedy dispatcher and a tick-driven loop."""

__version__ = "0.1.0"
