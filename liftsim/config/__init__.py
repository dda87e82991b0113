from liftsim.channels import ELEVATOR_REQUESTS_STREAM

from .logging import configure_logging
from .settings import DEFAULT_ELEVATORS_QUANTITY, ElevatorSettings, load_settings

__all__ = [
    "ELEVATOR_REQUESTS_STREAM",
    "DEFAULT_ELEVATORS_QUANTITY",
    "ElevatorSettings",
    "configure_logging",
    "load_settings",
]
