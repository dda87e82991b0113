from .controller import ElevatorController
from .factory import create_controller

__all__ = ["ElevatorController", "create_controller"]
