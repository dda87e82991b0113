"""
Simulator settings.

Settings are read, lowest precedence first, from the model defaults, an
optional JSON settings file and environment variables (a ``.env`` file is
loaded with python-dotenv).
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError, model_validator

from liftsim.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_ELEVATORS_QUANTITY = 4
DEFAULT_SETTINGS_FILE = "appsettings.json"

# environment variable -> settings key
ENV_OVERRIDES = {
    "ELEVATORS_QUANTITY": "elevatorsQuantity",
    "MIN_FLOOR": "minFloor",
    "MAX_FLOOR": "maxFloor",
    "REQUEST_INTERVAL_MS": "requestIntervalMs",
    "TICK_INTERVAL_MS": "tickIntervalMs",
    "REQUEST_STREAM": "requestStream",
    "REDIS_HOST": "redisHost",
    "REDIS_PORT": "redisPort",
    "REDIS_DB": "redisDb",
}


class ElevatorSettings(BaseModel):
    """Settings of the elevator system."""

    elevators_quantity: int = Field(
        0,
        alias="elevatorsQuantity",
        description="Fleet size, 0 means unset and falls back to the default",
    )
    min_floor: int = Field(1, alias="minFloor")
    max_floor: int = Field(10, alias="maxFloor")
    request_interval_ms: int = Field(
        5000, alias="requestIntervalMs", gt=0, description="Random request cadence"
    )
    tick_interval_ms: int = Field(
        4000, alias="tickIntervalMs", ge=0, description="Delay between loop iterations"
    )
    request_stream: str = Field("memory", alias="requestStream", pattern="^(memory|redis)$")
    redis_host: str = Field("localhost", alias="redisHost")
    redis_port: int = Field(6379, alias="redisPort", gt=0, le=65535)
    redis_db: int = Field(0, alias="redisDb", ge=0)

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def flatten_request_service(cls, data: Any) -> Any:
        """Accept ``randomRequestService.intervalMilliseconds`` as the request cadence."""
        if isinstance(data, dict):
            section = data.get("randomRequestService")
            if isinstance(section, dict) and "intervalMilliseconds" in section:
                data = dict(data)
                data.setdefault("requestIntervalMs", section["intervalMilliseconds"])
        return data

    @model_validator(mode="after")
    def check_floor_range(self) -> "ElevatorSettings":
        if self.min_floor > self.max_floor:
            raise ValueError(
                f"minFloor ({self.min_floor}) must not be greater than maxFloor ({self.max_floor})"
            )
        return self


def _read_settings_file(path: Path) -> Dict[str, Any]:
    try:
        with path.open(encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot read settings file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Settings file {path} must contain a JSON object")
    return data


def load_settings(path: Optional[Union[str, Path]] = None) -> ElevatorSettings:
    """
    Load the simulator settings.

    Args:
        path: JSON settings file. Defaults to ``LIFTSIM_SETTINGS_FILE`` or
            ``appsettings.json`` in the working directory; a missing default
            file is skipped, a missing explicit file is an error.

    Returns:
        The validated settings

    Raises:
        ConfigurationError: If the file cannot be read or a value is invalid
    """
    load_dotenv()

    explicit = path is not None or "LIFTSIM_SETTINGS_FILE" in os.environ
    settings_path = Path(path or os.getenv("LIFTSIM_SETTINGS_FILE", DEFAULT_SETTINGS_FILE))

    data: Dict[str, Any] = {}
    if settings_path.exists() or explicit:
        data.update(_read_settings_file(settings_path))
        logger.info("Loaded settings file %s", settings_path)

    for env_name, key in ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value is not None:
            data[key] = value

    try:
        return ElevatorSettings.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid settings: {e}") from e
