# liftsim/app/main.py
import asyncio
import uuid
from contextlib import asynccontextmanager

import structlog
from fastapi import Depends, FastAPI, HTTPException, Request
from pydantic import BaseModel, ConfigDict, Field

from liftsim.config import configure_logging, load_settings
from liftsim.controller.controller import ElevatorController
from liftsim.controller.factory import create_controller
from liftsim.exceptions import ValidationError

logger = structlog.get_logger(__name__)


# --- Startup and shutdown events ---
@asynccontextmanager
async def lifespan(app: FastAPI):  # pylint: disable=redefined-outer-name
    """Build the controller and run the simulation loop in the background."""
    configure_logging()
    settings = load_settings()
    controller = await create_controller(settings)
    stop_event = asyncio.Event()

    if controller.request_source is not None:
        controller.request_source.start()
    loop_task = asyncio.create_task(controller.run(stop_event))
    app.state.controller = controller
    logger.info("application_started")
    try:
        yield
    finally:
        stop_event.set()
        await loop_task
        if controller.request_source is not None:
            await controller.request_source.stop()
        await controller.request_stream.close()
        logger.info("application_shutdown_complete")


app = FastAPI(title="Elevator Simulation", lifespan=lifespan)


def get_controller(request: Request) -> ElevatorController:
    """Controller of the running simulation."""
    return request.app.state.controller


class RequestModel(BaseModel):
    """Model for a manually submitted pick-up/drop-off request."""

    source_floor: int = Field(..., description="Floor where the passenger is picked up")
    destination_floor: int = Field(..., description="Floor where the passenger is dropped off")

    model_config = ConfigDict(
        json_schema_extra={"example": {"source_floor": 1, "destination_floor": 5}}
    )


@app.post("/api/requests", status_code=202)
async def create_request(
    req: RequestModel, controller: ElevatorController = Depends(get_controller)
):
    """Submit a request to the simulation."""
    try:
        request = await controller.submit_manual_request(
            req.source_floor, req.destination_floor, request_id=str(uuid.uuid4())
        )
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    logger.info("request_queued", request_id=request.id)
    return {"status": "queued", "request": request.to_dict()}


@app.get("/api/elevators", status_code=200)
async def get_elevators(controller: ElevatorController = Depends(get_controller)):
    """Get current status of all elevators."""
    return {"elevators": controller.statuses()}


@app.get("/api/requests", status_code=200)
async def get_requests(controller: ElevatorController = Depends(get_controller)):
    """Every request tracked by the dispatcher."""
    return {
        "requests": [request.to_dict() for request in controller.dispatcher.requests],
        "has_pending": controller.dispatcher.has_pending_requests(),
    }
