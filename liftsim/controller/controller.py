"""
Elevator Controller Service

This service owns the elevator fleet and the tracked requests and drives
the simulation: each iteration it drains the request stream, assigns
pending requests through the dispatcher, and advances every elevator by
one tick.
"""

import asyncio
from typing import Callable, List, Optional

import structlog

from liftsim.config.settings import DEFAULT_ELEVATORS_QUANTITY, ElevatorSettings
from liftsim.libs.messaging.request_stream import RequestStreamClient
from liftsim.models.elevator import Elevator
from liftsim.models.request import Direction, Request
from liftsim.scheduler.dispatcher import Dispatcher
from liftsim.services.request_source import RandomRequestSource

logger = structlog.get_logger(__name__)

ELEVATORS_QUANTITY_KEY = "elevatorsQuantity"


class ElevatorController:
    """
    Simulation loop of the elevator system.

    This service:
    1. Builds the fleet from the settings
    2. Consumes new requests from the request stream
    3. Commits the dispatcher's assignments as elevator stops
    4. Ticks every elevator and reports its status line
    """

    def __init__(
        self,
        settings: ElevatorSettings,
        request_stream: RequestStreamClient,
        request_source: Optional[RandomRequestSource] = None,
        reporter: Optional[Callable[[str], None]] = None,
    ):
        """
        Initialize the controller.

        Args:
            settings: Simulator settings
            request_stream: Stream new requests are read from
            request_source: Producer used for manual submissions
            reporter: Optional sink receiving every elevator status line
        """
        self.settings = settings
        self.request_stream = request_stream
        self.request_source = request_source
        self.reporter = reporter
        self.elevators: List[Elevator] = []
        self.dispatcher = Dispatcher(self.elevators)
        self._next_elevator_id = 1

        self.elevators_quantity = settings.elevators_quantity
        if self.elevators_quantity == 0:
            self.elevators_quantity = DEFAULT_ELEVATORS_QUANTITY
            logger.warning(
                "configuration_default_used",
                key=ELEVATORS_QUANTITY_KEY,
                value=DEFAULT_ELEVATORS_QUANTITY,
            )

    @property
    def tick_interval(self) -> float:
        """Delay between loop iterations in seconds."""
        return self.settings.tick_interval_ms / 1000

    def add_elevator(self) -> Elevator:
        """Create an elevator with the next sequential id and add it to the fleet."""
        elevator = Elevator(
            self._next_elevator_id,
            min_floor=self.settings.min_floor,
            max_floor=self.settings.max_floor,
        )
        self._next_elevator_id += 1
        self.elevators.append(elevator)
        logger.info("elevator_created", elevator_id=elevator.id)
        return elevator

    def initialize_elevators(self) -> None:
        """Create the configured number of elevators. A negative quantity creates none."""
        for _ in range(max(self.elevators_quantity, 0)):
            self.add_elevator()

    async def submit_manual_request(
        self,
        source_floor: int,
        destination_floor: int,
        request_id: str = "manual",
    ) -> Request:
        """
        Build a request and submit it through the request stream.

        Raises:
            ValidationError: If a floor is out of range
        """
        request = Request(
            request_id,
            source_floor,
            destination_floor,
            min_floor=self.settings.min_floor,
            max_floor=self.settings.max_floor,
        )
        if self.request_source is not None:
            await self.request_source.submit_manual_request(request)
        else:
            await self.request_stream.publish(request)
        return request

    def _in_building(self, request: Request) -> bool:
        low, high = self.settings.min_floor, self.settings.max_floor
        return all(
            low <= floor <= high
            for floor in (request.source_floor, request.destination_floor)
        )

    async def ingest(self) -> List[Request]:
        """
        Move every request published since the last iteration into the dispatcher.

        Requests built against another floor range (e.g. by an external
        producer) are dropped when a floor lies outside this building.

        Returns:
            The requests handed to the dispatcher
        """
        accepted = []
        for request in await self.request_stream.read():
            if not self._in_building(request):
                logger.warning(
                    "request_rejected",
                    request_id=request.id,
                    source_floor=request.source_floor,
                    destination_floor=request.destination_floor,
                    min_floor=self.settings.min_floor,
                    max_floor=self.settings.max_floor,
                )
                continue

            logger.info(
                "request_received",
                request_id=request.id,
                source_floor=request.source_floor,
                destination_floor=request.destination_floor,
            )
            self.dispatcher.add_request(request)
            accepted.append(request)
        return accepted

    def assign_pending_requests(self) -> None:
        """Assign every pending request; unassignable ones stay pending."""
        for request in self.dispatcher.pending_requests():
            elevator = self.dispatcher.assign_elevator(request)
            if elevator is None:
                logger.debug("no_elevator_available", request_id=request.id)
                continue

            request.mark_assigned()
            logger.info(
                "request_assigned",
                request_id=request.id,
                elevator_id=elevator.id,
                source_floor=request.source_floor,
                destination_floor=request.destination_floor,
            )

            if request.source_floor == request.destination_floor:
                logger.info(
                    "request_completed_immediately",
                    request_id=request.id,
                    floor=request.source_floor,
                )
                continue

            elevator.add_stop(request.source_floor)
            elevator.add_stop(
                request.destination_floor,
                Direction.DOWN
                if request.destination_floor < request.source_floor
                else Direction.UP,
            )

    def tick_elevators(self) -> List[str]:
        """Advance every elevator by one tick and report its status."""
        lines = []
        for elevator in self.elevators:
            elevator.tick()
            line = elevator.get_status()
            lines.append(line)
            logger.info("elevator_status", elevator_id=elevator.id, status=line)
            if self.reporter is not None:
                self.reporter(line)
        return lines

    async def step(self) -> List[str]:
        """Run a single iteration of the simulation loop."""
        await self.ingest()
        self.assign_pending_requests()
        return self.tick_elevators()

    async def run(self, stop_event: asyncio.Event) -> None:
        """
        Run the simulation loop until ``stop_event`` is set.

        An iteration always completes before the stop event is honoured. A
        failing iteration is logged and the loop carries on with the next one.
        """
        logger.info("simulation_started", elevators=len(self.elevators))
        while not stop_event.is_set():
            try:
                await self.step()
            except Exception as e:
                logger.error("simulation_iteration_failed", error=str(e), exc_info=True)

            try:
                await asyncio.wait_for(stop_event.wait(), timeout=self.tick_interval)
            except asyncio.TimeoutError:
                pass
        logger.info("simulation_stopped")

    def statuses(self) -> List[dict]:
        """Snapshot of every elevator."""
        return [elevator.to_dict() for elevator in self.elevators]
