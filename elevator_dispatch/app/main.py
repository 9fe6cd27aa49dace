# elevator_dispatch/app/main.py
import json
import logging
from contextlib import asynccontextmanager
from typing import List

from fastapi import FastAPI, Request, WebSocket, WebSocketDisconnect
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from elevator_dispatch import config
from elevator_dispatch.exceptions import ElevatorNotFoundError, FleetError, InvalidFloorError
from elevator_dispatch.models.request import Assignment, AssignmentOutcome
from elevator_dispatch.services.factory import create_fleet_service
from elevator_dispatch.services.ticker import Ticker

from .connections import ConnectionManager

logger = logging.getLogger(__name__)

connections = ConnectionManager()
fleet_service = create_fleet_service(websocket_sink=connections)


# --- Startup and shutdown events ---
@asynccontextmanager
async def lifespan(app: FastAPI):  # pylint: disable=redefined-outer-name
    """Build the fleet from config and run the ticker while the app is up."""
    config.configure_logging()
    logger.info("Application starting up")

    await fleet_service.initialize_fleet(
        config.NUM_FLOORS, config.NUM_ELEVATORS, config.START_POSITIONS
    )
    ticker = Ticker(fleet_service, config.TICK_INTERVAL)
    ticker.start()
    try:
        yield
    finally:
        logger.info("Shutting down application, cleaning up resources")
        await ticker.stop()
        await fleet_service.close()
        logger.info("Application shutdown complete")


app = FastAPI(title="Elevator Dispatch", lifespan=lifespan)


@app.exception_handler(InvalidFloorError)
async def invalid_floor_handler(request: Request, exc: InvalidFloorError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(ElevatorNotFoundError)
async def elevator_not_found_handler(request: Request, exc: ElevatorNotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


def check_start_positions(positions: List[int], total_floors: int) -> None:
    for floor in positions:
        if floor < 0 or floor > total_floors:
            raise ValueError(f"start position {floor} is outside 0..{total_floors}")


class FleetConfigModel(BaseModel):
    """Model for (re)building the fleet."""

    total_floors: int = Field(..., ge=0, description="Highest floor number")
    number_of_elevators: int = Field(..., ge=0, description="Number of elevators")
    positions: List[int] = Field(
        default_factory=list, description="Starting floor per elevator, 0 if missing"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"total_floors": 10, "number_of_elevators": 2, "positions": [0, 5]}
        }
    )

    @model_validator(mode="after")
    def check_positions(self) -> "FleetConfigModel":
        check_start_positions(self.positions, self.total_floors)
        return self


class ExternalRequestModel(BaseModel):
    """Model for hall calls (floor call buttons)."""

    floor: int = Field(..., ge=0, description="Floor number where the button was pressed")

    model_config = ConfigDict(json_schema_extra={"example": {"floor": 7}})


class InternalRequestModel(BaseModel):
    """Model for panel calls (destination buttons)."""

    elevator_id: int = Field(..., ge=0, description="ID of the elevator")
    destination_floor: int = Field(..., ge=0, description="Target floor")

    model_config = ConfigDict(
        json_schema_extra={"example": {"elevator_id": 1, "destination_floor": 5}}
    )


# WebSocket payloads use the browser client's camelCase names
class InitialDataMessage(BaseModel):
    total_floors: int = Field(..., ge=0, alias="totalFloors")
    number_of_elevators: int = Field(..., ge=0, alias="numberOfElevators")
    positions: List[int] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_positions(self) -> "InitialDataMessage":
        check_start_positions(self.positions, self.total_floors)
        return self


class CallElevatorMessage(BaseModel):
    floor: int = Field(..., ge=0)


class PanelCallMessage(BaseModel):
    elevator_id: int = Field(..., ge=0, alias="elevatorId")
    floor: int = Field(..., ge=0)


def assignment_response(assignment: Assignment) -> dict:
    return {"status": assignment.outcome.value, **assignment.to_dict()}


@app.post("/api/fleet", status_code=201)
async def initialize_fleet(req: FleetConfigModel):
    elevators = await fleet_service.initialize_fleet(
        req.total_floors, req.number_of_elevators, req.positions
    )
    return {"number_of_floors": req.total_floors, "elevators": elevators}


@app.post("/api/requests/external", status_code=202)
async def create_external_request(req: ExternalRequestModel):
    assignment = await fleet_service.assign_hall_call(req.floor)
    if assignment.outcome == AssignmentOutcome.NO_ELEVATOR:
        return JSONResponse(
            status_code=503, content={"detail": "no elevator available"}
        )
    return assignment_response(assignment)


@app.post("/api/requests/internal", status_code=202)
async def create_internal_request(req: InternalRequestModel):
    assignment = await fleet_service.assign_panel_call(
        req.elevator_id, req.destination_floor
    )
    if assignment.outcome == AssignmentOutcome.NOT_FOUND:
        raise ElevatorNotFoundError(req.elevator_id)
    return assignment_response(assignment)


@app.get("/api/elevators", status_code=200)
async def get_elevators():
    """Get current state of all elevators."""
    return await fleet_service.snapshot()


@app.post("/api/tick", status_code=200)
async def run_tick():
    """Advance the simulation by one step right away."""
    events = await fleet_service.tick()
    return {"events": [event.to_message() for event in events]}


async def handle_socket_message(websocket: WebSocket, message: dict) -> None:
    event = message.get("event")
    data = message.get("data") or {}
    logger.info("received_socket_message: event=%s", event)

    if event == "initial-data":
        req = InitialDataMessage.model_validate(data)
        await fleet_service.initialize_fleet(
            req.total_floors, req.number_of_elevators, req.positions
        )
    elif event == "call-elevator":
        req = CallElevatorMessage.model_validate(data)
        await fleet_service.assign_hall_call(req.floor)
    elif event == "panel-call":
        req = PanelCallMessage.model_validate(data)
        assignment = await fleet_service.assign_panel_call(req.elevator_id, req.floor)
        if assignment.outcome == AssignmentOutcome.NOT_FOUND:
            raise ElevatorNotFoundError(req.elevator_id)
    else:
        await connections.send(
            websocket, {"event": "error", "data": {"message": f"unknown event: {event!r}"}}
        )


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    await connections.connect(websocket)
    await connections.send(
        websocket,
        {"event": "welcome", "data": {"message": "Connected to the elevator dispatch server"}},
    )
    try:
        while True:
            raw = await websocket.receive_text()
            try:
                message = json.loads(raw)
                if not isinstance(message, dict):
                    raise ValueError("message must be a JSON object")
                await handle_socket_message(websocket, message)
            except (ValueError, ValidationError, FleetError) as e:
                logger.warning("invalid_socket_message: error=%s", e)
                await connections.send(
                    websocket, {"event": "error", "data": {"message": str(e)}}
                )
    except WebSocketDisconnect:
        connections.disconnect(websocket)
