"""Mini README: FastAPI service exposing vehicle actions over HTTP.

Structure:
    * create_application - application factory wiring a vehicle session into
      the routes below.

Routes:
    * ``GET /`` - channel metadata and the available actions.
    * ``GET /channels`` - registered channel providers.
    * ``GET /state`` - cached airborne state and gate decisions.
    * ``POST /actions/{name}`` - run one action and return its result.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse

from ..action import ACTION_DESCRIPTIONS
from ..channel import REGISTRY
from ..logging_utils import get_logger
from .session import VehicleSession, open_session

LOGGER = get_logger(__name__)


def create_application(session: Optional[VehicleSession] = None) -> FastAPI:
    """Create the FastAPI application around ``session`` (or a configured one)."""

    session = session or open_session()

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        LOGGER.info("Starting vehicle session")
        session.start()
        yield
        LOGGER.info("Shutting down vehicle session")
        session.stop()

    app = FastAPI(title="flightaction", version="0.1.0", lifespan=lifespan)

    @app.get("/")
    def overview() -> JSONResponse:
        """Describe the connected channel and the actions it accepts."""

        return JSONResponse(
            {"channel": session.channel.metadata(), "actions": ACTION_DESCRIPTIONS}
        )

    @app.get("/channels")
    def channels() -> JSONResponse:
        return JSONResponse({"providers": list(REGISTRY.available_providers())})

    @app.get("/state")
    def state() -> JSONResponse:
        return JSONResponse(session.status())

    # Plain ``def`` so FastAPI runs the blocking channel call in its threadpool.
    @app.post("/actions/{name}")
    def run_action(name: str) -> JSONResponse:
        """Run ``name`` and wait for the vehicle's answer."""

        try:
            result = session.action.perform(name)
        except KeyError as error:
            raise HTTPException(status_code=404, detail=str(error)) from error
        LOGGER.info("HTTP action %s -> %s", name, result.name)
        return JSONResponse(
            {"action": name, "result": result.value, "description": result.description}
        )

    return app
