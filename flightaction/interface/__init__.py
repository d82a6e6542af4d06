"""Mini README: Operator interfaces (HTTP and CLI helpers) for flightaction.

Exports the FastAPI application factory and the session helpers that bind a
configured channel to an ``Action`` dispatcher.
"""

from .session import VehicleSession, open_session
from .web_app import create_application

__all__ = ["VehicleSession", "create_application", "open_session"]
