"""Mini README: Core package initialiser for flightaction.

Exposes the action dispatcher and its result type so callers can write
``from flightaction import Action, ActionResult`` without knowing the
module layout.
"""

from .action import Action, ActionResult, describe_result
from .logging_utils import get_logger

__all__ = ["Action", "ActionResult", "describe_result", "get_logger"]
