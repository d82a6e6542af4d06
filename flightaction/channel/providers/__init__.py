"""Mini README: Built-in device command channel providers.

New transports export a subclass of ``DeviceCommandChannel`` and register it
with ``REGISTRY`` on import so the registry can discover them.
"""

from .simulated import SimulatedChannel, outcome_from_mav_result

__all__ = ["SimulatedChannel", "outcome_from_mav_result"]
