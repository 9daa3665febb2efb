"""BlipBurst: time-windowed fault injection around an outbound network call."""
from .config import BlipBurstConfig
from .errors import FailureMode, SimulatedFailure
from .injector import BlipBurst, InjectorState
from .transport import HttpxCaller, NetworkCaller

__all__ = [
    "BlipBurst",
    "BlipBurstConfig",
    "FailureMode",
    "HttpxCaller",
    "InjectorState",
    "NetworkCaller",
    "SimulatedFailure",
]
