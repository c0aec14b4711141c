from .broadcast_loop import BroadcastLoop
from .client_registry import ClientChannel, ClientRegistry
from .coordinator import GameCoordinator
from .game_store import GameStore
from .protocol import HandleResult, Outcome, ProtocolHandler

__all__ = [
    "ClientChannel",
    "ClientRegistry",
    "GameStore",
    "ProtocolHandler",
    "HandleResult",
    "Outcome",
    "BroadcastLoop",
    "GameCoordinator",
]
