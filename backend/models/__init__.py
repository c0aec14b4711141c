from .game import DEFAULT_BALL_COUNT, DEFAULT_SLOT_COLORS, ClientSlot, Game, GameStatus
from .messages import (
    GENERIC_ERROR_MESSAGE,
    ConnectMessage,
    CreateRequest,
    Envelope,
    ErrorMessage,
    GameMessage,
    GameView,
    JoinRequest,
    PlayRequest,
)

__all__ = [
    "Game",
    "GameStatus",
    "ClientSlot",
    "DEFAULT_SLOT_COLORS",
    "DEFAULT_BALL_COUNT",
    "GENERIC_ERROR_MESSAGE",
    "Envelope",
    "CreateRequest",
    "JoinRequest",
    "PlayRequest",
    "ConnectMessage",
    "GameMessage",
    "GameView",
    "ErrorMessage",
]
