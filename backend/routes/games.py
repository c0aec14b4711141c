"""Read-only game inspection API. Games are created and joined over /ws only."""

import logging

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from models import GameStatus, GameView

router = APIRouter(tags=["games"])
logger = logging.getLogger(__name__)


class GameReadResponse(BaseModel):
    status: GameStatus
    capacity: int
    game: GameView


@router.get(
    "/games/{game_id}",
    response_model=GameReadResponse,
    response_model_by_alias=True,
    status_code=200,
)
def get_game(game_id: str, request: Request) -> GameReadResponse:
    """Current record for one game, in the same shape the channel broadcasts."""
    logger.info("[games] GET /api/games/%s called", game_id)
    game = request.app.state.coordinator.games.get(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail="Game not found")
    return GameReadResponse(status=game.status, capacity=game.capacity, game=GameView.from_game(game))
