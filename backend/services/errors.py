class GameError(Exception):
    """Base for game store failures."""


class GameNotFound(GameError):
    def __init__(self, game_id: str) -> None:
        super().__init__(f"Game with ID {game_id} does not exist")
        self.game_id = game_id


class ClientUnknown(GameError):
    def __init__(self, client_id: str) -> None:
        super().__init__(f"Client with ID {client_id} does not exist")
        self.client_id = client_id


class GameFull(GameError):
    def __init__(self, game_id: str, capacity: int) -> None:
        super().__init__(f"Game is full. Maximum {capacity} players allowed.")
        self.game_id = game_id
        self.capacity = capacity


class AlreadyJoined(GameError):
    def __init__(self, game_id: str, client_id: str) -> None:
        super().__init__(f"Client {client_id} already in the game")
        self.game_id = game_id
        self.client_id = client_id
