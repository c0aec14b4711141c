from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

DEFAULT_SLOT_COLORS = ("Red", "Green", "Blue")
DEFAULT_BALL_COUNT = 20


class GameStatus(str, Enum):
    WAITING = "waiting"
    ACTIVE = "active"


@dataclass
class ClientSlot:
    client_id: str
    color: str                             # permanent once assigned


@dataclass
class Game:
    id: str                                # uuid4
    capacity: int = len(DEFAULT_SLOT_COLORS)
    balls: int = DEFAULT_BALL_COUNT        # carried in snapshots, unused by logic
    clients: list[ClientSlot] = field(default_factory=list)
    state: dict[str, str] = field(default_factory=dict)   # ball id -> color
    status: GameStatus = GameStatus.WAITING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_full(self) -> bool:
        return len(self.clients) >= self.capacity

    def has_client(self, client_id: str) -> bool:
        return any(slot.client_id == client_id for slot in self.clients)

    def client_ids(self) -> list[str]:
        return [slot.client_id for slot in self.clients]
