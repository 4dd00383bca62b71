from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class World:
    id: int
    name: str
    data_center: str
    region: str


@dataclass(frozen=True)
class GameTarget:
    """Snapshot of the in-game target handed over by the game client."""

    name: str
    home_world: Optional[str] = None
    is_player_character: bool = True
    is_companion: bool = False
