from dataclasses import dataclass

from fflogs_viewer.domain.errors import CharacterError


@dataclass
class CharacterLogsRequested:
    first_name: str
    last_name: str
    world_name: str
    region_name: str
    metric: str


@dataclass
class CharacterLogsLoaded:
    first_name: str
    last_name: str
    world_name: str
    metric: str
    encounter_count: int


@dataclass
class CharacterLogsFailed:
    first_name: str
    last_name: str
    world_name: str
    error: CharacterError
    cache_invalidated: bool
