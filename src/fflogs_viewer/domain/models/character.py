from dataclasses import dataclass, field
from typing import List, Optional

from fflogs_viewer.domain.errors import CharacterError
from fflogs_viewer.domain.models.encounter import Encounter
from fflogs_viewer.domain.models.metric import Metric


@dataclass
class CharacterIdentity:
    """A character to look up, plus the state of its most recent fetch.

    The requested fields (first/last/world) may be edited at any time. The
    ``loaded_*`` fields only move when a fetch succeeds, so ``encounters``
    always describes the loaded identity, never necessarily the requested one.
    """

    first_name: str = ""
    last_name: str = ""
    world_name: str = ""
    region_name: Optional[str] = None
    loaded_first_name: str = ""
    loaded_last_name: str = ""
    loaded_world_name: str = ""
    loaded_metric: Optional[Metric] = None
    error: Optional[CharacterError] = None
    is_loading: bool = False
    is_ready: bool = False
    encounters: List[Encounter] = field(default_factory=list)

    @property
    def abbreviation(self) -> str:
        if not self.first_name or not self.last_name:
            return "-"
        return f"{self.first_name[0]}. {self.last_name[0]}."

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def set_info(self, first_name: str, last_name: str, world_name: str) -> None:
        self.first_name = first_name
        self.last_name = last_name
        self.world_name = world_name

    def is_info_set(self) -> bool:
        return bool(self.first_name and self.last_name and self.world_name)

    def request_snapshot(self) -> "CharacterIdentity":
        """Frozen copy of the requested identity, immune to later edits."""
        return CharacterIdentity(
            first_name=self.first_name,
            last_name=self.last_name,
            world_name=self.world_name,
            region_name=self.region_name,
        )

    def reset_data(self) -> None:
        self.encounters = []
        self.is_ready = False
        self.loaded_metric = None

    def mark_loaded(self, encounters: List[Encounter], metric: Metric) -> None:
        self.encounters = encounters
        self.loaded_metric = metric
        self.is_ready = True
        self.loaded_first_name = self.first_name
        self.loaded_last_name = self.last_name
        self.loaded_world_name = self.world_name
