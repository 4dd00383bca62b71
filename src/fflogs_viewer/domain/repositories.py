from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from fflogs_viewer.domain.models.character import CharacterIdentity
from fflogs_viewer.domain.models.job import Job
from fflogs_viewer.domain.models.metric import Metric
from fflogs_viewer.domain.models.world import World


RawResponse = Optional[Dict[str, Any]]


class LogFetcher(ABC):
    @abstractmethod
    async def fetch(self, character: CharacterIdentity, metric: Metric) -> RawResponse:
        """Return the decoded response body, or None when nothing usable came back.

        Transport failures are raised, not returned.
        """
        raise NotImplementedError

    @abstractmethod
    def invalidate(self, character: CharacterIdentity, metric: Metric) -> None:
        raise NotImplementedError

    async def close(self) -> None:
        return None


class RegionResolver(ABC):
    @abstractmethod
    def resolve(self, world_name: str) -> Optional[str]:
        raise NotImplementedError


class WorldRepository(RegionResolver):
    @abstractmethod
    def get(self, world_id: int) -> Optional[World]:
        raise NotImplementedError

    @abstractmethod
    def valid_world_names(self) -> List[str]:
        raise NotImplementedError


class JobCatalog(ABC):
    @abstractmethod
    def lookup(self, job_name: str) -> Optional[Job]:
        raise NotImplementedError
