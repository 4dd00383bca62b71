import logging
import os
from dataclasses import dataclass

from fflogs_viewer.application.services.character_lookup import CharacterLookupService
from fflogs_viewer.application.services.event_bus import EventBus
from fflogs_viewer.application.services.fetch_orchestrator import FetchOrchestrator
from fflogs_viewer.domain.events import CharacterLogsFailed, CharacterLogsLoaded
from fflogs_viewer.domain.models.metric import DEFAULT_METRIC, resolve_metric
from fflogs_viewer.domain.repositories import LogFetcher
from fflogs_viewer.domain.services.job_catalog import StaticJobCatalog
from fflogs_viewer.domain.services.world_catalog import WorldCatalog
from fflogs_viewer.infrastructure.fflogs_client_factory import create_fflogs_client


logger = logging.getLogger(__name__)


@dataclass
class Application:
    lookup: CharacterLookupService
    orchestrator: FetchOrchestrator
    log_fetcher: LogFetcher
    event_bus: EventBus

    async def aclose(self) -> None:
        await self.orchestrator.shutdown()
        await self.log_fetcher.close()


def _log_loaded(event: CharacterLogsLoaded) -> None:
    logger.info(
        "Loaded %d encounters for %s %s@%s (%s)",
        event.encounter_count,
        event.first_name,
        event.last_name,
        event.world_name,
        event.metric,
    )


def _log_failed(event: CharacterLogsFailed) -> None:
    logger.info(
        "Lookup of %s %s@%s failed: %s",
        event.first_name,
        event.last_name,
        event.world_name,
        event.error.value,
    )


def create_application(
    *,
    log_fetcher: LogFetcher | None = None,
    local_player_world: str | None = None,
) -> Application:
    configured_metric = os.getenv("FFLV_METRIC", "")
    default_metric = resolve_metric(configured_metric)
    if default_metric is None:
        if configured_metric:
            logger.warning("Unknown FFLV_METRIC '%s', using %s", configured_metric, DEFAULT_METRIC.name)
        default_metric = DEFAULT_METRIC

    fetcher = log_fetcher or create_fflogs_client()
    worlds = WorldCatalog()
    event_bus = EventBus()
    event_bus.subscribe(CharacterLogsLoaded, _log_loaded)
    event_bus.subscribe(CharacterLogsFailed, _log_failed)

    orchestrator = FetchOrchestrator(
        fetcher,
        worlds,
        StaticJobCatalog(),
        event_bus=event_bus,
        default_metric=default_metric,
    )
    lookup = CharacterLookupService(
        orchestrator,
        worlds,
        local_player_world=lambda: local_player_world,
    )
    return Application(lookup=lookup, orchestrator=orchestrator, log_fetcher=fetcher, event_bus=event_bus)
