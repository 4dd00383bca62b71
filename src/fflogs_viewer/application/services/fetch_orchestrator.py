from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from fflogs_viewer.application.services.error_classifier import classify_response
from fflogs_viewer.application.services.event_bus import EventBus
from fflogs_viewer.application.services.result_parser import ResultParser
from fflogs_viewer.domain.errors import CharacterError
from fflogs_viewer.domain.events import CharacterLogsFailed, CharacterLogsLoaded, CharacterLogsRequested
from fflogs_viewer.domain.models.character import CharacterIdentity
from fflogs_viewer.domain.models.encounter import Encounter
from fflogs_viewer.domain.models.metric import DEFAULT_METRIC, Metric
from fflogs_viewer.domain.repositories import JobCatalog, LogFetcher, RegionResolver


logger = logging.getLogger(__name__)


@dataclass
class FetchOutcome:
    dispatched: bool
    error: CharacterError | None = None
    encounters: list[Encounter] = field(default_factory=list)

    @property
    def is_success(self) -> bool:
        return self.dispatched and self.error is None


class FetchOrchestrator:
    """Runs at most one log fetch per character and records the result on it.

    Callers never receive exceptions from a fetch: every failure ends up in
    ``character.error``. ``request_fetch`` must be called with an event loop
    running, since the fetch itself is scheduled as a task.
    """

    def __init__(
        self,
        log_fetcher: LogFetcher,
        region_resolver: RegionResolver,
        job_catalog: JobCatalog,
        *,
        event_bus: EventBus | None = None,
        default_metric: Metric = DEFAULT_METRIC,
    ) -> None:
        self.log_fetcher = log_fetcher
        self.region_resolver = region_resolver
        self.result_parser = ResultParser(job_catalog)
        self.event_bus = event_bus or EventBus()
        self.default_metric = default_metric
        self._tasks: set[asyncio.Task] = set()

    def request_fetch(self, character: CharacterIdentity, metric: Metric | None = None) -> asyncio.Task | None:
        if character.is_loading:
            return None

        character.error = None
        if not character.is_info_set():
            character.error = CharacterError.MISSING_INPUTS
            return None

        region = self.region_resolver.resolve(character.world_name)
        if region is None:
            character.error = CharacterError.INVALID_WORLD
            return None

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.error("Fetch for %s requested outside a running event loop", character.full_name)
            character.error = CharacterError.GENERIC_ERROR
            return None

        resolved_metric = metric or self.default_metric
        character.region_name = region
        character.is_loading = True
        character.reset_data()

        self.event_bus.publish(
            CharacterLogsRequested(
                first_name=character.first_name,
                last_name=character.last_name,
                world_name=character.world_name,
                region_name=region,
                metric=resolved_metric.internal_name,
            )
        )
        task = loop.create_task(self._run_fetch(character, character.request_snapshot(), resolved_metric))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def fetch_logs(self, character: CharacterIdentity, metric: Metric | None = None) -> FetchOutcome:
        task = self.request_fetch(character, metric)
        if task is None:
            return FetchOutcome(dispatched=False, error=character.error)
        return await task

    @property
    def pending_count(self) -> int:
        return len(self._tasks)

    async def shutdown(self) -> None:
        if self._tasks:
            logger.info("Waiting for %d log fetches to finish", len(self._tasks))
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def _run_fetch(
        self,
        character: CharacterIdentity,
        request: CharacterIdentity,
        metric: Metric,
    ) -> FetchOutcome:
        try:
            payload = await self.log_fetcher.fetch(request, metric)
            character.is_loading = False
            return self._complete(character, request, metric, payload)
        except Exception:
            logger.exception(
                "Networking error while fetching %s@%s",
                request.full_name,
                request.world_name,
            )
            error = CharacterError.NETWORK_ERROR
            return self._fail(character, request, metric, error, invalidate=error.invalidates_cache)
        finally:
            character.is_loading = False

    def _complete(
        self,
        character: CharacterIdentity,
        request: CharacterIdentity,
        metric: Metric,
        payload: Mapping[str, Any] | None,
    ) -> FetchOutcome:
        classification = classify_response(payload)
        if not classification.is_success:
            if payload is None:
                logger.error("Empty response for %s@%s", request.full_name, request.world_name)
            else:
                logger.info("Fetch classified as %s: %s", classification.error.value, payload)
            return self._fail(
                character,
                request,
                metric,
                classification.error,
                invalidate=classification.invalidate_cache,
            )

        encounters = self.result_parser.parse(classification.character or {})
        character.mark_loaded(encounters, metric)
        self.event_bus.publish(
            CharacterLogsLoaded(
                first_name=character.loaded_first_name,
                last_name=character.loaded_last_name,
                world_name=character.loaded_world_name,
                metric=metric.internal_name,
                encounter_count=len(encounters),
            )
        )
        return FetchOutcome(dispatched=True, encounters=list(encounters))

    def _fail(
        self,
        character: CharacterIdentity,
        request: CharacterIdentity,
        metric: Metric,
        error: CharacterError,
        *,
        invalidate: bool,
    ) -> FetchOutcome:
        character.error = error
        if invalidate:
            try:
                self.log_fetcher.invalidate(request, metric)
            except Exception:
                logger.exception("Could not invalidate cached logs for %s", request.full_name)
        self.event_bus.publish(
            CharacterLogsFailed(
                first_name=request.first_name,
                last_name=request.last_name,
                world_name=request.world_name,
                error=error,
                cache_invalidated=invalidate,
            )
        )
        return FetchOutcome(dispatched=True, error=error)
