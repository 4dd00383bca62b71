import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Sequence

import httpx

from fflogs_viewer.domain.models.character import CharacterIdentity
from fflogs_viewer.domain.models.metric import Metric
from fflogs_viewer.domain.repositories import LogFetcher
from fflogs_viewer.infrastructure.graphql_http import post_for_json
from fflogs_viewer.infrastructure.response_cache import FileResponseCache


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ZoneQuery:
    zone_id: int
    difficulty_id: int

    @property
    def alias(self) -> str:
        return f"zone{self.zone_id}diff{self.difficulty_id}"


DEFAULT_ZONES = (
    ZoneQuery(49, 101),
    ZoneQuery(43, 100),
    ZoneQuery(45, 100),
    ZoneQuery(53, 100),
    ZoneQuery(42, 100),
    ZoneQuery(50, 100),
)


def build_character_query(character: CharacterIdentity, metric: Metric, zones: Sequence[ZoneQuery]) -> str:
    rankings = " ".join(
        f"{zone.alias}: zoneRankings(zoneID: {zone.zone_id}, difficulty: {zone.difficulty_id}, "
        f"metric: {metric.internal_name})"
        for zone in zones
    )
    return (
        "{ characterData { character("
        f"name: {json.dumps(character.full_name)}, "
        f"serverSlug: {json.dumps(character.world_name)}, "
        f"serverRegion: {json.dumps(character.region_name or '')}"
        f") {{ hidden {rankings} }} }} }}"
    )


class FFLogsClient(LogFetcher):
    """Async GraphQL client for character zone rankings (client-credentials auth)."""

    API_URL = "https://www.fflogs.com/api/v2/client"
    TOKEN_URL = "https://www.fflogs.com/oauth/token"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        *,
        zones: Sequence[ZoneQuery] = DEFAULT_ZONES,
        api_url: str = API_URL,
        token_url: str = TOKEN_URL,
        timeout: float = 10.0,
        cache: FileResponseCache | None = None,
        cache_ttl_seconds: int | None = 3600,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._client_id = client_id
        self._client_secret = client_secret
        self.zones = tuple(zones)
        self.api_url = api_url
        self.token_url = token_url
        self.cache = cache
        self.cache_ttl_seconds = cache_ttl_seconds
        self.client = http_client or httpx.AsyncClient(timeout=timeout)
        self._access_token: str | None = None
        self._token_lock = asyncio.Lock()

    @staticmethod
    def cache_key(character: CharacterIdentity, metric: Metric) -> str:
        return f"logs:{character.first_name} {character.last_name}|{character.world_name}|{metric.internal_name}".lower()

    async def _get_token(self) -> str | None:
        if self._access_token:
            return self._access_token
        if not self._client_id or not self._client_secret:
            return None

        async with self._token_lock:
            # Another fetch may have obtained a token while this one waited.
            if self._access_token:
                return self._access_token
            payload = await post_for_json(
                self.client,
                self.token_url,
                form={"grant_type": "client_credentials"},
                auth=(self._client_id, self._client_secret),
            )
            token = payload.get("access_token") if payload else None
            if not isinstance(token, str) or not token:
                logger.warning("FF Logs token request was rejected: %s", payload)
                return None
            self._access_token = token
            return token

    async def fetch(self, character: CharacterIdentity, metric: Metric) -> dict[str, Any] | None:
        key = self.cache_key(character, metric)
        if self.cache is not None:
            cached = self.cache.get(key, ttl_seconds=self.cache_ttl_seconds)
            if cached is not None:
                logger.debug("Serving cached logs for %s", key)
                return cached

        token = await self._get_token()
        if token is None:
            return {"error": "Unauthenticated."}

        payload = await post_for_json(
            self.client,
            self.api_url,
            json_body={"query": build_character_query(character, metric, self.zones)},
            headers={"Authorization": f"Bearer {token}", "Accept": "application/json"},
        )
        if payload is not None and payload.get("status") == 401:
            self._access_token = None

        if payload is not None and self.cache is not None:
            try:
                self.cache.set(key, payload)
            except OSError:
                logger.warning("Could not write cached logs for %s", key, exc_info=True)
        return payload

    def invalidate(self, character: CharacterIdentity, metric: Metric) -> None:
        if self.cache is None:
            return
        if self.cache.delete(self.cache_key(character, metric)):
            logger.debug("Invalidated cached logs for %s", character.full_name)

    async def close(self) -> None:
        await self.client.aclose()
