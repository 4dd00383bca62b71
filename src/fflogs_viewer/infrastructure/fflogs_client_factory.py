import os

from fflogs_viewer.infrastructure.fflogs_client import DEFAULT_ZONES, FFLogsClient, ZoneQuery
from fflogs_viewer.infrastructure.response_cache import FileResponseCache


def _is_truthy(value: str | None, *, default: str = "0") -> bool:
    normalized = str(value if value is not None else default).strip().lower()
    return normalized in {"1", "true", "yes"}


def parse_zones(raw: str | None) -> tuple[ZoneQuery, ...]:
    """Parse "49:101,43:100" into zone queries; empty input means the defaults."""
    text = str(raw or "").strip()
    if not text:
        return DEFAULT_ZONES

    zones: list[ZoneQuery] = []
    for chunk in text.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        zone_part, _, difficulty_part = chunk.partition(":")
        try:
            zone = ZoneQuery(int(zone_part), int(difficulty_part or "100"))
        except ValueError:
            raise ValueError(f"FFLV_ZONES entries must look like 'zone:difficulty', got '{chunk}'")
        if zone not in zones:
            zones.append(zone)
    return tuple(zones) or DEFAULT_ZONES


def create_response_cache() -> FileResponseCache | None:
    if not _is_truthy(os.getenv("FFLV_CACHE_ENABLED"), default="1"):
        return None
    return FileResponseCache(os.getenv("FFLV_CACHE_DIR", ".fflv_cache/logs"))


def create_fflogs_client() -> FFLogsClient:
    return FFLogsClient(
        client_id=os.getenv("FFLV_CLIENT_ID", ""),
        client_secret=os.getenv("FFLV_CLIENT_SECRET", ""),
        zones=parse_zones(os.getenv("FFLV_ZONES")),
        api_url=os.getenv("FFLV_API_URL", FFLogsClient.API_URL),
        token_url=os.getenv("FFLV_TOKEN_URL", FFLogsClient.TOKEN_URL),
        timeout=float(os.getenv("FFLV_TIMEOUT_S", "10")),
        cache=create_response_cache(),
        cache_ttl_seconds=int(os.getenv("FFLV_CACHE_TTL_S", "3600")),
    )
