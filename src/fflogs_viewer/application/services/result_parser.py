from __future__ import annotations

import logging
import re
from typing import Any, Mapping

from fflogs_viewer.domain.models.encounter import Encounter
from fflogs_viewer.domain.models.job import Job
from fflogs_viewer.domain.repositories import JobCatalog


logger = logging.getLogger(__name__)

_SPEC_WORD_BOUNDARY_RE = re.compile(r"([a-z])([A-Z])")
_NON_ZONE_KEYS = frozenset({"hidden"})


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _as_float(value: Any) -> float | None:
    return float(value) if _is_number(value) else None


def _as_int(value: Any) -> int | None:
    return int(value) if _is_number(value) else None


def _as_bool(value: Any) -> bool | None:
    return value if isinstance(value, bool) else None


def normalize_spec_label(spec: Any) -> str:
    """"DarkKnight" -> "Dark Knight"."""
    return _SPEC_WORD_BOUNDARY_RE.sub(r"\1 \2", str(spec))


class ResultParser:
    def __init__(self, job_catalog: JobCatalog) -> None:
        self.job_catalog = job_catalog

    def parse(self, character: Mapping[str, Any]) -> list[Encounter]:
        encounters: list[Encounter] = []
        for key, zone in character.items():
            if key in _NON_ZONE_KEYS:
                continue
            if not isinstance(zone, Mapping):
                continue
            encounters.extend(self.parse_zone(zone))
        return encounters

    def parse_zone(self, zone: Mapping[str, Any]) -> list[Encounter]:
        rankings = zone.get("rankings")
        if not isinstance(rankings, (list, tuple)):
            return []

        zone_id = _as_int(zone.get("zone"))
        if zone_id is None:
            # No row, not even the "n/a" placeholder, can be keyed without a zone id.
            logger.warning("Dropping zone without a numeric id (%d rankings): %s", len(rankings), dict(zone))
            return []

        difficulty = _as_int(zone.get("difficulty"))
        metric = zone.get("metric")
        metric = str(metric) if metric is not None else None

        # The active metric does not apply to this zone.
        if not rankings:
            return [Encounter(zone_id=zone_id, is_valid=False)]

        encounters: list[Encounter] = []
        for ranking in rankings:
            if not isinstance(ranking, Mapping):
                continue
            reference = ranking.get("encounter")
            if not isinstance(reference, Mapping):
                continue

            encounter = Encounter(
                zone_id=zone_id,
                encounter_id=_as_int(reference.get("id")),
                difficulty=difficulty,
                metric=metric,
            )
            if ranking.get("spec") is not None:
                self._apply_ranking(encounter, ranking)
            encounters.append(encounter)
        return encounters

    def _apply_ranking(self, encounter: Encounter, ranking: Mapping[str, Any]) -> None:
        encounter.is_locked_in = _as_bool(ranking.get("lockedIn"))
        encounter.best = _as_float(ranking.get("rankPercent"))
        encounter.median = _as_float(ranking.get("medianPercent"))
        encounter.kills = _as_int(ranking.get("totalKills"))
        encounter.fastest_kill = _as_int(ranking.get("fastestKill"))
        encounter.best_amount = _as_float(ranking.get("bestAmount"))
        encounter.job = self._lookup_job(ranking.get("spec"))
        encounter.best_job = self._lookup_job(ranking.get("bestSpec"))

        all_stars = ranking.get("allStars")
        if not isinstance(all_stars, Mapping):
            return
        encounter.all_stars_points = _as_float(all_stars.get("points"))
        rank = all_stars.get("rank")
        rank_percent = all_stars.get("rankPercent")
        # Fresh logs report "-" for both until the next ranking pass.
        if _is_number(rank) and _is_number(rank_percent):
            encounter.all_stars_rank = int(rank)
            encounter.all_stars_rank_percent = float(rank_percent)

    def _lookup_job(self, spec: Any) -> Job | None:
        if spec is None:
            return None
        return self.job_catalog.lookup(normalize_spec_label(spec))
