from dataclasses import dataclass
from typing import Optional

from fflogs_viewer.domain.models.job import Job


@dataclass
class Encounter:
    # Always the service's numeric zone id; zones reported without one yield no rows.
    zone_id: int
    encounter_id: Optional[int] = None
    difficulty: Optional[int] = None
    metric: Optional[str] = None
    is_valid: bool = True
    best: Optional[float] = None
    median: Optional[float] = None
    kills: Optional[int] = None
    fastest_kill: Optional[int] = None
    best_amount: Optional[float] = None
    is_locked_in: Optional[bool] = None
    job: Optional[Job] = None
    best_job: Optional[Job] = None
    all_stars_points: Optional[float] = None
    all_stars_rank: Optional[int] = None
    all_stars_rank_percent: Optional[float] = None

    @property
    def has_ranking(self) -> bool:
        return self.best is not None or self.kills is not None
