from __future__ import annotations

from collections.abc import Sequence

from fflogs_viewer.domain.models.job import Job
from fflogs_viewer.domain.repositories import JobCatalog


COMBAT_JOBS: Sequence[Job] = (
    Job(19, "Paladin", "PLD"),
    Job(20, "Monk", "MNK"),
    Job(21, "Warrior", "WAR"),
    Job(22, "Dragoon", "DRG"),
    Job(23, "Bard", "BRD"),
    Job(24, "White Mage", "WHM"),
    Job(25, "Black Mage", "BLM"),
    Job(27, "Summoner", "SMN"),
    Job(28, "Scholar", "SCH"),
    Job(30, "Ninja", "NIN"),
    Job(31, "Machinist", "MCH"),
    Job(32, "Dark Knight", "DRK"),
    Job(33, "Astrologian", "AST"),
    Job(34, "Samurai", "SAM"),
    Job(35, "Red Mage", "RDM"),
    Job(36, "Blue Mage", "BLU"),
    Job(37, "Gunbreaker", "GNB"),
    Job(38, "Dancer", "DNC"),
    Job(39, "Reaper", "RPR"),
    Job(40, "Sage", "SGE"),
    Job(41, "Viper", "VPR"),
    Job(42, "Pictomancer", "PCT"),
)


class StaticJobCatalog(JobCatalog):
    def __init__(self, jobs: Sequence[Job] = COMBAT_JOBS) -> None:
        self._by_name = {job.name: job for job in jobs}

    def lookup(self, job_name: str) -> Job | None:
        return self._by_name.get(str(job_name or "").strip())
