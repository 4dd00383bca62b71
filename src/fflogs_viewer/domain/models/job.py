from dataclasses import dataclass


@dataclass(frozen=True)
class Job:
    id: int
    name: str
    abbreviation: str
