from dataclasses import dataclass


@dataclass(frozen=True)
class Metric:
    name: str
    internal_name: str

    @property
    def abbreviation(self) -> str:
        return self.name


AVAILABLE_METRICS = (
    Metric("aDPS", "dps"),
    Metric("rDPS", "rdps"),
    Metric("nDPS", "ndps"),
    Metric("cDPS", "cdps"),
    Metric("HPS", "hps"),
)

DEFAULT_METRIC = AVAILABLE_METRICS[1]


def resolve_metric(value: str | None) -> Metric | None:
    key = str(value or "").strip().lower()
    if not key:
        return None
    for metric in AVAILABLE_METRICS:
        if key in {metric.internal_name, metric.name.lower()}:
            return metric
    return None
