from __future__ import annotations

import math
from dataclasses import dataclass
from urllib.parse import quote

from fflogs_viewer.domain.errors import CharacterError
from fflogs_viewer.domain.models.character import CharacterIdentity
from fflogs_viewer.domain.models.encounter import Encounter


CHARACTER_URL_TEMPLATE = "https://www.fflogs.com/character/{region}/{world}/{name}"

_STATIC_ERROR_MESSAGES = {
    CharacterError.CHARACTER_NOT_FOUND_FFLOGS: "Character not found on FF Logs",
    CharacterError.CHARACTER_NOT_FOUND: "Character not found",
    CharacterError.CLIPBOARD_ERROR: "Couldn't get clipboard text",
    CharacterError.GENERIC_ERROR: "An error occurred, please try again",
    CharacterError.INVALID_TARGET: "Not a valid target",
    CharacterError.INVALID_WORLD: "World not supported or invalid",
    CharacterError.MALFORMED_QUERY: "Malformed GraphQL query.",
    CharacterError.MISSING_INPUTS: "Please fill first name, last name, and world",
    CharacterError.NETWORK_ERROR: "Networking error, please try again",
    CharacterError.OUT_OF_POINTS: "Ran out of API points, try again later.",
    CharacterError.UNAUTHENTICATED: "API Client not valid, check config",
    CharacterError.UNREACHABLE: "Could not reach FF Logs servers",
    CharacterError.WORLD_NOT_FOUND: "World not found",
}

# Upper bounds (exclusive) of each percentile band, as RGBA.
_LOG_COLOUR_BANDS = (
    (0, (255, 255, 255, 255)),
    (25, (102, 102, 102, 255)),
    (50, (30, 255, 0, 255)),
    (75, (0, 112, 255, 255)),
    (95, (163, 53, 238, 255)),
    (99, (255, 128, 0, 255)),
    (100, (226, 104, 168, 255)),
)
_PERFECT_LOG_COLOUR = (229, 204, 128, 255)
_DEFAULT_LOG_COLOUR = (255, 255, 255, 255)


@dataclass
class EncounterRowView:
    zone_id: int
    encounter_id: int | None
    best: str
    median: str
    kills: str
    job: str
    all_stars_points: str
    best_colour: tuple[int, int, int, int] = _DEFAULT_LOG_COLOUR
    median_colour: tuple[int, int, int, int] = _DEFAULT_LOG_COLOUR


def error_message(character: CharacterIdentity | None) -> str | None:
    if character is None or character.error is None:
        return None
    if character.error is CharacterError.HIDDEN_LOGS:
        return f"{character.first_name} {character.last_name}@{character.world_name}'s logs are hidden"
    return _STATIC_ERROR_MESSAGES.get(character.error)


def format_log(value: float | None, decimal_digits: int = 0) -> str | None:
    if value is None:
        return None
    if value >= 100.0:
        return "100"
    digits = max(0, int(decimal_digits))
    magnitude = 10 ** digits
    truncated = math.trunc(value * magnitude) / magnitude
    return f"{truncated:.{digits}f}"


def log_colour(value: float | None) -> tuple[int, int, int, int]:
    if value is None:
        return _DEFAULT_LOG_COLOUR
    for upper_bound, colour in _LOG_COLOUR_BANDS:
        if value < upper_bound:
            return colour
    if value == 100:
        return _PERFECT_LOG_COLOUR
    return _DEFAULT_LOG_COLOUR


def character_url(character: CharacterIdentity, region: str | None = None) -> str:
    return CHARACTER_URL_TEMPLATE.format(
        region=region or character.region_name or "",
        world=character.world_name,
        name=quote(f"{character.first_name} {character.last_name}"),
    )


def to_encounter_row_view(encounter: Encounter, *, decimal_digits: int = 0) -> EncounterRowView:
    if not encounter.is_valid:
        return EncounterRowView(encounter.zone_id, None, "n/a", "n/a", "n/a", "-", "-")
    return EncounterRowView(
        zone_id=encounter.zone_id,
        encounter_id=encounter.encounter_id,
        best=format_log(encounter.best, decimal_digits) or "-",
        median=format_log(encounter.median, decimal_digits) or "-",
        kills=str(encounter.kills) if encounter.kills is not None else "-",
        job=encounter.job.abbreviation if encounter.job is not None else "-",
        all_stars_points=f"{encounter.all_stars_points:.2f}" if encounter.all_stars_points is not None else "-",
        best_colour=log_colour(encounter.best),
        median_colour=log_colour(encounter.median),
    )
