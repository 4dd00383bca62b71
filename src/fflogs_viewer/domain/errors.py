from enum import Enum


class CharacterError(str, Enum):
    CHARACTER_NOT_FOUND_FFLOGS = "character_not_found_fflogs"
    CHARACTER_NOT_FOUND = "character_not_found"
    CLIPBOARD_ERROR = "clipboard_error"
    GENERIC_ERROR = "generic_error"
    HIDDEN_LOGS = "hidden_logs"
    INVALID_TARGET = "invalid_target"
    INVALID_WORLD = "invalid_world"
    MALFORMED_QUERY = "malformed_query"
    MISSING_INPUTS = "missing_inputs"
    NETWORK_ERROR = "network_error"
    OUT_OF_POINTS = "out_of_points"
    UNAUTHENTICATED = "unauthenticated"
    UNREACHABLE = "unreachable"
    WORLD_NOT_FOUND = "world_not_found"

    @property
    def invalidates_cache(self) -> bool:
        return self in _CACHE_INVALIDATING


_CACHE_INVALIDATING = frozenset(
    {
        CharacterError.UNREACHABLE,
        CharacterError.UNAUTHENTICATED,
        CharacterError.OUT_OF_POINTS,
        CharacterError.GENERIC_ERROR,
        CharacterError.MALFORMED_QUERY,
        CharacterError.NETWORK_ERROR,
    }
)
