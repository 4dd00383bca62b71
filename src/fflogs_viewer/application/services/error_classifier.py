from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from fflogs_viewer.domain.errors import CharacterError


UNAUTHENTICATED_MESSAGE = "Unauthenticated."
RATE_LIMITED_STATUS = 429


@dataclass(frozen=True)
class ResponseEnvelope:
    """Explicit view of the fields the classifier cares about.

    Every field is optional because the service omits whatever does not apply.
    """

    character: Mapping[str, Any] | None = None
    error: str | None = None
    status: int | None = None
    errors: list[Any] | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "ResponseEnvelope":
        data = payload.get("data")
        character_data = data.get("characterData") if isinstance(data, Mapping) else None
        character = character_data.get("character") if isinstance(character_data, Mapping) else None

        error = payload.get("error")
        status = payload.get("status")
        errors = payload.get("errors")
        return cls(
            character=character if isinstance(character, Mapping) else None,
            error=str(error) if error is not None else None,
            status=status if isinstance(status, int) and not isinstance(status, bool) else None,
            errors=list(errors) if isinstance(errors, (list, tuple)) else None,
        )

    @property
    def is_hidden(self) -> bool:
        if self.character is None:
            return False
        hidden = self.character.get("hidden")
        return hidden is True or str(hidden).strip().lower() == "true"


@dataclass(frozen=True)
class Classification:
    error: CharacterError | None
    character: Mapping[str, Any] | None = None

    @property
    def invalidate_cache(self) -> bool:
        return self.error is not None and self.error.invalidates_cache

    @property
    def is_success(self) -> bool:
        return self.error is None


def classify_response(payload: Mapping[str, Any] | None) -> Classification:
    """Map a raw response to at most one error kind, first matching rule wins."""
    if payload is None:
        return Classification(CharacterError.UNREACHABLE)

    envelope = ResponseEnvelope.from_payload(payload)
    if envelope.character is None:
        if envelope.error is not None:
            if envelope.error == UNAUTHENTICATED_MESSAGE:
                return Classification(CharacterError.UNAUTHENTICATED)
            if envelope.status == RATE_LIMITED_STATUS:
                return Classification(CharacterError.OUT_OF_POINTS)
            return Classification(CharacterError.GENERIC_ERROR)
        if envelope.errors is not None:
            return Classification(CharacterError.MALFORMED_QUERY)
        return Classification(CharacterError.CHARACTER_NOT_FOUND_FFLOGS)

    if envelope.is_hidden:
        return Classification(CharacterError.HIDDEN_LOGS, character=envelope.character)

    return Classification(None, character=envelope.character)
