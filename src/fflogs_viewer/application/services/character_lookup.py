from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from fflogs_viewer.application.services.fetch_orchestrator import FetchOrchestrator
from fflogs_viewer.domain.errors import CharacterError
from fflogs_viewer.domain.models.character import CharacterIdentity
from fflogs_viewer.domain.models.metric import Metric
from fflogs_viewer.domain.models.world import GameTarget
from fflogs_viewer.domain.repositories import WorldRepository
from fflogs_viewer.domain.services.name_parser import parse_character_text


logger = logging.getLogger(__name__)

ClipboardReader = Callable[[], Optional[str]]
PlaceholderResolver = Callable[[str], Optional[str]]


class CharacterLookupService:
    """Entry points that turn text, a world id, the clipboard or a target into a fetch."""

    def __init__(
        self,
        orchestrator: FetchOrchestrator,
        worlds: WorldRepository,
        *,
        local_player_world: Callable[[], Optional[str]] | None = None,
        placeholder_resolver: PlaceholderResolver | None = None,
    ) -> None:
        self.orchestrator = orchestrator
        self.worlds = worlds
        self._local_player_world = local_player_world or (lambda: None)
        self._placeholder_resolver = placeholder_resolver

    def parse_text(self, character: CharacterIdentity, raw_text: str) -> bool:
        if self._placeholder_resolver is not None:
            replacement = self._placeholder_resolver(raw_text)
            if replacement is not None:
                raw_text = replacement

        parsed = parse_character_text(
            raw_text,
            self.worlds.valid_world_names(),
            self._local_player_world(),
        )
        if parsed is None:
            return False
        character.set_info(parsed.first_name, parsed.last_name, parsed.world_name)
        return True

    def fetch_character(
        self,
        character: CharacterIdentity,
        raw_text: str,
        metric: Metric | None = None,
    ) -> asyncio.Task | None:
        if not self.parse_text(character, raw_text):
            character.error = CharacterError.CHARACTER_NOT_FOUND
            return None
        return self.orchestrator.request_fetch(character, metric)

    def fetch_character_by_world_id(
        self,
        character: CharacterIdentity,
        full_name: str,
        world_id: int,
        metric: Metric | None = None,
    ) -> asyncio.Task | None:
        world = self.worlds.get(world_id)
        if world is None:
            character.error = CharacterError.WORLD_NOT_FOUND
            return None
        return self.fetch_character(character, f"{full_name}@{world.name}", metric)

    def fetch_clipboard_character(
        self,
        character: CharacterIdentity,
        read_clipboard: ClipboardReader,
        metric: Metric | None = None,
    ) -> asyncio.Task | None:
        try:
            text = read_clipboard()
        except Exception:
            logger.warning("Clipboard could not be read", exc_info=True)
            text = None
        if text is None:
            character.error = CharacterError.CLIPBOARD_ERROR
            return None
        return self.fetch_character(character, text, metric)

    def fetch_target_character(
        self,
        character: CharacterIdentity,
        target: GameTarget | None,
        metric: Metric | None = None,
    ) -> asyncio.Task | None:
        if target is None or not target.is_player_character or target.is_companion:
            character.error = CharacterError.INVALID_TARGET
            return None
        if not target.home_world:
            logger.error("Target %s has no home world", target.name)
            character.error = CharacterError.GENERIC_ERROR
            return None

        parts = target.name.split(" ")
        if len(parts) < 2:
            character.error = CharacterError.INVALID_TARGET
            return None
        character.set_info(parts[0], parts[1], target.home_world)
        return self.orchestrator.request_fetch(character, metric)
