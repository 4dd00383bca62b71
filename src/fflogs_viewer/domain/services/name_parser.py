from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass


_NOISE_PHRASES = ("'s party for", "You join")
_BRACKETED_RE = re.compile(r"\[.*?\]")
_DISALLOWED_RE = re.compile(r"[^A-Za-z '-]")
_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class ParsedName:
    first_name: str
    last_name: str
    world_name: str


def tokenize_character_text(raw_text: str) -> list[str]:
    text = str(raw_text or "")
    for phrase in _NOISE_PHRASES:
        text = text.replace(phrase, " ")
    text = _BRACKETED_RE.sub(" ", text)
    text = _DISALLOWED_RE.sub(" ", text)
    # Party list entries glue names and worlds together ("JaneDoeGaia").
    text = "".join(f" {char}" if char.isupper() else char for char in text)
    text = _WHITESPACE_RE.sub(" ", text)
    return text.split()


def _find_world_index(words: Sequence[str], valid_worlds: Sequence[str]) -> int:
    for world in valid_worlds:
        if world in words:
            return list(words).index(world)
    return -1


def parse_character_text(
    raw_text: str,
    valid_worlds: Sequence[str],
    local_player_world: str | None = None,
) -> ParsedName | None:
    """Best-effort extraction of "First Last World" from chat or UI text.

    Worlds are tried in the order given; the two words before the first world
    found are the name. Without a usable world the first two words are taken
    and the local player's world is assumed.
    """
    words = tokenize_character_text(raw_text)
    index = _find_world_index(words, valid_worlds)

    if index >= 2:
        parsed = ParsedName(words[index - 2], words[index - 1], words[index])
    elif len(words) >= 2:
        if not local_player_world:
            return None
        parsed = ParsedName(words[0], words[1], local_player_world)
    else:
        return None

    if not parsed.first_name[0].isupper() or not parsed.last_name[0].isupper():
        return None
    return parsed
