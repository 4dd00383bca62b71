from __future__ import annotations

from collections.abc import Mapping, Sequence

from fflogs_viewer.domain.models.world import World
from fflogs_viewer.domain.repositories import WorldRepository


DATA_CENTER_REGIONS: Mapping[str, str] = {
    "Aether": "NA",
    "Primal": "NA",
    "Crystal": "NA",
    "Dynamis": "NA",
    "Chaos": "EU",
    "Light": "EU",
    "Elemental": "JP",
    "Gaia": "JP",
    "Mana": "JP",
    "Meteor": "JP",
    "Materia": "OC",
}

_WORLDS_BY_DATA_CENTER: Mapping[str, Sequence[tuple[int, str]]] = {
    "Aether": (
        (73, "Adamantoise"), (79, "Cactuar"), (54, "Faerie"), (63, "Gilgamesh"),
        (40, "Jenova"), (65, "Midgardsormr"), (99, "Sargatanas"), (57, "Siren"),
    ),
    "Primal": (
        (78, "Behemoth"), (93, "Excalibur"), (53, "Exodus"), (35, "Famfrit"),
        (95, "Hyperion"), (55, "Lamia"), (64, "Leviathan"), (77, "Ultros"),
    ),
    "Crystal": (
        (91, "Balmung"), (34, "Brynhildr"), (74, "Coeurl"), (62, "Diabolos"),
        (81, "Goblin"), (75, "Malboro"), (37, "Mateus"), (41, "Zalera"),
    ),
    "Dynamis": (
        (408, "Cuchulainn"), (411, "Golem"), (406, "Halicarnassus"), (409, "Kraken"),
        (407, "Maduin"), (404, "Marilith"), (410, "Rafflesia"), (405, "Seraph"),
    ),
    "Chaos": (
        (80, "Cerberus"), (83, "Louisoix"), (71, "Moogle"), (39, "Omega"),
        (401, "Phantom"), (97, "Ragnarok"), (400, "Sagittarius"), (85, "Spriggan"),
    ),
    "Light": (
        (402, "Alpha"), (36, "Lich"), (66, "Odin"), (56, "Phoenix"),
        (403, "Raiden"), (67, "Shiva"), (33, "Twintania"), (42, "Zodiark"),
    ),
    "Elemental": (
        (90, "Aegis"), (68, "Atomos"), (45, "Carbuncle"), (58, "Garuda"),
        (94, "Gungnir"), (49, "Kujata"), (72, "Tonberry"), (50, "Typhon"),
    ),
    "Gaia": (
        (43, "Alexander"), (69, "Bahamut"), (92, "Durandal"), (46, "Fenrir"),
        (59, "Ifrit"), (98, "Ridill"), (76, "Tiamat"), (51, "Ultima"),
    ),
    "Mana": (
        (44, "Anima"), (23, "Asura"), (70, "Chocobo"), (47, "Hades"),
        (48, "Ixion"), (96, "Masamune"), (28, "Pandaemonium"), (61, "Titan"),
    ),
    "Meteor": (
        (24, "Belias"), (82, "Mandragora"), (60, "Ramuh"), (29, "Shinryu"),
        (30, "Unicorn"), (52, "Valefor"), (31, "Yojimbo"), (32, "Zeromus"),
    ),
    "Materia": (
        (22, "Bismarck"), (21, "Ravana"), (86, "Sephirot"), (87, "Sophia"),
        (88, "Zurvan"),
    ),
}


def _build_worlds() -> tuple[World, ...]:
    worlds: list[World] = []
    for data_center, rows in _WORLDS_BY_DATA_CENTER.items():
        region = DATA_CENTER_REGIONS[data_center]
        for world_id, name in rows:
            worlds.append(World(id=world_id, name=name, data_center=data_center, region=region))
    return tuple(worlds)


SUPPORTED_WORLDS: Sequence[World] = _build_worlds()


class WorldCatalog(WorldRepository):
    def __init__(self, worlds: Sequence[World] = SUPPORTED_WORLDS) -> None:
        self._worlds = tuple(worlds)
        self._by_name = {world.name.lower(): world for world in self._worlds}
        self._by_id = {world.id: world for world in self._worlds}

    def get(self, world_id: int) -> World | None:
        return self._by_id.get(world_id)

    def find(self, world_name: str | None) -> World | None:
        return self._by_name.get(str(world_name or "").strip().lower())

    def resolve(self, world_name: str) -> str | None:
        world = self.find(world_name)
        return world.region if world is not None else None

    def valid_world_names(self) -> list[str]:
        return [world.name for world in self._worlds]
