"""Static World of Warcraft lookup tables (Mists of Pandaria Classic)."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Tuple

REGIONS: Tuple[str, ...] = ("us", "eu")
BRACKETS: Tuple[str, ...] = ("2v2", "3v3", "5v5")

UNKNOWN = "Unknown"
ALLIANCE = "Alliance"
HORDE = "Horde"

CLASSES: Tuple[str, ...] = (
    "Death Knight",
    "Druid",
    "Hunter",
    "Mage",
    "Monk",
    "Paladin",
    "Priest",
    "Rogue",
    "Shaman",
    "Warlock",
    "Warrior",
)

SPECS: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {
        "Death Knight": ("Blood", "Frost", "Unholy"),
        "Druid": ("Balance", "Feral", "Guardian", "Restoration"),
        "Hunter": ("Beast Mastery", "Marksmanship", "Survival"),
        "Mage": ("Arcane", "Fire", "Frost"),
        "Monk": ("Brewmaster", "Mistweaver", "Windwalker"),
        "Paladin": ("Holy", "Protection", "Retribution"),
        "Priest": ("Discipline", "Holy", "Shadow"),
        "Rogue": ("Assassination", "Combat", "Subtlety"),
        "Shaman": ("Elemental", "Enhancement", "Restoration"),
        "Warlock": ("Affliction", "Demonology", "Destruction"),
        "Warrior": ("Arms", "Fury", "Protection"),
    }
)

# Pandaren pick a side in game, so the race alone cannot name a faction.
RACE_FACTIONS: Mapping[str, str] = MappingProxyType(
    {
        "Human": ALLIANCE,
        "Dwarf": ALLIANCE,
        "Night Elf": ALLIANCE,
        "Gnome": ALLIANCE,
        "Draenei": ALLIANCE,
        "Worgen": ALLIANCE,
        "Orc": HORDE,
        "Undead": HORDE,
        "Tauren": HORDE,
        "Troll": HORDE,
        "Blood Elf": HORDE,
        "Goblin": HORDE,
    }
)

FACTION_TYPES: Mapping[str, str] = MappingProxyType(
    {"ALLIANCE": ALLIANCE, "HORDE": HORDE}
)

CLASS_COLORS: Mapping[str, str] = MappingProxyType(
    {
        "Death Knight": "#C41E3A",
        "Druid": "#FF7C0A",
        "Hunter": "#AAD372",
        "Mage": "#3FC7EB",
        "Monk": "#00FF98",
        "Paladin": "#F48CBA",
        "Priest": "#FFFFFF",
        "Rogue": "#FFF468",
        "Shaman": "#0070DD",
        "Warlock": "#8788EE",
        "Warrior": "#C69B6D",
    }
)


def faction_for(race: str | None, faction_type: str | None = None) -> str:
    """Resolve a faction from the upstream faction type, then the race."""

    if faction_type:
        resolved = FACTION_TYPES.get(str(faction_type).upper())
        if resolved:
            return resolved
        if faction_type in (ALLIANCE, HORDE):
            return faction_type
    if race:
        return RACE_FACTIONS.get(race, UNKNOWN)
    return UNKNOWN


__all__ = [
    "ALLIANCE",
    "BRACKETS",
    "CLASSES",
    "CLASS_COLORS",
    "FACTION_TYPES",
    "HORDE",
    "RACE_FACTIONS",
    "REGIONS",
    "SPECS",
    "UNKNOWN",
    "faction_for",
]
