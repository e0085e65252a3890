# tests/helpers.py

import re
from typing import Any, Dict, List, Optional, Tuple

import httpx

from arena_ladder.models import PlayerEntry

LEADERBOARD_PATH = re.compile(r"^/data/wow/pvp-season/(\w+)/pvp-leaderboard/(\w+)$")
PROFILE_PATH = re.compile(r"^/profile/wow/character/([^/]+)/([^/]+)(/specializations)?$")


def make_player(rank: int, rating: int, **fields: Any) -> PlayerEntry:
    fields.setdefault("player_name", f"Player{rank}")
    return PlayerEntry(rank=rank, rating=rating, **fields)


def players_with(ratings: List[int]) -> List[PlayerEntry]:
    return [make_player(idx + 1, rating) for idx, rating in enumerate(ratings)]


def blizzard_entry(
    rank: int,
    rating: int,
    name: Optional[str] = None,
    realm: str = "area-52",
    race: Optional[str] = "Orc",
    character_class: Optional[str] = "Warrior",
    faction: Optional[str] = "HORDE",
    won: int = 100,
    lost: int = 40,
) -> Dict[str, Any]:
    character: Dict[str, Any] = {"id": rank, "realm": {"id": 3676, "slug": realm}}
    if name is not None:
        character["name"] = name
    if race is not None:
        character["race"] = {"id": 2, "name": race}
    if character_class is not None:
        character["character_class"] = {"id": 1, "name": character_class}
    entry: Dict[str, Any] = {
        "character": character,
        "rank": rank,
        "rating": rating,
        "season_match_statistics": {"played": won + lost, "won": won, "lost": lost},
    }
    if faction is not None:
        entry["faction"] = {"type": faction}
        character["faction"] = {"type": faction}
    return entry


def ladder_entries(count: int, top: int = 2900, step: int = 3) -> List[Dict[str, Any]]:
    return [
        blizzard_entry(idx + 1, top - idx * step, name=f"Gladiator{idx + 1}")
        for idx in range(count)
    ]


class FakeBlizzard:
    """Routes Battle.net requests to canned answers and records every request."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.token_response: Tuple[int, Any] = (200, {"access_token": "tok", "token_type": "bearer"})
        # (season, namespace prefix) -> (status, payload); prefix is "classic" or "retail"
        self.leaderboards: Dict[Tuple[str, str], Tuple[int, Any]] = {}
        self.profiles: Dict[Tuple[str, str], Tuple[int, Any]] = {}
        self.specializations: Dict[Tuple[str, str], Tuple[int, Any]] = {}
        self.rewards: Dict[str, Tuple[int, Any]] = {}
        self.raise_on: Optional[str] = None

    def leaderboard(self, season: str, entries: List[Dict[str, Any]], namespace: str = "classic") -> None:
        self.leaderboards[(season, namespace)] = (200, {"season": {"id": int(season)}, "entries": entries})

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if self.raise_on and self.raise_on in path:
            raise httpx.ConnectError("boom", request=request)

        if path == "/oauth/token":
            status, payload = self.token_response
            return httpx.Response(status, json=payload)

        match = LEADERBOARD_PATH.match(path)
        if match:
            namespace = request.url.params.get("namespace", "")
            kind = "classic" if "classic" in namespace else "retail"
            status, payload = self.leaderboards.get((match.group(1), kind), (404, {"detail": "Not Found"}))
            return httpx.Response(status, json=payload)

        match = PROFILE_PATH.match(path)
        if match:
            key = (match.group(1), match.group(2))
            table = self.specializations if match.group(3) else self.profiles
            status, payload = table.get(key, (404, {"detail": "Not Found"}))
            return httpx.Response(status, json=payload)

        status, payload = self.rewards.get(path, (404, {"detail": "Not Found"}))
        return httpx.Response(status, json=payload)

    def paths(self, fragment: str = "") -> List[str]:
        return [request.url.path for request in self.requests if fragment in request.url.path]

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


