import pytest

from arena_ladder.core.errors import NoCutoffDataError
from arena_ladder.models.cutoff import CutoffSource
from arena_ladder.services.cutoffs import (
    analyze_gaps,
    cutoffs_to_dict,
    enforce_order,
    extract_authoritative,
    fetch_reward_data,
    find_rating_gaps,
    percentile_cutoffs,
    resolve_cutoffs,
)
from helpers import players_with


def scenario_ladder():
    # Drop of 140 between rank 3 and rank 4, then a gentle slope.
    return players_with([3000, 2995, 2990, 2850, 2840] + [2837 - 3 * idx for idx in range(95)])


def smooth_ladder(count, top=3000, step=1):
    return players_with([top - idx * step for idx in range(count)])


def test_gap_analysis_places_r1_at_largest_early_drop():
    cutoffs = resolve_cutoffs(scenario_ladder(), bracket="3v3", region="us", season="12")

    assert cutoffs.source is CutoffSource.HEURISTIC
    r1 = cutoffs.get("r1")
    assert (r1.range_start, r1.range_end, r1.rating) == (1, 3, 2850)
    assert cutoffs.get("gladiator") is None
    assert cutoffs.total_players == 100


def test_gap_analysis_finds_gladiator_below_r1():
    ratings = [3000, 2995, 2990, 2850] + [2840 - 3 * idx for idx in range(30)]
    ratings += [ratings[-1] - 40 - 3 * idx for idx in range(60)]
    players = players_with(ratings)

    found = analyze_gaps(players)

    assert found["r1"] == {"rating": 2850, "rangeEnd": 3}
    assert found["gladiator"] == {"rating": ratings[34], "rangeEnd": 34}


def test_find_rating_gaps_ignores_ties():
    gaps = find_rating_gaps(players_with([2500, 2500, 2480, 2480]))
    assert [(gap.rank, gap.gap) for gap in gaps] == [(2, 20)]


def test_empty_snapshot_has_no_cutoffs():
    with pytest.raises(NoCutoffDataError) as exc_info:
        resolve_cutoffs([])
    assert exc_info.value.status_code == 404


def test_percentile_fallback_on_smooth_curve():
    cutoffs = resolve_cutoffs(smooth_ladder(1000))

    assert cutoffs.source is CutoffSource.PERCENTILE
    summary = {
        name: (tier.range_start, tier.range_end, tier.rating) for name, tier in cutoffs.tiers.items()
    }
    assert summary == {
        "r1": (1, 1, 3000),
        "gladiator": (2, 5, 2996),
        "duelist": (6, 30, 2971),
        "rival": (31, 100, 2901),
    }


@pytest.mark.parametrize("count", [1, 2, 3, 7, 150, 999, 5000, 60000])
def test_percentile_tiers_are_contiguous_and_ordered(count):
    tiers = enforce_order(percentile_cutoffs(smooth_ladder(count, top=100000)))

    r1 = tiers["r1"]
    assert r1.range_start == 1
    assert 1 <= r1.range_end <= 30
    if "gladiator" in tiers:
        gladiator = tiers["gladiator"]
        assert gladiator.range_start == r1.range_end + 1
        assert gladiator.range_end <= 200
        assert gladiator.rating <= r1.rating
    assert all(tier.range_end <= count for tier in tiers.values())


def test_percentile_on_tiny_population():
    tiers = percentile_cutoffs(players_with([2100, 2000]))
    assert tiers == {"r1": {"rating": 2100, "rangeEnd": 1}, "gladiator": {"rating": 2000, "rangeEnd": 2}}


def test_authoritative_reward_list_wins():
    players = smooth_ladder(100, step=5)
    rewards = {
        "rewards": [
            {"title": {"name": "Malevolent Gladiator"}, "rating": 2990, "rank": 2},
            {"name": "Gladiator", "rating_cutoff": 2900},
            {"name": "Duelist", "rank": 60},
            {"name": "Combatant", "rating": 1800},
        ]
    }

    cutoffs = resolve_cutoffs(players, rewards, bracket="3v3")

    assert cutoffs.source is CutoffSource.AUTHORITATIVE
    summary = {
        name: (tier.range_start, tier.range_end, tier.rating) for name, tier in cutoffs.tiers.items()
    }
    assert summary == {
        "r1": (1, 2, 2990),
        "gladiator": (3, 21, 2900),
        "duelist": (22, 60, 2705),
    }


def test_authoritative_cutoff_map_for_bracket():
    players = smooth_ladder(100, step=5)
    data = {"bracket_cutoffs": {"3v3": {"gladiator": {"min_rating": 2800, "max_rank": 40}}}}

    assert extract_authoritative(data, players, "3v3") == {"gladiator": {"rating": 2800, "rangeEnd": 40}}
    assert extract_authoritative(data, players, "2v2") == {}


@pytest.mark.parametrize(
    "payload",
    [
        {"rewards": "nope"},
        {"rewards": [{"name": "Gladiator", "rating": "n/a"}]},
        ["not", "a", "mapping"],
        {"cutoffs": {"gladiator": 2400}},
    ],
)
def test_malformed_reward_data_falls_through(payload):
    cutoffs = resolve_cutoffs(scenario_ladder(), payload)
    assert cutoffs.source is CutoffSource.HEURISTIC


def test_enforce_order_drops_inconsistent_tiers():
    tiers = enforce_order(
        {
            "r1": {"rating": 2900, "rangeEnd": 10},
            "gladiator": {"rating": 2950, "rangeEnd": 50},
            "duelist": {"rating": 2500, "rangeEnd": 5},
            "rival": {"rating": 2200, "rangeEnd": 400},
        }
    )

    assert list(tiers) == ["r1", "rival"]
    assert tiers["rival"].range_start == 11


def test_cutoffs_to_dict_shape():
    cutoffs = resolve_cutoffs(scenario_ladder(), bracket="3v3", region="eu", season="14")

    payload = cutoffs_to_dict(cutoffs)

    assert payload["r1"] == {"rating": 2850, "rangeStart": 1, "rangeEnd": 3}
    assert payload["source"] == "heuristic"
    metadata = payload["metadata"]
    assert metadata["totalPlayers"] == 100
    assert (metadata["region"], metadata["bracket"], metadata["season"]) == ("eu", "3v3", "14")
    assert metadata["timestamp"]


async def test_fetch_reward_data_probes_until_cutoffs_found(client, upstream):
    upstream.rewards["/data/wow/pvp-season/12"] = (200, {"id": 12, "season_name": "Season 12"})
    upstream.rewards["/data/wow/pvp-season/12/pvp-reward"] = (
        200,
        {"rewards": [{"name": "Gladiator", "rating": 2400}]},
    )

    data = await fetch_reward_data(client, "tok", "us", "12", "3v3")

    assert data == {"rewards": [{"name": "Gladiator", "rating": 2400}]}
    assert upstream.paths() == ["/data/wow/pvp-season/12", "/data/wow/pvp-season/12/pvp-reward"]


async def test_fetch_reward_data_returns_none_when_nothing_published(client, upstream):
    upstream.raise_on = "/pvp-reward"

    assert await fetch_reward_data(client, "tok", "us", "12", "3v3") is None
    assert len(upstream.requests) == 3


@pytest.mark.parametrize("title", ["Rank 10 Finisher", "Top rank 100", "Rank 1000 Banner"])
def test_lower_rank_titles_are_not_rank_one(title):
    players = smooth_ladder(100, step=5)

    found = extract_authoritative({"rewards": [{"name": title, "rank": 10}]}, players)

    assert found == {}


@pytest.mark.parametrize("title", ["Rank 1", "Rank-1 Gladiator: Season 12"])
def test_rank_one_titles(title):
    players = smooth_ladder(100, step=5)

    found = extract_authoritative({"rewards": [{"name": title, "rank": 2}]}, players)

    assert found == {"r1": {"rating": 2995, "rangeEnd": 2}}
