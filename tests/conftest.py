import pytest

from arena_ladder.services import BattleNetClient, LadderService
from helpers import FakeBlizzard


@pytest.fixture
def upstream() -> FakeBlizzard:
    return FakeBlizzard()


@pytest.fixture
def client(upstream: FakeBlizzard) -> BattleNetClient:
    return BattleNetClient("client-id", "client-secret", timeout=5, transport=upstream.transport)


@pytest.fixture
def service(client: BattleNetClient) -> LadderService:
    return LadderService(
        client,
        default_season="12",
        fallback_seasons=["1", "12", "13", "14", "15"],
        enrich_top_n=5,
        enrich_batch_size=2,
        enrich_batch_delay=0,
    )
