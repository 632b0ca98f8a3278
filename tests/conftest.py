"""Shared builders for party combat scenarios."""

from __future__ import annotations

import pytest

from party_crawl import state
from party_crawl.engine.models import MonsterState
from party_crawl.engine.phases import new_game, start_round


def _make_game(*class_ids, mode="sequential", seed=123, start=True, environment=None):
    roster = [
        {"name": f"Hero{i}", "class_id": class_id, "champion_id": f"champ{i}"}
        for i, class_id in enumerate(class_ids)
    ]
    game = new_game("test-room", roster, mode=mode, seed=seed)
    if start:
        start_round(game, 1)
        game.environment = environment
    return game


def _make_monster(monster_id="m0", hp=50, name="Dummy", **kwargs):
    return MonsterState(
        id=monster_id,
        name=name,
        template_id="goblin",
        level=1,
        hp=hp,
        hp_max=hp,
        **kwargs,
    )


@pytest.fixture
def make_game():
    return _make_game


@pytest.fixture
def make_monster():
    return _make_monster


@pytest.fixture(autouse=True)
def clean_rooms():
    yield
    state.lobbies.clear()
    state.party_rooms.clear()
    state.sid_to_room.clear()
