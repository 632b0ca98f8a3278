import pytest

from party_crawl.engine import effects as fx
from party_crawl.engine import phases
from party_crawl.engine.errors import ContractError
from party_crawl.engine.simultaneous import SimultaneousCoordinator

HANDS = {
    "p0": ["warrior_cleave"],
    "p1": ["cleric_mass_healing_word"],
    "p2": ["rogue_shadowstep"],
}


@pytest.fixture
def party(make_game):
    game = make_game("warrior", "cleric", "rogue", mode="simultaneous")
    for p in game.players:
        p.hand = list(HANDS[p.id])
    coordinator = SimultaneousCoordinator(game)
    for player_id, hand in HANDS.items():
        coordinator.select(player_id, hand[0])
    return game, coordinator


def _plays(game):
    return [e["message"] for e in game.log if " plays " in e["message"]]


def test_round_start_opens_a_slot_per_living_hero(make_game):
    game = make_game("warrior", "cleric", "rogue", mode="simultaneous")
    assert game.phase == phases.SELECT
    assert [s["player_id"] for s in game.selections] == ["p0", "p1", "p2"]
    assert all(len(p.hand) == 2 for p in game.players), "everyone draws at once"


def test_resolution_waits_for_every_ready(party):
    game, coordinator = party

    assert coordinator.ready("p0") is False
    assert coordinator.ready("p1") is False
    coordinator.unready("p1")
    assert coordinator.ready("p2") is False
    assert coordinator.maybe_resolve() is False, "one un-ready hero blocks resolution indefinitely"
    assert game.phase == phases.SELECT
    assert game.turn == 1
    assert _plays(game) == []

    assert coordinator.ready("p1") is True
    assert game.turn == 2


def test_batch_resolves_in_slot_order_not_ready_order(party):
    game, coordinator = party

    coordinator.ready("p2")
    coordinator.ready("p1")
    coordinator.ready("p0")

    assert _plays(game) == [
        "Hero0 plays Cleave.",
        "Hero1 plays Mass Healing Word.",
        "Hero2 plays Shadowstep.",
    ]


def test_ack_barrier_holds_until_every_client_is_current(party):
    game, coordinator = party
    coordinator.connect("sid-a")
    coordinator.connect("sid-b")
    for player_id in HANDS:
        coordinator.ready(player_id)
    assert game.turn == 1

    version = game.selection_version
    assert coordinator.ack("sid-a", version) is False
    assert coordinator.ack("sid-b", version - 1) is False, "a stale ack does not count"
    assert coordinator.ack("sid-b", version) is True
    assert game.turn == 2


def test_disconnect_releases_the_barrier(party):
    game, coordinator = party
    coordinator.connect("sid-a")
    coordinator.connect("sid-b")
    for player_id in HANDS:
        coordinator.ready(player_id)
    coordinator.ack("sid-a", game.selection_version)

    assert coordinator.disconnect("sid-b") is True
    assert game.turn == 2


def test_selection_rules(party):
    game, coordinator = party

    with pytest.raises(ContractError):
        coordinator.select("p0", "warrior_slash")
    coordinator.ready("p0")
    # a ready hero must un-ready before changing the selection
    with pytest.raises(ContractError):
        coordinator.select("p0", "warrior_cleave")
    with pytest.raises(ContractError):
        coordinator.ack("sid-unknown", 1)
    with pytest.raises(ContractError):
        coordinator.handle({"type": "shout"})

    game.phase = phases.RESOLVE
    with pytest.raises(ContractError):
        coordinator.unready("p0")


def test_ready_needs_a_selection(make_game):
    game = make_game("warrior", "cleric", mode="simultaneous")
    coordinator = SimultaneousCoordinator(game)
    with pytest.raises(ContractError):
        coordinator.ready("p0")


def test_handle_dispatches_messages(party):
    game, coordinator = party
    version = game.selection_version

    coordinator.handle({"type": "select", "player_id": "p0", "card_id": "warrior_cleave"})
    assert game.selection_version == version + 1
    assert coordinator.handle({"type": "ready", "player_id": "p0"}) is False
    coordinator.handle({"type": "unready", "player_id": "p0"})
    assert game.selections[0]["ready"] is False


def test_dead_target_is_replaced_during_the_batch(make_game):
    game = make_game("warrior", "cleric", mode="simultaneous")
    game.players[0].hand = ["warrior_slash"]
    game.players[1].hand = ["cleric_cure_wounds"]
    coordinator = SimultaneousCoordinator(game)
    coordinator.select("p0", "warrior_slash", "m1")
    coordinator.select("p1", "cleric_cure_wounds", "p0")
    game.monsters[1].hp = 0

    coordinator.ready("p0")
    coordinator.ready("p1")

    assert game.monsters[0].hp == 22
    assert game.turn == 2


def test_stunned_hero_is_marked_ready_and_skipped(make_game):
    game = make_game("warrior", "cleric", mode="simultaneous", start=False)
    fx.add_status(game.players[1], fx.make_status("stun", 1, 1))
    phases.start_round(game, 1)
    game.environment = None

    slot = game.selections[1]
    assert slot["stunned"] and slot["ready"]
    assert not fx.is_stunned(game.players[1])
    assert game.players[1].hand == []

    coordinator = SimultaneousCoordinator(game)
    game.players[0].hand = ["warrior_raise_shields"]
    coordinator.select("p0", "warrior_raise_shields")
    assert coordinator.ready("p0") is True


def test_coordinator_rejects_sequential_games(make_game):
    with pytest.raises(ContractError):
        SimultaneousCoordinator(make_game("warrior"))


def test_special_slot_rolls_no_aggro_like_a_sequential_special(make_game):
    sequential = make_game("warrior")
    sequential.players[0].resource = sequential.players[0].resource_max
    phases.use_special_ability(sequential, "p0")

    batch = make_game("warrior", mode="simultaneous")
    batch.players[0].resource = batch.players[0].resource_max
    coordinator = SimultaneousCoordinator(batch)
    coordinator.select("p0", None, special=True)
    assert coordinator.ready("p0") is True

    for game in (sequential, batch):
        assert not [e for e in game.log if "for aggro" in e["message"]]
    assert [m.hp for m in batch.monsters] == [m.hp for m in sequential.monsters]
    assert batch.roll_counter == sequential.roll_counter, "both modes consume the same rolls"
