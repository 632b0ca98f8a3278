import pytest

from party_crawl.engine import effects as fx
from party_crawl.engine.applicator import apply_effect, deal_damage, resolve_statuses
from party_crawl.engine.errors import ContractError


def _hit(value, target="monster"):
    return {"type": "damage", "value": value, "target": target}


def test_warrior_shield_absorbs_monster_hit_first(make_game):
    game = make_game("warrior")
    warrior, goblin = game.players[0], game.monsters[0]
    warrior.shield = 10

    apply_effect(game, _hit(15), goblin, warrior.id)

    assert warrior.shield == 0
    assert warrior.hp == 115


@pytest.mark.parametrize("damage,shield", [(5, 10), (10, 10), (15, 10), (30, 0), (7, 3)])
def test_shield_then_hp(make_game, damage, shield):
    game = make_game("warrior")
    warrior = game.players[0]
    warrior.shield = shield

    deal_damage(game, warrior, damage, "test")

    assert warrior.shield == max(0, shield - damage)
    assert warrior.hp == 120 - max(0, damage - shield)


def test_weakness_reduces_outgoing_before_shield(make_game):
    game = make_game("warrior")
    warrior, goblin = game.players[0], game.monsters[0]
    warrior.shield = 5
    fx.add_status(goblin, fx.make_status("weakness", 3, 1))

    apply_effect(game, _hit(10), goblin, warrior.id)

    assert (warrior.shield, warrior.hp) == (0, 118)


def test_block_and_vulnerable(make_game):
    game = make_game("warrior")
    warrior, goblin = game.players[0], game.monsters[0]

    fx.add_status(warrior, fx.make_status("block", 1, 1))
    apply_effect(game, _hit(15), goblin, warrior.id)
    assert warrior.hp == 120, "block nullifies a direct hit"

    fx.remove_status(warrior, "block")
    fx.add_status(warrior, fx.make_status("vulnerable", 1, 1))
    apply_effect(game, _hit(10), goblin, warrior.id)
    assert warrior.hp == 105


def test_accuracy_penalty_can_force_a_miss(make_game):
    game = make_game("warrior")
    warrior, goblin = game.players[0], game.monsters[0]
    fx.add_status(goblin, fx.make_status("accuracy", 20, 1))

    outcome = apply_effect(game, _hit(10), goblin, warrior.id)

    assert outcome["missed"] is True
    assert warrior.hp == 120


def test_survive_lethal_reprieves_once(make_game):
    game = make_game("warrior")
    warrior, goblin = game.players[0], game.monsters[0]
    warrior.hp = 5
    fx.add_status(warrior, fx.make_status("survive_lethal", 1, 2))

    apply_effect(game, _hit(20), goblin, warrior.id)
    assert warrior.hp == 1
    assert not fx.has_status(warrior, "survive_lethal"), "the reprieve consumes itself"

    apply_effect(game, _hit(20), goblin, warrior.id)
    assert warrior.hp == 0
    assert not warrior.alive


def test_heal_never_targets_the_dead(make_game):
    game = make_game("cleric", "warrior")
    cleric, warrior = game.players
    warrior.hp = 0
    cleric.hp = 50

    with pytest.raises(ContractError):
        apply_effect(game, {"type": "heal", "value": 10, "target": "ally"}, cleric, warrior.id)

    apply_effect(game, {"type": "heal", "value": 5, "target": "allAllies"}, cleric)
    assert cleric.hp == 55
    assert warrior.hp == 0


def test_heal_clamps_at_max(make_game):
    game = make_game("cleric")
    cleric = game.players[0]
    cleric.hp = cleric.hp_max - 3

    outcome = apply_effect(game, {"type": "heal", "value": 12, "target": "self"}, cleric)

    assert cleric.hp == cleric.hp_max
    assert outcome["heal"] == 3


def test_stealthed_heroes_are_skipped_by_area_attacks(make_game):
    game = make_game("warrior", "rogue")
    warrior, rogue = game.players
    goblin = game.monsters[0]
    fx.add_status(rogue, fx.make_status("stealth", 1, 1))

    apply_effect(game, _hit(3, "allMonsters"), goblin)

    assert warrior.hp == 117
    assert rogue.hp == rogue.hp_max


def test_kill_splits_gold_and_grants_xp(make_game):
    game = make_game("warrior", "cleric", "rogue")
    goblin = game.monsters[0]
    goblin.hp = 1

    outcome = apply_effect(game, _hit(5), game.players[0], goblin.id)

    assert not goblin.alive
    assert [p.gold for p in game.players] == [2, 1, 1], "remainder goes to the first heroes"
    assert game.gold_deltas == {"p0": 2, "p1": 1, "p2": 1}
    assert game.xp_grants == {"champ0": 10, "champ1": 10, "champ2": 10}
    assert outcome["kills"] == [goblin.id]


def test_environment_scales_dot_but_not_direct_hits(make_game):
    game = make_game("mage")
    game.environment = "volcano"
    goblin = game.monsters[0]
    fx.add_status(goblin, fx.make_status("burn", 4, 2))

    resolve_statuses(game, goblin)
    assert goblin.hp == 30 - 6
    assert fx.get_status(goblin, "burn")["duration"] == 1

    apply_effect(game, _hit(10), game.players[0], goblin.id)
    assert goblin.hp == 24 - 10


def test_single_target_effect_without_target_fails_closed(make_game):
    game = make_game("warrior")
    with pytest.raises(ContractError):
        apply_effect(game, _hit(8), game.players[0])
    with pytest.raises(ContractError):
        apply_effect(game, _hit(8), game.players[0], "m9")
