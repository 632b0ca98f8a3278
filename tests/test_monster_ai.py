import pytest

from party_crawl.engine import effects as fx
from party_crawl.engine import monster_ai
from party_crawl.engine.errors import ContractError


def _solo_monster(game, elite=None, template_id="goblin", level=1):
    monster = monster_ai.create_monster(template_id, level, 0, elite)
    game.monsters = [monster]
    return monster


def _intent(damage, target="single", **extra):
    return dict({"roll": 99, "name": "Test Smash", "damage": damage, "target": target}, **extra)


def _uses(game, monster):
    return [e for e in game.log if e["message"].startswith(f"{monster.name} uses ")]


def test_create_monster_scales_with_level():
    orc = monster_ai.create_monster("orc_warlord", 2, 1)
    assert orc.id == "m1"
    assert orc.hp == orc.hp_max == 225
    assert orc.gold_reward == 30
    assert orc.xp_reward == 120

    with pytest.raises(ContractError):
        monster_ai.create_monster("beholder", 1, 0)
    with pytest.raises(ContractError):
        monster_ai.create_monster("goblin", 1, 0, "sleepy")


def test_spawn_round_applies_elites():
    troll, orc = monster_ai.spawn_round(2)
    assert (troll.elite, orc.elite) == ("regenerating", "enraged")
    assert troll.name == "Regenerating Troll"


def test_lookup_defaults_to_first_ability():
    goblin = monster_ai.create_monster("goblin", 1, 0)
    assert monster_ai.lookup_ability(goblin, 42) is goblin.abilities[0]
    assert monster_ai.lookup_ability(goblin, 3)["name"] == "Stab"


def test_intent_is_used_for_the_first_action(make_game):
    game = make_game("warrior")
    warrior = game.players[0]
    goblin = _solo_monster(game)
    goblin.intent = _intent(7)

    monster_ai.monster_turn(game)

    assert warrior.hp == 113
    assert warrior.resource == 1, "warriors build rage when hit"
    assert [e["message"] for e in _uses(game, goblin)] == ["Goblin uses Test Smash!"]


def test_stunned_monster_loses_its_slot_and_consumes_the_stun(make_game):
    game = make_game("warrior")
    goblin = _solo_monster(game)
    goblin.intent = _intent(7)
    fx.add_status(goblin, fx.make_status("stun", 1, 1))

    monster_ai.monster_turn(game)

    assert game.players[0].hp == 120
    assert not fx.is_stunned(goblin)
    assert _uses(game, goblin) == []


def test_enraged_multiplies_outgoing_damage(make_game):
    game = make_game("warrior")
    goblin = _solo_monster(game, elite="enraged")
    goblin.intent = _intent(10)

    monster_ai.monster_turn(game)

    assert game.players[0].hp == 105


def test_fast_monster_acts_twice(make_game):
    game = make_game("warrior")
    goblin = _solo_monster(game, elite="fast")
    goblin.intent = _intent(0)

    monster_ai.monster_turn(game)

    assert len(_uses(game, goblin)) == 2
    assert _uses(game, goblin)[0]["message"].endswith("Test Smash!")


def test_negative_damage_heals_the_monster(make_game):
    game = make_game("warrior")
    goblin = _solo_monster(game)
    goblin.hp = 20
    goblin.intent = _intent(-8)

    monster_ai.monster_turn(game)

    assert goblin.hp == 28
    assert game.players[0].hp == 120


def test_monster_debuffs_stack(make_game):
    game = make_game("warrior")
    goblin = _solo_monster(game)
    spit = _intent(0, debuff={"type": "poison", "value": 2, "duration": 2})

    monster_ai.execute_ability(game, goblin, spit)
    monster_ai.execute_ability(game, goblin, spit)

    poison = [e for e in game.players[0].debuffs if e["type"] == "poison"]
    assert len(poison) == 1
    assert (poison[0]["value"], poison[0]["duration"]) == (2, 4)


def test_single_target_respects_taunt_and_all_hits_everyone(make_game):
    game = make_game("warrior", "cleric")
    warrior, cleric = game.players
    goblin = _solo_monster(game)
    fx.add_status(cleric, fx.make_status("taunt", 1, 1))

    monster_ai.execute_ability(game, goblin, _intent(5))
    assert (warrior.hp, cleric.hp) == (120, 70)

    monster_ai.execute_ability(game, goblin, _intent(4, target="all"))
    assert (warrior.hp, cleric.hp) == (116, 66)


def test_regenerating_and_shielded_upkeep(make_game):
    game = make_game("warrior")
    troll = monster_ai.create_monster("goblin", 1, 0, "regenerating")
    troll.hp = 10
    monster_ai.elite_upkeep(game, troll)
    assert troll.hp == 20

    dragon = monster_ai.create_monster("dragon", 3, 1, "shielded")
    assert dragon.hp_max == 500
    shields = []
    for _ in range(3):
        monster_ai.elite_upkeep(game, dragon)
        shields.append(dragon.shield)
    assert shields == [50, 100, 100], "shield regen stops at 20% of max HP"


def test_intents_are_rolled_for_every_living_monster(make_game):
    game = make_game("warrior")
    assert all(m.intent is not None for m in game.monsters)
    game.monsters[0].hp = 0
    monster_ai.roll_intents(game)
    assert game.monsters[0].intent is None
    assert game.monsters[1].intent in game.monsters[1].abilities
