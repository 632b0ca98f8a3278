# party_crawl/engine/monster_ai.py
import copy
import math
from typing import Any, Dict, List, Optional

from loguru import logger

from . import effects as fx
from . import journal
from .applicator import apply_effect, heal_combatant, new_outcome
from .dice import next_rng, roll
from .errors import ContractError
from .models import MonsterState
from .pipeline import gain_when_hit
from .rules import scaled
from .targeting import pick_target, random_target
from ..content.balance import DEFAULTS, ELITE
from ..content.monsters import MONSTERS, ROUNDS

ELITE_MODIFIERS = ("fast", "enraged", "regenerating", "shielded")


def scaled_hp(base_hp: int, level: int) -> int:
    return int(math.floor(base_hp * (1 + (level - 1) * 0.5)))


def create_monster(template_id: str, level: int, index: int, elite: Optional[str] = None) -> MonsterState:
    template = MONSTERS.get(template_id)
    if template is None:
        raise ContractError(f"unknown monster template {template_id!r}")
    if elite is not None and elite not in ELITE_MODIFIERS:
        raise ContractError(f"unknown elite modifier {elite!r}")
    hp = scaled_hp(template["base_hp"], level)
    name = template["name"] if elite is None else f"{elite.title()} {template['name']}"
    return MonsterState(
        id=f"m{index}",
        name=name,
        template_id=template_id,
        level=level,
        hp=hp,
        hp_max=hp,
        abilities=copy.deepcopy(template["abilities"]),
        elite=elite,
        gold_reward=template["gold"] * level,
        xp_reward=template["xp"] * level,
    )


def spawn_round(round_number: int) -> List[MonsterState]:
    layout = ROUNDS[min(round_number, len(ROUNDS)) - 1]
    return [
        create_monster(entry["template_id"], entry["level"], i, entry.get("elite"))
        for i, entry in enumerate(layout["monsters"])
    ]


def lookup_ability(monster, rolled: int) -> Dict[str, Any]:
    for ability in monster.abilities:
        if ability.get("roll") == rolled:
            return ability
    return monster.abilities[0]


def roll_intent(game, monster) -> Optional[Dict[str, Any]]:
    if not monster.alive or not monster.abilities:
        monster.intent = None
        return None
    rolled = roll(DEFAULTS["intent_die"], next_rng(game, f"intent:{monster.id}"))
    monster.intent = dict(lookup_ability(monster, rolled))
    return monster.intent


def roll_intents(game) -> None:
    for monster in game.monsters:
        roll_intent(game, monster)


def choose_ability(game, monster, first_action: bool) -> Dict[str, Any]:
    if first_action and monster.intent:
        return monster.intent
    rolled = roll(DEFAULTS["intent_die"], next_rng(game, f"ability:{monster.id}"))
    return lookup_ability(monster, rolled)


def _targets_for(game, monster, ability) -> List[Any]:
    mode = ability.get("target", "single")
    if mode == "all":
        living = game.living_players()
        visible = [p for p in living if not fx.is_stealthed(p)]
        if visible:
            return visible
        fallback = pick_target(game)
        return [fallback] if fallback else []
    if mode == "random":
        target = random_target(game, f"random:{monster.id}")
        return [target] if target else []
    target = pick_target(game)
    return [target] if target else []


def execute_ability(game, monster, ability: Dict[str, Any]) -> Dict[str, Any]:
    outcome = new_outcome()
    damage = int(ability.get("damage", 0) or 0)
    journal.log(game, f"{monster.name} uses {ability.get('name', 'an attack')}!", "monster")
    journal.action_message(game, f"{monster.name}: {ability.get('name', 'attack')}")

    if damage < 0:
        healed = heal_combatant(game, monster, -damage)
        if healed:
            journal.log(game, f"{monster.name} heals {healed} HP.", "heal", sub=True)
        return outcome

    targets = _targets_for(game, monster, ability)
    if monster.elite == "enraged" and damage > 0:
        damage = scaled(damage, ELITE["enraged_mult"])
    debuff = ability.get("debuff")
    for target in targets:
        if not target.alive:
            continue
        if damage > 0:
            before = len(outcome["hits"])
            apply_effect(game, {"type": "damage", "value": damage, "target": "monster"}, monster, target.id, outcome)
            for _, dealt in outcome["hits"][before:]:
                gain_when_hit(target, dealt)
            if outcome["missed"]:
                outcome["missed"] = False
                continue
        if debuff and target.alive:
            effect = {
                "type": debuff["type"],
                "value": debuff.get("value", 1),
                "duration": debuff.get("duration", 1),
                "target": "monster",
            }
            apply_effect(game, effect, monster, target.id, outcome)
    return outcome


def monster_turn(game) -> None:
    """Every living monster takes its action slot(s) in list order."""
    for monster in game.monsters:
        if not monster.alive:
            continue
        if not game.living_players():
            return
        if fx.is_stunned(monster):
            journal.log(game, f"{monster.name} is stunned and cannot act!", "debuff")
            fx.tick_action_tracked(monster)
            continue
        actions = ELITE["fast_actions"] if monster.elite == "fast" else 1
        for i in range(actions):
            if not monster.alive or not game.living_players():
                break
            ability = choose_ability(game, monster, first_action=(i == 0))
            execute_ability(game, monster, ability)
        fx.tick_action_tracked(monster)
        logger.debug("{} acted {} time(s) in room {}", monster.id, actions, game.room_id)


def elite_upkeep(game, monster) -> None:
    """Regenerating and shielded elites recover at debuff resolution."""
    if not monster.alive:
        return
    if monster.elite == "regenerating":
        healed = heal_combatant(game, monster, ELITE["regenerating_heal"])
        if healed:
            journal.log(game, f"{monster.name} regenerates {healed} HP.", "heal", sub=True)
    elif monster.elite == "shielded":
        cap = scaled(monster.hp_max, ELITE["shielded_max_pct"])
        gain = min(scaled(monster.hp_max, ELITE["shielded_regen_pct"]), max(0, cap - monster.shield))
        if gain > 0:
            monster.shield += gain
            journal.log(game, f"{monster.name}'s barrier grows by {gain}.", "buff", sub=True)
