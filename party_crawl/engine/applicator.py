# party_crawl/engine/applicator.py
"""Effect Applicator: one effect description against the current game.

Sides are relative to the actor: for a hero "ally" means the party and
"monster" means the monsters; for a monster it is the other way round.
Mutation happens in place on the single authoritative GameState.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from loguru import logger

from . import effects as fx
from . import journal
from .dice import next_rng, roll
from .errors import ContractError
from .rules import scaled, split_evenly
from ..content.balance import DEFAULTS
from ..content.environments import ENVIRONMENTS

SINGLE_TARGET_KINDS = ("ally", "monster")


def new_outcome() -> Dict[str, Any]:
    return {
        "damage": 0,      # dealt to the opposing side, shield included
        "heal": 0,
        "shield": 0,
        "hits": [],       # (target_id, damage) per hostile hit
        "kills": [],
        "xp": {},
        "missed": False,
    }


def sides(game, actor):
    if actor.is_player:
        return game.players, game.monsters
    return game.monsters, game.players


def environment_mult(game, key: str) -> float:
    env = ENVIRONMENTS.get(game.environment or "", {})
    return float(env.get("modifiers", {}).get(key, 1.0))


def legal_targets(game, actor, kind: str) -> List[Any]:
    friends, foes = sides(game, actor)
    if kind in ("ally", "allAllies"):
        return [c for c in friends if c.alive]
    if kind in ("monster", "allMonsters"):
        return [c for c in foes if c.alive and not fx.is_stealthed(c)]
    if kind == "self":
        return [actor] if actor.alive else []
    return []


def resolve_targets(game, effect: Dict[str, Any], actor, target_id: Optional[str]) -> List[Any]:
    kind = effect.get("target", "self")
    if kind == "self":
        return [actor]
    if kind in SINGLE_TARGET_KINDS:
        if target_id is None:
            raise ContractError(f"{effect.get('type')} needs a {kind} target")
        friends, foes = sides(game, actor)
        pool = friends if kind == "ally" else foes
        for c in pool:
            if c.id == target_id and c.alive:
                return [c]
        raise ContractError(f"{target_id} is not a legal {kind} target")
    if kind in ("allAllies", "allMonsters"):
        return legal_targets(game, actor, kind)
    logger.warning("unknown effect target kind {!r} on {}", kind, effect)
    return []


def deal_damage(game, target, amount: int, source: str, kind: str = "damage", direct: bool = True) -> Dict[str, int]:
    """Shield absorbs first, the rest comes off HP (floored at 0).

    Direct hits respect block and vulnerable; DoT ticks and self-inflicted
    damage skip both.
    """
    result = {"dealt": 0, "absorbed": 0, "hp_damage": 0, "blocked": 0}
    if amount <= 0 or not target.alive:
        return result
    if direct and fx.has_status(target, "block"):
        result["blocked"] = amount
        journal.log(game, f"{target.name} blocks the attack from {source}.", "buff", sub=True)
        journal.damage_number(game, target.id, 0, "blocked")
        return result
    if direct and fx.has_status(target, "vulnerable"):
        amount = scaled(amount, DEFAULTS["vulnerable_mult"])

    absorbed = min(target.shield, amount)
    target.shield -= absorbed
    remaining = amount - absorbed
    target.hp = max(0, target.hp - remaining)
    result.update(dealt=amount, absorbed=absorbed, hp_damage=remaining)

    if target.hp == 0 and remaining > 0 and fx.has_status(target, "survive_lethal"):
        target.hp = 1
        fx.remove_status(target, "survive_lethal")
        journal.log(game, f"{target.name} refuses to fall and clings on at 1 HP!", "buff", sub=True)

    journal.damage_number(game, target.id, amount, kind)
    return result


def heal_combatant(game, target, amount: int) -> int:
    if amount <= 0 or not target.alive:
        return 0
    before = target.hp
    target.hp = min(target.hp_max, target.hp + amount)
    healed = target.hp - before
    if healed:
        journal.damage_number(game, target.id, healed, "heal")
    return healed


def on_monster_killed(game, monster, outcome: Optional[Dict[str, Any]] = None) -> None:
    living = game.living_players()
    shares = split_evenly(monster.gold_reward, len(living))
    for p, share in zip(living, shares):
        p.gold += share
        game.gold_deltas[p.id] = game.gold_deltas.get(p.id, 0) + share
    for p in living:
        if not p.champion_id:
            continue
        game.xp_grants[p.champion_id] = game.xp_grants.get(p.champion_id, 0) + monster.xp_reward
        if outcome is not None:
            outcome["xp"][p.champion_id] = outcome["xp"].get(p.champion_id, 0) + monster.xp_reward
    if outcome is not None:
        outcome["kills"].append(monster.id)
    journal.log(game, f"{monster.name} is defeated! (+{monster.gold_reward} gold)", "victory")
    journal.action_message(game, f"{monster.name} defeated!")


def _after_hit(game, target, was_alive: bool, outcome: Dict[str, Any]) -> None:
    if not was_alive or target.alive:
        return
    if target.is_player:
        journal.log(game, f"{target.name} has fallen!", "defeat")
    else:
        on_monster_killed(game, target, outcome)


def _misses(game, actor) -> bool:
    penalty = fx.status_value(actor, "accuracy")
    if penalty <= 0:
        return False
    return roll("d20", next_rng(game, f"accuracy:{actor.id}")) <= penalty


def _apply_damage(game, effect, actor, targets, outcome) -> None:
    base = int(effect.get("value", 0) or 0)
    if effect.get("target") == "self":
        for t in targets:
            was_alive = t.alive
            deal_damage(game, t, base, actor.name, direct=False)
            journal.log(game, f"{actor.name} takes {base} damage from recklessness.", "damage", sub=True)
            _after_hit(game, t, was_alive, outcome)
        return

    if _misses(game, actor):
        outcome["missed"] = True
        journal.log(game, f"{actor.name}'s attack misses!", "info", sub=True)
        return

    amount = base + fx.status_value(actor, "strength")
    amount = max(0, amount - fx.status_value(actor, "weakness"))
    journal.attack_animation(game, actor.id)
    for t in targets:
        was_alive = t.alive
        hit = deal_damage(game, t, amount, actor.name)
        outcome["damage"] += hit["dealt"]
        outcome["hits"].append((t.id, hit["dealt"]))
        line = f"{actor.name} hits {t.name} for {hit['dealt']} damage."
        if hit["absorbed"]:
            line = f"{line} ({hit['absorbed']} absorbed by shield)"
        if hit["dealt"] or not hit["blocked"]:
            journal.log(game, line, "damage", sub=True)
        _after_hit(game, t, was_alive, outcome)
    journal.clear_animation(game, actor.id)


def apply_effect(
    game,
    effect: Dict[str, Any],
    actor,
    target_id: Optional[str] = None,
    outcome: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Apply one effect and return the running outcome totals."""
    if outcome is None:
        outcome = new_outcome()
    effect_type = effect.get("type")
    targets = resolve_targets(game, effect, actor, target_id)
    if not targets:
        return outcome

    if effect_type == "damage":
        _apply_damage(game, effect, actor, targets, outcome)

    elif effect_type == "heal":
        amount = scaled(int(effect.get("value", 0) or 0), environment_mult(game, "heal"))
        for t in targets:
            healed = heal_combatant(game, t, amount)
            outcome["heal"] += healed
            if healed:
                journal.log(game, f"{t.name} recovers {healed} HP.", "heal", sub=True)

    elif effect_type == "shield":
        amount = scaled(int(effect.get("value", 0) or 0), environment_mult(game, "shield"))
        for t in targets:
            if amount <= 0 or not t.alive:
                continue
            t.shield += amount
            outcome["shield"] += amount
            journal.damage_number(game, t.id, amount, "shield")
            journal.log(game, f"{t.name} gains {amount} shield.", "buff", sub=True)

    elif effect_type == "cleanse":
        for t in targets:
            removed = fx.cleanse(t)
            if removed:
                journal.log(game, f"{t.name} is cleansed of {removed} debuff(s).", "buff", sub=True)

    elif fx.is_status_type(effect_type):
        value = int(effect.get("value", 1) or 0)
        duration = int(effect.get("duration", 1) or 0)
        for t in targets:
            if not t.alive:
                continue
            fx.add_status(t, fx.make_status(effect_type, value, duration, actor.name))
            label = effect_type.replace("_", " ").title()
            kind = "debuff" if effect_type in fx.DEBUFF_TYPES else "buff"
            journal.log(game, f"{t.name} gains {label} ({value}) for {duration} turn(s).", kind, sub=True)

    else:
        logger.warning("unknown effect type {!r} from {}", effect_type, actor.name)

    return outcome


def resolve_statuses(game, combatant) -> None:
    """Debuff resolution for one combatant: DoT ticks, regen, then the round sweep."""
    if not combatant.alive:
        return
    for debuff in list(combatant.debuffs):
        if debuff.get("type") not in fx.DOT_TYPES:
            continue
        amount = scaled(int(debuff.get("value", 0) or 0), environment_mult(game, debuff["type"]))
        if amount <= 0:
            continue
        was_alive = combatant.alive
        deal_damage(game, combatant, amount, debuff.get("source", ""), kind=debuff["type"], direct=False)
        journal.log(game, f"{combatant.name} suffers {amount} {debuff['type']} damage.", "debuff", sub=True)
        _after_hit(game, combatant, was_alive, new_outcome())
        if not combatant.alive:
            return

    regen = fx.status_value(combatant, "regen")
    if regen > 0:
        healed = heal_combatant(game, combatant, scaled(regen, environment_mult(game, "heal")))
        if healed:
            journal.log(game, f"{combatant.name} regenerates {healed} HP.", "heal", sub=True)

    fx.tick_turn_tracked(combatant)
