# party_crawl/engine/pipeline.py
"""Card Resolution Pipeline: one played card, start to finish.

Order: enhancement, tier scaling, Blood Frenzy, mana, dispatch through the
applicator, resource gain (skipped when enhanced), hand to discard, and the
actor's action-tracked tick.
"""
from __future__ import annotations

import copy
from typing import Any, Dict, List, Optional

from loguru import logger

from . import effects as fx
from . import journal
from . import scaling
from .applicator import apply_effect, new_outcome
from .errors import ContractError
from .rules import capped_gain, clamp, gauge_fraction, scaled, threshold_bonus
from .targeting import choose_target
from ..content.balance import BLOOD_FRENZY, RESOURCE_GAIN
from ..content.cards import CARDS
from ..content.classes import CLASSES

BONUS_KEYS = {"damage": "damage", "heal": "heal", "shield": "shield"}


def get_card(card_id: str) -> Dict[str, Any]:
    card = CARDS.get(card_id)
    if card is None:
        raise ContractError(f"unknown card {card_id!r}")
    return card


def can_enhance(player) -> bool:
    return player.resource_max > 0 and player.resource >= player.resource_max


def apply_enhancement(player, effects: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    bonus = CLASSES[player.class_id].get("enhance_bonus", {})
    out = copy.deepcopy(effects)
    for effect in out:
        key = BONUS_KEYS.get(effect.get("type"))
        if key is None:
            continue
        if key == "damage" and effect.get("target") == "self":
            continue
        effect["value"] = int(effect.get("value", 0) or 0) + int(bonus.get(key, 0) or 0)
    return out


def blood_frenzy(player, effects: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    bonus = threshold_bonus(gauge_fraction(player.hp, player.hp_max), BLOOD_FRENZY)
    if bonus <= 0:
        return effects
    out = copy.deepcopy(effects)
    for effect in out:
        if effect.get("type") == "damage" and effect.get("target") != "self":
            effect["value"] = scaled(int(effect.get("value", 0) or 0), 1.0 + bonus)
    return out


def add_resource(player, amount: int) -> int:
    before = player.resource
    player.resource = clamp(player.resource + amount, 0, player.resource_max)
    return player.resource - before


def resource_gain(player, card: Dict[str, Any], outcome: Dict[str, Any], mana_spent: int = 0) -> int:
    """Per-class gain after a card, already clamped to the gauge."""
    rule = CLASSES[player.class_id].get("resource_gain")
    g = RESOURCE_GAIN
    if rule == "damage_dealt":
        return add_resource(player, capped_gain(outcome["damage"], g["rage_per_damage_divisor"], g["rage_per_damage_max"]))
    if rule == "per_card":
        key = "focus_per_card" if player.class_id == "archer" else "combo_per_card"
        return add_resource(player, g[key])
    if rule == "faith":
        return add_resource(player, g["faith_per_card"] + (g["faith_heal_bonus"] if outcome["heal"] > 0 else 0))
    if rule == "heal_done":
        return add_resource(player, g["devotion_on_heal"] if outcome["heal"] > 0 else 0)
    if rule == "mana_spent":
        return add_resource(player, mana_spent)
    if rule == "song":
        song = card.get("song")
        if not song:
            return 0
        if player.song_type != song:
            player.song_type = song
            before = player.resource
            player.resource = min(player.resource_max, g["song_per_card"])
            return player.resource - before
        return add_resource(player, g["song_per_card"])
    return 0


def gain_when_hit(player, taken: int) -> int:
    rule = CLASSES[player.class_id].get("gain_when_hit")
    g = RESOURCE_GAIN
    if taken <= 0 or not rule:
        return 0
    if rule == "rage":
        return add_resource(player, capped_gain(taken, g["rage_when_hit_divisor"], g["rage_when_hit_max"]))
    if rule == "focus_loss":
        return add_resource(player, -g["focus_lost_when_hit"])
    return 0


def _spend_mana(game, player, card_id: str, card: Dict[str, Any], tier: Optional[str]) -> int:
    if player.mana_max <= 0:
        return 0
    cost = scaling.mana_cost(card_id, tier)
    spent = min(cost, player.mana)
    player.mana -= spent
    restore = int(card.get("mana_restore", 0) or 0)
    if restore:
        player.mana = min(player.mana_max, player.mana + restore)
        journal.log(game, f"{player.name} restores {restore} mana.", "buff", sub=True)
    return spent


def card_effects(player, card_id: str) -> List[Dict[str, Any]]:
    """Base effects with the current Faith/Mana tier folded in.

    Targeting reads these so a tier bonus that needs a target gets one.
    """
    card = get_card(card_id)
    gauges = {"resource": player.resource, "mana": player.mana}
    kind = scaling.scaling_kind(player.class_id)
    bonuses = scaling.tier_bonuses(card_id, kind, scaling.tier_for(player, gauges))
    return scaling.fold_bonuses(card["effects"], bonuses, card_id)


def play_card(game, player_id: str, card_id: str, target_id: Optional[str] = None) -> Dict[str, Any]:
    """Resolve one card from the player's hand. Returns the outcome totals."""
    player = game.player(player_id)
    if player is None:
        raise ContractError(f"unknown player {player_id!r}")
    if not player.alive:
        raise ContractError(f"{player.name} is dead")
    card = get_card(card_id)
    if card_id not in player.hand:
        raise ContractError(f"{card_id} is not in {player.name}'s hand")

    target_id = choose_target(game, player, card_effects(player, card_id), target_id)

    gauges = {"resource": player.resource, "mana": player.mana}
    enhanced = bool(game.enhance_mode.get(player.id)) and can_enhance(player)
    effects = copy.deepcopy(card["effects"])
    if enhanced:
        player.resource = 0
        effects = apply_enhancement(player, effects)
        game.enhance_mode[player.id] = False

    kind = scaling.scaling_kind(player.class_id)
    tier = scaling.tier_for(player, gauges)
    bonuses = scaling.tier_bonuses(card_id, kind, tier)
    effects = scaling.fold_bonuses(effects, bonuses, card_id)
    if CLASSES[player.class_id].get("blood_frenzy"):
        effects = blood_frenzy(player, effects)
    mana_spent = _spend_mana(game, player, card_id, card, tier if kind == "mana" else None)

    player.base_aggro += int(card.get("aggro", 0) or 0)
    header = f"{player.name} plays {card['name']}"
    if enhanced:
        header += " (enhanced)"
    if tier:
        header += f" [{tier}]"
    journal.log(game, header + ".", "action")
    journal.action_message(game, f"{player.name}: {card['name']}")
    logger.debug("{} plays {} tier={} enhanced={} target={}", player.id, card_id, tier, enhanced, target_id)

    outcome = new_outcome()
    for effect in effects:
        apply_effect(game, effect, player, target_id, outcome)

    if not enhanced and player.alive:
        resource_gain(player, card, outcome, mana_spent)

    player.hand.remove(card_id)
    player.discard.append(card_id)
    fx.tick_action_tracked(player)
    outcome["enhanced"] = enhanced
    outcome["tier"] = tier
    return outcome


def special_effects(player) -> List[Dict[str, Any]]:
    effects = copy.deepcopy(CLASSES[player.class_id]["special"]["effects"])
    if player.class_id == "bard" and player.song_type:
        # Harmony empowers the party, Riot breaks the enemy.
        wanted = "allAllies" if player.song_type == "harmony" else "allMonsters"
        effects = [e for e in effects if e.get("target") == wanted]
    return effects


def use_special(game, player_id: str, target_id: Optional[str] = None) -> Dict[str, Any]:
    player = game.player(player_id)
    if player is None:
        raise ContractError(f"unknown player {player_id!r}")
    if not player.alive:
        raise ContractError(f"{player.name} is dead")
    if not can_enhance(player):
        raise ContractError(f"{player.name}'s gauge is not full")
    special = CLASSES[player.class_id]["special"]
    effects = special_effects(player)
    target_id = choose_target(game, player, effects, target_id)

    player.resource = 0
    game.enhance_mode[player.id] = False
    journal.log(game, f"{player.name} unleashes {special['name']}!", "special")
    journal.action_message(game, f"{player.name}: {special['name']}!")
    outcome = new_outcome()
    for effect in effects:
        apply_effect(game, effect, player, target_id, outcome)
    if player.class_id == "bard":
        # Crescendo spends the song; the next song card starts a fresh one
        player.song_type = None
    fx.tick_action_tracked(player)
    return outcome
