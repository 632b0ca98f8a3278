# party_crawl/engine/scaling.py
"""Faith/Mana tier bonuses from the SCALING side-table.

A tier's bonus effects fold into the base effect with the same type and
target (values add, floored at 0); anything unmatched is appended.
Missing or malformed table entries are content errors: warned about and
treated as "no bonus", or raised by validate_content(strict=True).
"""
from __future__ import annotations

import copy
from typing import Any, Dict, List, Optional

from loguru import logger

from . import effects as fx
from .errors import ContentError
from .rules import faith_tier, mana_tier
from ..content.balance import MANA_COST_BY_RARITY, SCALING_THRESHOLDS
from ..content.cards import CARDS, SCALING
from ..content.classes import CLASSES

FAITH_TIERS = ("mid", "top")
MANA_TIERS = ("empowered", "depowered")
EFFECT_TYPES = ("damage", "heal", "shield", "cleanse") + fx.BUFF_TYPES + fx.DEBUFF_TYPES
TARGET_KINDS = ("self", "ally", "monster", "allAllies", "allMonsters")
SINGLE_KINDS = ("ally", "monster")


def scaling_kind(class_id: str) -> Optional[str]:
    return CLASSES.get(class_id, {}).get("scaling")


def tier_for(player, gauges: Dict[str, int]) -> Optional[str]:
    """Tier from a gauge snapshot taken before the card spends anything."""
    kind = scaling_kind(player.class_id)
    if kind == "faith":
        return faith_tier(
            gauges["resource"], player.resource_max,
            SCALING_THRESHOLDS["faith_mid"], SCALING_THRESHOLDS["faith_top"],
        )
    if kind == "mana":
        return mana_tier(gauges["mana"], player.mana_max, SCALING_THRESHOLDS["mana_empowered"])
    return None


def _valid_bonus(bonus: Any) -> bool:
    return (
        isinstance(bonus, dict)
        and bonus.get("type") in EFFECT_TYPES
        and bonus.get("target") in TARGET_KINDS
        and isinstance(bonus.get("value", 0), int)
    )


def tier_bonuses(card_id: str, kind: Optional[str], tier: Optional[str]) -> List[Dict[str, Any]]:
    """Bonus effects for one card at one tier. Faith "top" includes "mid"."""
    if kind is None or tier is None:
        return []
    table = SCALING.get(card_id, {}).get(kind)
    if table is None:
        logger.warning("card {} has no {} scaling entry; no bonus applied", card_id, kind)
        return []
    if kind == "faith":
        tiers = ["mid", "top"] if tier == "top" else ["mid"]
    else:
        tiers = [tier]
    out: List[Dict[str, Any]] = []
    for name in tiers:
        for bonus in table.get(name, []):
            if not _valid_bonus(bonus):
                logger.warning("malformed {} bonus on {}: {!r}; skipped", name, card_id, bonus)
                continue
            out.append(dict(bonus))
    return out


def _single_kinds(effects: List[Dict[str, Any]]) -> List[str]:
    return sorted({e.get("target") for e in effects if e.get("target") in SINGLE_KINDS})


def fold_bonuses(base: List[Dict[str, Any]], bonuses: List[Dict[str, Any]], card_id: str = "") -> List[Dict[str, Any]]:
    effects = copy.deepcopy(base)
    for bonus in bonuses:
        kinds = _single_kinds(effects)
        if bonus["target"] in SINGLE_KINDS and kinds and bonus["target"] not in kinds:
            # one card carries one chosen target
            logger.warning("bonus {!r} on {} needs a second target kind; dropped", bonus, card_id)
            continue
        match = next(
            (e for e in effects if e.get("type") == bonus["type"] and e.get("target") == bonus["target"]),
            None,
        )
        value = int(bonus.get("value", 0) or 0)
        if match is not None:
            match["value"] = max(0, int(match.get("value", 0) or 0) + value)
            if bonus.get("duration"):
                match["duration"] = int(match.get("duration", 0) or 0) + int(bonus["duration"])
            continue
        if value < 0:
            logger.warning("penalty {!r} on {} has no base effect to reduce; dropped", bonus, card_id)
            continue
        effects.append(dict(bonus))
    return effects


def mana_cost(card_id: str, tier: Optional[str]) -> int:
    card = CARDS[card_id]
    cost = card.get("mana_cost", MANA_COST_BY_RARITY.get(card.get("rarity", "common"), 1))
    if tier == "empowered" and cost > 0:
        cost += 1
    return cost


def _effect_text(effect: Dict[str, Any]) -> str:
    value = effect.get("value", 0)
    etype = effect.get("type", "")
    where = {
        "self": "",
        "ally": " to an ally",
        "monster": "",
        "allAllies": " to all allies",
        "allMonsters": " to all enemies",
    }.get(effect.get("target", ""), "")
    if etype == "damage":
        sign = "+" if value >= 0 else ""
        return f"{sign}{value} damage{where}"
    if etype in ("heal", "shield"):
        sign = "+" if value >= 0 else ""
        return f"{sign}{value} {etype}{where}"
    if etype == "cleanse":
        return f"cleanse{where}"
    label = etype.replace("_", " ").title()
    duration = effect.get("duration")
    if duration:
        return f"{label} {value} (+{duration} turns){where}"
    return f"{label} {value:+d}{where}"


def card_text(card_id: str) -> str:
    """Display text: the base description plus generated tier lines."""
    card = CARDS[card_id]
    lines = [card.get("description", "")]
    entry = SCALING.get(card_id, {})
    for tier in FAITH_TIERS:
        bonuses = entry.get("faith", {}).get(tier)
        if bonuses:
            label = "Faith 50%" if tier == "mid" else "Faith 100%"
            lines.append(f"{label}: " + ", ".join(_effect_text(b) for b in bonuses))
    for tier in MANA_TIERS:
        bonuses = entry.get("mana", {}).get(tier)
        if bonuses:
            lines.append(f"{tier.title()}: " + ", ".join(_effect_text(b) for b in bonuses))
    return "\n".join(line for line in lines if line)


def validate_content(strict: bool = False) -> List[str]:
    """Check card and scaling tables. Returns the problems found."""
    problems: List[str] = []
    for card_id, card in CARDS.items():
        if card.get("class") not in CLASSES:
            problems.append(f"{card_id}: unknown class {card.get('class')!r}")
            continue
        for effect in card.get("effects", []):
            if not _valid_bonus(effect):
                problems.append(f"{card_id}: malformed effect {effect!r}")
        kind = scaling_kind(card["class"])
        if kind and kind not in SCALING.get(card_id, {}):
            problems.append(f"{card_id}: {kind} class card without a {kind} scaling entry")
    for card_id, entry in SCALING.items():
        if card_id not in CARDS:
            problems.append(f"scaling entry for unknown card {card_id}")
            continue
        for kind, tiers in entry.items():
            allowed = FAITH_TIERS if kind == "faith" else MANA_TIERS if kind == "mana" else ()
            if not allowed:
                problems.append(f"{card_id}: unknown scaling kind {kind!r}")
                continue
            for tier, bonuses in tiers.items():
                if tier not in allowed:
                    problems.append(f"{card_id}: unknown {kind} tier {tier!r}")
                for bonus in bonuses:
                    if not _valid_bonus(bonus):
                        problems.append(f"{card_id}: malformed {tier} bonus {bonus!r}")
            base = list(CARDS[card_id].get("effects", []))
            for tier in allowed:
                active = ["mid", "top"] if tier == "top" else [tier]
                reach = base + [b for name in active for b in tiers.get(name, []) if _valid_bonus(b)]
                if len(_single_kinds(reach)) > 1:
                    problems.append(f"{card_id}: {tier} bonuses need a second target kind")
    for problem in problems:
        logger.warning("content: {}", problem)
    if strict and problems:
        raise ContentError("; ".join(problems))
    return problems
