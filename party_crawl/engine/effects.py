# party_crawl/engine/effects.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

BUFF_TYPES = ("stealth", "taunt", "strength", "block", "regen", "survive_lethal")
DEBUFF_TYPES = ("poison", "burn", "ice", "weakness", "stun", "accuracy", "vulnerable")
DOT_TYPES = ("poison", "burn", "ice")

# Decremented when the owner's action opportunity passes, not by the round sweep.
ACTION_TRACKED = ("stun",)


def is_status_type(effect_type: str) -> bool:
    return effect_type in BUFF_TYPES or effect_type in DEBUFF_TYPES


def make_status(effect_type: str, value: int, duration: int, source: str = "") -> Dict[str, Any]:
    return {
        "type": effect_type,
        "value": int(value),
        "duration": int(duration),
        "source": str(source),
        "tracking": "action" if effect_type in ACTION_TRACKED else "turn",
    }


def _bucket(target, effect_type: str) -> List[Dict[str, Any]]:
    return target.buffs if effect_type in BUFF_TYPES else target.debuffs


def tick(effect: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """One decrement; None once the duration runs out."""
    d = int(effect.get("duration", 0) or 0) - 1
    if d <= 0:
        return None
    e2 = dict(effect)
    e2["duration"] = d
    return e2


def add_status(target, status: Dict[str, Any]) -> Dict[str, Any]:
    """Attach a status. A type already present is extended, never duplicated:
    duration adds up and value takes the larger of the two."""
    if int(status.get("duration", 0) or 0) <= 0:
        return status
    bucket = _bucket(target, status["type"])
    for existing in bucket:
        if existing.get("type") != status["type"]:
            continue
        existing["duration"] = int(existing.get("duration", 0)) + int(status["duration"])
        existing["value"] = max(int(existing.get("value", 0)), int(status.get("value", 0)))
        if status.get("source"):
            existing["source"] = status["source"]
        return existing
    bucket.append(dict(status))
    return bucket[-1]


def get_status(target, effect_type: str) -> Optional[Dict[str, Any]]:
    for effect in _bucket(target, effect_type):
        if effect.get("type") == effect_type:
            return effect
    return None


def has_status(target, effect_type: str) -> bool:
    return get_status(target, effect_type) is not None


def status_value(target, effect_type: str) -> int:
    effect = get_status(target, effect_type)
    return int(effect.get("value", 0) or 0) if effect else 0


def remove_status(target, effect_type: str) -> None:
    bucket = _bucket(target, effect_type)
    bucket[:] = [e for e in bucket if e.get("type") != effect_type]


def cleanse(target) -> int:
    removed = len(target.debuffs)
    target.debuffs = []
    return removed


def _sweep(effects: List[Dict[str, Any]], tracking: str) -> List[Dict[str, Any]]:
    new_list: List[Dict[str, Any]] = []
    for e in effects:
        if e.get("tracking", "turn") != tracking:
            new_list.append(e)
            continue
        e2 = tick(e)
        if e2 is not None:
            new_list.append(e2)
    return new_list


def tick_turn_tracked(target) -> None:
    """Round sweep, run once per combatant during debuff resolution."""
    target.buffs = _sweep(target.buffs, "turn")
    target.debuffs = _sweep(target.debuffs, "turn")


def tick_action_tracked(target) -> None:
    """Run once each time the owner's action opportunity passes."""
    target.buffs = _sweep(target.buffs, "action")
    target.debuffs = _sweep(target.debuffs, "action")


def is_stunned(target) -> bool:
    return has_status(target, "stun")


def is_stealthed(target) -> bool:
    return has_status(target, "stealth")


def has_taunt(target) -> bool:
    return has_status(target, "taunt")


def clear_statuses(target) -> None:
    target.buffs = []
    target.debuffs = []
