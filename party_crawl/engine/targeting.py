# party_crawl/engine/targeting.py
from typing import Any, Dict, List, Optional

from . import effects as fx
from .applicator import SINGLE_TARGET_KINDS, legal_targets
from .dice import next_rng, roll
from .errors import ContractError
from ..content.balance import DEFAULTS


def total_aggro(player) -> int:
    return player.base_aggro + player.dice_aggro


def roll_aggro(game, player) -> int:
    player.dice_aggro = roll(DEFAULTS["aggro_die"], next_rng(game, f"aggro:{player.id}"))
    return player.dice_aggro


def pick_target(game):
    """Who a monster attacks: taunt first, then the strict highest aggro.

    Ties go to the earlier player. If every living hero is stealthed, the
    first living hero is the target anyway.
    """
    living = game.living_players()
    if not living:
        return None
    visible = [p for p in living if not fx.is_stealthed(p)]
    for p in visible:
        if fx.has_taunt(p):
            return p
    best = None
    for p in visible:
        if best is None or total_aggro(p) > total_aggro(best):
            best = p
    return best if best is not None else living[0]


def random_target(game, tag: str):
    living = game.living_players()
    pool = [p for p in living if not fx.is_stealthed(p)] or living[:1]
    if not pool:
        return None
    r = next_rng(game, tag)
    return pool[r.randrange(len(pool))]


def target_kind(effects: List[Dict[str, Any]]) -> Optional[str]:
    """The single-target kind a set of effects needs, if any."""
    for effect in effects:
        if effect.get("target") in SINGLE_TARGET_KINDS:
            return effect["target"]
    return None


def choose_target(game, actor, effects: List[Dict[str, Any]], target_id: Optional[str]) -> Optional[str]:
    """Validate an explicit target or auto-pick the only legal one."""
    kind = target_kind(effects)
    if kind is None:
        return None
    legal = legal_targets(game, actor, kind)
    if target_id is not None:
        if any(c.id == target_id for c in legal):
            return target_id
        raise ContractError(f"{target_id} is not a legal {kind} target")
    if len(legal) == 1:
        return legal[0].id
    raise ContractError(f"choose a {kind} target")


def auto_target(game, actor, effects: List[Dict[str, Any]]) -> Optional[str]:
    """The only legal target, or None when a choice must be made (or none is needed)."""
    kind = target_kind(effects)
    if kind is None:
        return None
    legal = legal_targets(game, actor, kind)
    return legal[0].id if len(legal) == 1 else None


def needs_choice(game, actor, effects: List[Dict[str, Any]]) -> bool:
    kind = target_kind(effects)
    if kind is None:
        return False
    return len(legal_targets(game, actor, kind)) > 1
