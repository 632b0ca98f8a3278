# party_crawl/engine/journal.py
"""Combat log entries and the transient outbound event streams.

The log is append-only and its order drives replay. Events (action messages,
damage numbers, attack animations) are queued on the game and drained by
whoever presents them; nothing here waits or paces.
"""
from typing import Any, Dict, List


def log(game, message: str, type: str = "info", sub: bool = False) -> Dict[str, Any]:
    entry = {
        "turn": game.turn,
        "phase": game.phase,
        "message": message,
        "type": type,
        "is_sub_entry": sub,
    }
    game.log.append(entry)
    return entry


def action_message(game, message: str) -> None:
    game.events.append({"stream": "action_message", "message": message})


def damage_number(game, target_id: str, value: int, kind: str = "damage") -> None:
    game.events.append({"stream": "damage_number", "target_id": target_id, "value": value, "type": kind})


def attack_animation(game, entity_id: str, kind: str = "attack") -> None:
    game.events.append({"stream": "animation", "entity_id": entity_id, "animation": kind, "action": "trigger"})


def clear_animation(game, entity_id: str) -> None:
    game.events.append({"stream": "animation", "entity_id": entity_id, "animation": None, "action": "clear"})


def drain_events(game) -> List[Dict[str, Any]]:
    events, game.events = game.events, []
    return events


def drain_progress(game) -> Dict[str, Dict[str, int]]:
    progress = {"xp": dict(game.xp_grants), "gold": dict(game.gold_deltas)}
    game.xp_grants.clear()
    game.gold_deltas.clear()
    return progress


def recent(game, count: int = 30) -> List[Dict[str, Any]]:
    return game.log[-count:]
