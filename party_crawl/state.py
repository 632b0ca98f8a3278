# party_crawl/state.py
from typing import Any, Dict, List, Optional

from .engine.models import GameState
from .engine.phases import new_game

lobbies: Dict[str, List[Dict[str, Any]]] = {}     # room_id -> roster waiting to start
party_rooms: Dict[str, GameState] = {}
sid_to_room: Dict[str, str] = {}


def join_lobby(room_id: str, sid: str, name: str, class_id: str, champion_id: Optional[str] = None) -> Dict[str, Any]:
    roster = lobbies.setdefault(room_id, [])
    for entry in roster:
        if entry["sid"] == sid:
            entry.update(name=name, class_id=class_id, champion_id=champion_id)
            return entry
    entry = {"sid": sid, "name": name, "class_id": class_id, "champion_id": champion_id}
    roster.append(entry)
    sid_to_room[sid] = room_id
    return entry


def is_host(room_id: str, sid: str) -> bool:
    roster = lobbies.get(room_id) or []
    return bool(roster) and roster[0]["sid"] == sid


def create_game(room_id: str, mode: str, seed: int) -> GameState:
    roster = lobbies.get(room_id) or []
    game = new_game(room_id, roster, mode=mode, seed=seed)
    game.clients = [entry["sid"] for entry in roster]
    party_rooms[room_id] = game
    return game


def get_game_by_sid(sid: str) -> Optional[GameState]:
    room = sid_to_room.get(sid)
    if not room:
        return None
    return party_rooms.get(room)


def player_id_for(game: GameState, sid: str) -> Optional[str]:
    for p in game.players:
        if p.sid == sid:
            return p.id
    return None


def leave(sid: str) -> Optional[str]:
    room_id = sid_to_room.pop(sid, None)
    if room_id is None:
        return None
    roster = lobbies.get(room_id)
    if roster is not None:
        roster[:] = [entry for entry in roster if entry["sid"] != sid]
    return room_id


def cleanup_room(room_id: str) -> None:
    party_rooms.pop(room_id, None)
    roster = lobbies.pop(room_id, None) or []
    for entry in roster:
        sid_to_room.pop(entry["sid"], None)
