# party_crawl/sockets.py
import time

from flask import request
from flask_socketio import emit, join_room, leave_room
from loguru import logger

from . import state
from .engine import journal, phases
from .engine.errors import ContractError
from .engine.simultaneous import SimultaneousCoordinator
from .content.classes import CLASSES


def snapshot_for(game, viewer_sid):
    """
    Serialized state for one client; other heroes' hands are reduced to a count.
    """
    data = game.to_dict()
    you = state.player_id_for(game, viewer_sid)
    for p in data["players"]:
        if p["id"] != you:
            p["hand"] = len(p["hand"])
        p.pop("sid", None)
        p["class_name"] = CLASSES.get(p["class_id"], {}).get("name", "Adventurer")
    data.pop("events", None)
    data.pop("clients", None)
    data["you"] = you
    data["log"] = journal.recent(game)
    data["log_length"] = len(game.log)
    return data


def broadcast(socketio, game):
    for p in game.players:
        if p.sid:
            socketio.emit("party_snapshot", snapshot_for(game, p.sid), to=p.sid)
    events = journal.drain_events(game)
    if events:
        socketio.emit("party_events", events, to=game.room_id)
    progress = journal.drain_progress(game)
    if progress["xp"] or progress["gold"]:
        socketio.emit("party_progress", progress, to=game.room_id)
    if game.phase == phases.ROUND_COMPLETE:
        socketio.emit("party_system", f"Round {game.round} complete. Next: {game.outcome}.", to=game.room_id)
    elif game.phase in (phases.VICTORY, phases.DEFEAT):
        socketio.emit("party_system", f"Run over: {game.outcome}.", to=game.room_id)


def register_party_socket_handlers(socketio):
    def current(sid):
        game = state.get_game_by_sid(sid)
        if not game:
            emit("party_system", "Not in a party game.")
            return None, None
        return game, state.player_id_for(game, sid)

    def attempt(game, fn, *args):
        try:
            fn(*args)
        except ContractError as exc:
            emit("party_system", str(exc))
            return False
        broadcast(socketio, game)
        return True

    @socketio.on("party_join")
    def party_join(payload):
        sid = request.sid
        payload = payload if isinstance(payload, dict) else {}
        room_id = str(payload.get("room_id") or "party-lobby")
        class_id = payload.get("class_id")
        if class_id not in CLASSES:
            emit("party_system", f"Unknown class '{class_id}'. Try again.")
            return
        if room_id in state.party_rooms:
            emit("party_system", "That party is already in combat.")
            return
        state.join_lobby(room_id, sid, payload.get("name") or CLASSES[class_id]["name"], class_id, payload.get("champion_id"))
        join_room(room_id)
        roster = state.lobbies[room_id]
        logger.info("{} joined party room {} as {}", sid[:5], room_id, class_id)
        socketio.emit("party_system", f"{len(roster)} hero(es) in the party.", to=room_id)

    @socketio.on("party_start")
    def party_start(payload):
        sid = request.sid
        payload = payload if isinstance(payload, dict) else {}
        room_id = state.sid_to_room.get(sid)
        if not room_id:
            emit("party_system", "Join a party first.")
            return
        if room_id in state.party_rooms:
            emit("party_system", "Combat already started.")
            return
        if not state.is_host(room_id, sid):
            emit("party_system", "Only the host can start.")
            return
        mode = payload.get("mode", "sequential")
        seed = payload.get("seed")
        if seed is None:
            seed = int(time.time() * 1000) & 0xFFFFFFFF
        try:
            game = state.create_game(room_id, mode, int(seed))
        except ContractError as exc:
            emit("party_system", str(exc))
            return
        logger.info("room {} starts in {} mode (seed {})", room_id, mode, seed)
        socketio.emit("party_system", "Combat begins.", to=room_id)
        attempt(game, phases.start_round, game, 1)

    @socketio.on("party_select_card")
    def party_select_card(payload):
        game, player_id = current(request.sid)
        if not game:
            return
        card_id = payload.get("card_id") if isinstance(payload, dict) else str(payload).strip()
        attempt(game, phases.select_card, game, player_id, card_id)

    @socketio.on("party_select_target")
    def party_select_target(payload):
        game, player_id = current(request.sid)
        if not game:
            return
        target_id = payload.get("target_id") if isinstance(payload, dict) else str(payload).strip()
        attempt(game, phases.select_target, game, player_id, target_id)

    @socketio.on("party_confirm_target")
    def party_confirm_target(payload=None):
        game, player_id = current(request.sid)
        if not game:
            return
        attempt(game, phases.confirm_target, game, player_id)

    @socketio.on("party_roll_aggro")
    def party_roll_aggro(payload=None):
        game, player_id = current(request.sid)
        if not game:
            return
        attempt(game, phases.roll_aggro, game, player_id)

    @socketio.on("party_special")
    def party_special(payload=None):
        game, player_id = current(request.sid)
        if not game:
            return
        target_id = payload.get("target_id") if isinstance(payload, dict) else None
        attempt(game, phases.use_special_ability, game, player_id, target_id)

    @socketio.on("party_enhance")
    def party_enhance(payload):
        game, player_id = current(request.sid)
        if not game:
            return
        enabled = payload.get("enabled") if isinstance(payload, dict) else payload
        attempt(game, phases.set_enhance_mode, game, player_id, bool(enabled))

    def coordinate(message):
        sid = request.sid
        game, player_id = current(sid)
        if not game:
            return
        if game.mode != "simultaneous":
            emit("party_system", "This party plays in turn order.")
            return
        coordinator = SimultaneousCoordinator(game)
        message = dict(message, player_id=player_id, client_id=sid)
        attempt(game, coordinator.handle, message)

    @socketio.on("party_selection")
    def party_selection(payload):
        payload = payload if isinstance(payload, dict) else {}
        coordinate({
            "type": "select",
            "card_id": payload.get("card_id"),
            "target_id": payload.get("target_id"),
            "enhance": payload.get("enhance", False),
            "special": payload.get("special", False),
        })

    @socketio.on("party_ready")
    def party_ready(payload=None):
        ready = payload.get("ready", True) if isinstance(payload, dict) else True
        coordinate({"type": "ready" if ready else "unready"})

    @socketio.on("party_ack")
    def party_ack(payload):
        version = payload.get("version", -1) if isinstance(payload, dict) else payload
        coordinate({"type": "ack", "version": version})

    @socketio.on("party_next_round")
    def party_next_round(payload=None):
        sid = request.sid
        game, _ = current(sid)
        if not game:
            return
        if not state.is_host(game.room_id, sid):
            emit("party_system", "Only the host can continue.")
            return
        attempt(game, phases.next_round, game)

    @socketio.on("disconnect")
    def party_disconnect():
        sid = request.sid
        game = state.get_game_by_sid(sid)
        room_id = state.leave(sid)
        if not room_id:
            return
        leave_room(room_id, sid=sid)
        logger.info("{} left party room {}", sid[:5], room_id)
        if not state.lobbies.get(room_id):
            state.cleanup_room(room_id)
            return
        socketio.emit("party_system", "A hero disconnected.", to=room_id)
        if game is None:
            return
        for p in game.players:
            if p.sid == sid:
                p.sid = None
        if game.mode == "simultaneous":
            if SimultaneousCoordinator(game).disconnect(sid):
                broadcast(socketio, game)
