# party_crawl/engine/simultaneous.py
"""Simultaneous Resolution Coordinator.

The host-side actor for networked play. It receives select / ready /
unready / ack messages and resolves the whole batch in a single transition
once every living hero is ready and every connected client has acknowledged
the latest selection version. Resolution order is the order the selection
slots were opened in, never submission order.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from loguru import logger

from . import journal
from . import phases
from . import targeting
from .applicator import legal_targets
from .errors import ContractError
from .models import GameState
from .pipeline import can_enhance, card_effects, play_card, use_special, special_effects


class SimultaneousCoordinator:
    def __init__(self, game: GameState):
        if game.mode != "simultaneous":
            raise ContractError("coordinator needs a simultaneous-mode game")
        self.game = game

    # -- messages -------------------------------------------------------

    def handle(self, message: Dict[str, Any]) -> bool:
        """Dispatch one message. Returns True if it triggered resolution."""
        kind = message.get("type")
        if kind == "select":
            self.select(
                message.get("player_id"),
                message.get("card_id"),
                message.get("target_id"),
                bool(message.get("enhance", False)),
                bool(message.get("special", False)),
            )
            return False
        if kind == "ready":
            return self.ready(message.get("player_id"))
        if kind == "unready":
            self.unready(message.get("player_id"))
            return False
        if kind == "ack":
            return self.ack(message.get("client_id"), int(message.get("version", -1)))
        raise ContractError(f"unknown coordinator message {kind!r}")

    def _slot(self, player_id: Optional[str]) -> Dict[str, Any]:
        if self.game.phase != phases.SELECT:
            raise ContractError(f"selections are closed during {self.game.phase}")
        for slot in self.game.selections:
            if slot["player_id"] == player_id:
                return slot
        raise ContractError(f"no selection slot for {player_id!r}")

    def _bump(self) -> None:
        self.game.selection_version += 1

    def select(
        self,
        player_id: str,
        card_id: Optional[str],
        target_id: Optional[str] = None,
        enhance: bool = False,
        special: bool = False,
    ) -> None:
        slot = self._slot(player_id)
        if slot["ready"]:
            raise ContractError("un-ready before changing your selection")
        player = self.game.player(player_id)
        if special:
            if not can_enhance(player):
                raise ContractError(f"{player.name}'s gauge is not full")
            effects = special_effects(player)
            card_id = None
        else:
            if card_id not in player.hand:
                raise ContractError(f"{card_id} is not in your hand")
            effects = card_effects(player, card_id)
        kind = targeting.target_kind(effects)
        if kind is not None and target_id is None:
            target_id = targeting.auto_target(self.game, player, effects)
        elif kind is not None:
            targeting.choose_target(self.game, player, effects, target_id)
        else:
            target_id = None
        slot.update(card_id=card_id, target_id=target_id, enhance=enhance, special=special)
        self._bump()

    def ready(self, player_id: str) -> bool:
        slot = self._slot(player_id)
        if slot["card_id"] is None and not slot["special"]:
            raise ContractError("select a card before readying")
        if slot["target_id"] is None:
            player = self.game.player(player_id)
            effects = special_effects(player) if slot["special"] else card_effects(player, slot["card_id"])
            if targeting.target_kind(effects) is not None:
                raise ContractError("select a target before readying")
        slot["ready"] = True
        self._bump()
        return self.maybe_resolve()

    def unready(self, player_id: str) -> None:
        slot = self._slot(player_id)
        slot["ready"] = False
        self._bump()

    def ack(self, client_id: str, version: int) -> bool:
        if client_id not in self.game.clients:
            raise ContractError(f"unknown client {client_id!r}")
        self.game.acks[client_id] = max(version, self.game.acks.get(client_id, -1))
        return self.maybe_resolve()

    def connect(self, client_id: str) -> None:
        if client_id not in self.game.clients:
            self.game.clients.append(client_id)

    def disconnect(self, client_id: str) -> bool:
        if client_id in self.game.clients:
            self.game.clients.remove(client_id)
        self.game.acks.pop(client_id, None)
        if self.game.phase != phases.SELECT:
            return False
        return self.maybe_resolve()

    # -- barrier --------------------------------------------------------

    def all_ready(self) -> bool:
        return bool(self.game.selections) and all(slot["ready"] for slot in self.game.selections)

    def all_acked(self) -> bool:
        version = self.game.selection_version
        return all(self.game.acks.get(c, -1) >= version for c in self.game.clients)

    def can_resolve(self) -> bool:
        return self.game.phase == phases.SELECT and self.all_ready() and self.all_acked()

    def maybe_resolve(self) -> bool:
        if not self.can_resolve():
            return False
        self.resolve()
        return True

    # -- resolution -----------------------------------------------------

    def _live_target(self, player, effects, target_id: Optional[str]) -> Optional[str]:
        kind = targeting.target_kind(effects)
        if kind is None:
            return None
        legal = legal_targets(self.game, player, kind)
        if any(c.id == target_id for c in legal):
            return target_id
        # the chosen target died earlier in the batch
        return legal[0].id if legal else None

    def resolve(self) -> None:
        game = self.game
        if not self.can_resolve():
            raise ContractError("resolution needs every hero ready and every client in sync")
        game.phase = phases.RESOLVE
        batch = [dict(slot) for slot in game.selections]
        logger.debug("room {} resolving {} selections at version {}", game.room_id, len(batch), game.selection_version)
        for slot in batch:
            player = game.player(slot["player_id"])
            if player is None or not player.alive or slot["stunned"]:
                continue
            game.current_player_index = game.players.index(player)
            game.enhance_mode[player.id] = bool(slot["enhance"])
            effects = special_effects(player) if slot["special"] else card_effects(player, slot["card_id"])
            target_id = self._live_target(player, effects, slot["target_id"])
            if targeting.target_kind(effects) is not None and target_id is None:
                journal.log(game, f"{player.name} has no target left.", "info")
                continue
            if slot["special"]:
                use_special(game, player.id, target_id)
            else:
                rolled = targeting.roll_aggro(game, player)
                journal.log(game, f"{player.name} rolls {rolled} for aggro.", "roll")
                play_card(game, player.id, slot["card_id"], target_id)
            if phases.check_terminal(game):
                game.selections = []
                return
        for p in game.players:
            phases.return_hand(p)
        game.selections = []
        phases.run_monster_phase(game)
