# party_crawl/engine/phases.py
"""Turn/Phase state machine.

Sequential turns cycle DRAW -> SELECT -> TARGET_SELECT -> AGGRO ->
PLAYER_ACTION per living hero, then MONSTER_ACTION and DEBUFF_RESOLUTION.
Simultaneous mode shares the round, monster and debuff steps and replaces
the per-hero selection with one batch (see simultaneous.py).
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from loguru import logger

from . import effects as fx
from . import journal
from . import monster_ai
from . import targeting
from .applicator import resolve_statuses
from .dice import next_rng, shuffled
from .errors import ContractError
from .models import GameState, PlayerState
from .pipeline import card_effects, play_card, use_special
from .rules import scaled
from ..content.balance import DEFAULTS
from ..content.cards import starter_deck
from ..content.classes import CLASSES
from ..content.environments import ROUND_ENVIRONMENTS
from ..content.monsters import ROUNDS

LOBBY = "LOBBY"
DRAW = "DRAW"
SELECT = "SELECT"
TARGET_SELECT = "TARGET_SELECT"
AGGRO = "AGGRO"
PLAYER_ACTION = "PLAYER_ACTION"
MONSTER_ACTION = "MONSTER_ACTION"
DEBUFF_RESOLUTION = "DEBUFF_RESOLUTION"
RESOLVE = "RESOLVE"
ROUND_COMPLETE = "ROUND_COMPLETE"
VICTORY = "VICTORY"
DEFEAT = "DEFEAT"

TERMINAL_PHASES = (ROUND_COMPLETE, VICTORY, DEFEAT)
MODES = ("sequential", "simultaneous")


def create_player(index: int, entry: Dict[str, Any]) -> PlayerState:
    class_id = entry.get("class_id")
    data = CLASSES.get(class_id)
    if data is None:
        raise ContractError(f"unknown class {class_id!r}")
    mana = data.get("mana", {}).get("max", 0)
    return PlayerState(
        id=f"p{index}",
        name=entry.get("name") or data["name"],
        class_id=class_id,
        hp=data["base_hp"],
        hp_max=data["base_hp"],
        champion_id=entry.get("champion_id"),
        sid=entry.get("sid"),
        resource_max=data["resource"]["max"],
        mana=mana,
        mana_max=mana,
        deck=starter_deck(class_id),
    )


def new_game(room_id: str, roster: List[Dict[str, Any]], mode: str = "sequential", seed: int = 0) -> GameState:
    if mode not in MODES:
        raise ContractError(f"unknown mode {mode!r}")
    if not roster:
        raise ContractError("a party needs at least one hero")
    game = GameState(room_id=room_id, mode=mode, seed=seed, max_rounds=DEFAULTS["max_rounds"])
    game.players = [create_player(i, entry) for i, entry in enumerate(roster)]
    for p in game.players:
        p.deck = shuffled(p.deck, next_rng(game, f"deck:{p.id}"))
        game.enhance_mode[p.id] = False
    return game


def environment_for_round(round_number: int) -> str:
    return ROUND_ENVIRONMENTS.get(round_number, "forest")


def start_round(game: GameState, round_number: int) -> None:
    game.round = round_number
    game.turn = 1
    game.outcome = None
    game.environment = environment_for_round(round_number)
    game.monsters = monster_ai.spawn_round(round_number)
    game.phase = DRAW
    layout = ROUNDS[min(round_number, len(ROUNDS)) - 1]
    journal.log(game, f"Round {round_number}: {layout['name']}", "round")
    journal.log(game, layout["description"], "info", sub=True)
    monster_ai.roll_intents(game)
    logger.info("room {} round {} starts ({} monsters)", game.room_id, round_number, len(game.monsters))
    start_turn(game)


def draw_cards(game: GameState, player: PlayerState, count: Optional[int] = None) -> List[str]:
    count = DEFAULTS["cards_drawn_per_turn"] if count is None else count
    drawn: List[str] = []
    for _ in range(count):
        if not player.deck and player.discard:
            player.deck = shuffled(player.discard, next_rng(game, f"reshuffle:{player.id}"))
            player.discard = []
            journal.log(game, f"{player.name} reshuffles their discard pile.", "info", sub=True)
        if not player.deck:
            break
        card_id = player.deck.pop()
        player.hand.append(card_id)
        drawn.append(card_id)
    return drawn


def return_hand(player: PlayerState) -> None:
    # unplayed cards go back on top of the deck and are drawn first next turn
    player.deck.extend(player.hand)
    player.hand = []


def start_turn(game: GameState) -> None:
    for p in game.living_players():
        p.dice_aggro = 0
        if p.mana_max:
            p.mana = min(p.mana_max, p.mana + DEFAULTS["mana_regen_per_turn"])
    journal.log(game, f"Turn {game.turn}", "turn")
    if game.mode == "simultaneous":
        open_selections(game)
        return
    first = _next_living_index(game, -1)
    if first is None:
        check_terminal(game)
        return
    game.current_player_index = first
    begin_player_turn(game)


def _next_living_index(game: GameState, after: int) -> Optional[int]:
    for i in range(after + 1, len(game.players)):
        if game.players[i].alive:
            return i
    return None


def begin_player_turn(game: GameState) -> None:
    player = game.current_player
    game.selected_card_id = None
    game.selected_target_id = None
    game.phase = DRAW
    if fx.is_stunned(player):
        journal.log(game, f"{player.name} is stunned and loses the turn!", "debuff")
        fx.tick_action_tracked(player)
        end_player_turn(game)
        return
    draw_cards(game, player)
    game.phase = SELECT


def open_selections(game: GameState) -> None:
    """Simultaneous draw: every living hero draws and gets a selection slot."""
    game.phase = DRAW
    game.selections = []
    for p in game.living_players():
        slot = {
            "player_id": p.id,
            "card_id": None,
            "target_id": None,
            "enhance": False,
            "special": False,
            "ready": False,
            "stunned": False,
        }
        if fx.is_stunned(p):
            journal.log(game, f"{p.name} is stunned and loses the turn!", "debuff")
            fx.tick_action_tracked(p)
            slot.update(ready=True, stunned=True)
        else:
            draw_cards(game, p)
        game.selections.append(slot)
    game.selection_version += 1
    game.acks = {}
    game.phase = SELECT


def _require(game: GameState, player_id: str, *phases: str) -> PlayerState:
    if game.mode != "sequential":
        raise ContractError("this action is only available in sequential mode")
    if game.phase not in phases:
        raise ContractError(f"cannot do that during {game.phase}")
    player = game.current_player
    if player is None or player.id != player_id:
        raise ContractError("it is not your turn")
    return player


def select_card(game: GameState, player_id: str, card_id: str) -> None:
    player = _require(game, player_id, SELECT, TARGET_SELECT)
    if card_id not in player.hand:
        raise ContractError(f"{card_id} is not in your hand")
    effects = card_effects(player, card_id)
    game.selected_card_id = card_id
    game.selected_target_id = targeting.auto_target(game, player, effects)
    if targeting.needs_choice(game, player, effects):
        game.phase = TARGET_SELECT
    else:
        game.phase = AGGRO


def select_target(game: GameState, player_id: str, target_id: str) -> None:
    player = _require(game, player_id, TARGET_SELECT)
    effects = card_effects(player, game.selected_card_id)
    game.selected_target_id = targeting.choose_target(game, player, effects, target_id)


def confirm_target(game: GameState, player_id: str) -> None:
    _require(game, player_id, TARGET_SELECT)
    if game.selected_target_id is None:
        raise ContractError("no target selected")
    game.phase = AGGRO


def set_enhance_mode(game: GameState, player_id: str, enabled: bool) -> None:
    player = game.player(player_id)
    if player is None:
        raise ContractError(f"unknown player {player_id!r}")
    game.enhance_mode[player_id] = bool(enabled)


def roll_aggro(game: GameState, player_id: str) -> int:
    """Commit the selected card: roll aggro, then resolve the action."""
    player = _require(game, player_id, AGGRO)
    rolled = targeting.roll_aggro(game, player)
    journal.log(game, f"{player.name} rolls {rolled} for aggro.", "roll")
    game.phase = PLAYER_ACTION
    play_card(game, player.id, game.selected_card_id, game.selected_target_id)
    if check_terminal(game):
        return rolled
    end_player_turn(game)
    return rolled


def use_special_ability(game: GameState, player_id: str, target_id: Optional[str] = None) -> None:
    player = _require(game, player_id, SELECT)
    game.phase = PLAYER_ACTION
    use_special(game, player.id, target_id)
    if check_terminal(game):
        return
    end_player_turn(game)


def end_player_turn(game: GameState) -> None:
    player = game.current_player
    if player is not None:
        return_hand(player)
    game.selected_card_id = None
    game.selected_target_id = None
    nxt = _next_living_index(game, game.current_player_index)
    if nxt is not None:
        game.current_player_index = nxt
        begin_player_turn(game)
        return
    run_monster_phase(game)


def run_monster_phase(game: GameState) -> None:
    """Monsters act, then debuff resolution, then the next turn."""
    game.phase = MONSTER_ACTION
    monster_ai.monster_turn(game)
    if check_terminal(game):
        return

    game.phase = DEBUFF_RESOLUTION
    for combatant in game.players + game.monsters:
        resolve_statuses(game, combatant)
    for monster in game.monsters:
        monster_ai.elite_upkeep(game, monster)
    if check_terminal(game):
        return

    game.turn += 1
    monster_ai.roll_intents(game)
    start_turn(game)


def check_terminal(game: GameState) -> bool:
    if game.phase in TERMINAL_PHASES:
        return True
    if not game.living_players():
        game.phase = DEFEAT
        game.outcome = "defeat"
        journal.log(game, "The party has fallen...", "defeat")
        logger.info("room {} defeated in round {}", game.room_id, game.round)
        return True
    if game.monsters and not game.living_monsters():
        complete_round(game)
        return True
    return False


def complete_round(game: GameState) -> None:
    for p in game.players:
        return_hand(p)
    if game.round >= game.max_rounds:
        game.phase = VICTORY
        game.outcome = "victory"
        journal.log(game, "Victory! The dungeon is conquered!", "victory")
        logger.info("room {} won the run", game.room_id)
        return
    for p in game.living_players():
        healed = scaled(p.hp_max - p.hp, DEFAULTS["between_round_heal_pct"])
        p.hp += healed
        p.gold += DEFAULTS["gold_per_alive_player"]
        game.gold_deltas[p.id] = game.gold_deltas.get(p.id, 0) + DEFAULTS["gold_per_alive_player"]
    game.phase = ROUND_COMPLETE
    game.outcome = "reward" if game.round <= DEFAULTS["reward_rounds"] else "shop"
    journal.log(game, f"Round {game.round} complete!", "victory")


def next_round(game: GameState) -> None:
    if game.phase != ROUND_COMPLETE:
        raise ContractError("the round is not complete")
    for p in game.players:
        p.base_aggro = 0
        p.dice_aggro = 0
        p.shield = 0
        fx.clear_statuses(p)
        p.deck = shuffled(p.deck + p.discard, next_rng(game, f"deck:{p.id}"))
        p.discard = []
    game.selections = []
    game.enhance_mode = {p.id: False for p in game.players}
    start_round(game, game.round + 1)
