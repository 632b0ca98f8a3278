# party_crawl/engine/models.py
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, List, Optional


@dataclass
class PlayerState:
    id: str                                 # "p0", "p1", ... in turn order
    name: str
    class_id: str
    hp: int
    hp_max: int
    champion_id: Optional[str] = None       # meta-progression binding for XP
    sid: Optional[str] = None               # socket connection, if any
    shield: int = 0
    buffs: List[Dict[str, Any]] = field(default_factory=list)
    debuffs: List[Dict[str, Any]] = field(default_factory=list)
    resource: int = 0
    resource_max: int = 0
    mana: int = 0
    mana_max: int = 0
    base_aggro: int = 0
    dice_aggro: int = 0
    hand: List[str] = field(default_factory=list)
    deck: List[str] = field(default_factory=list)
    discard: List[str] = field(default_factory=list)
    gold: int = 0
    song_type: Optional[str] = None

    @property
    def alive(self) -> bool:
        return self.hp > 0

    @property
    def is_player(self) -> bool:
        return True


@dataclass
class MonsterState:
    id: str                                 # "m0", "m1", ...
    name: str
    template_id: str
    level: int
    hp: int
    hp_max: int
    shield: int = 0
    buffs: List[Dict[str, Any]] = field(default_factory=list)
    debuffs: List[Dict[str, Any]] = field(default_factory=list)
    abilities: List[Dict[str, Any]] = field(default_factory=list)
    intent: Optional[Dict[str, Any]] = None
    elite: Optional[str] = None             # "fast" | "enraged" | "regenerating" | "shielded"
    gold_reward: int = 0
    xp_reward: int = 0

    @property
    def alive(self) -> bool:
        return self.hp > 0

    @property
    def is_player(self) -> bool:
        return False


@dataclass
class GameState:
    room_id: str
    mode: str = "sequential"                # "sequential" | "simultaneous"
    seed: int = 0                           # for deterministic dice
    players: List[PlayerState] = field(default_factory=list)
    monsters: List[MonsterState] = field(default_factory=list)
    phase: str = "LOBBY"
    turn: int = 0
    round: int = 0
    max_rounds: int = 3
    current_player_index: int = 0
    selected_card_id: Optional[str] = None
    selected_target_id: Optional[str] = None
    enhance_mode: Dict[str, bool] = field(default_factory=dict)
    environment: Optional[str] = None
    outcome: Optional[str] = None           # "reward" | "shop" | "victory" | "defeat"
    log: List[Dict[str, Any]] = field(default_factory=list)
    # simultaneous mode
    selections: List[Dict[str, Any]] = field(default_factory=list)
    selection_version: int = 0
    clients: List[str] = field(default_factory=list)
    acks: Dict[str, int] = field(default_factory=dict)
    # outbound, drained by the socket layer
    events: List[Dict[str, Any]] = field(default_factory=list)
    xp_grants: Dict[str, int] = field(default_factory=dict)
    gold_deltas: Dict[str, int] = field(default_factory=dict)
    roll_counter: int = 0

    def combatant(self, combatant_id: str):
        for c in self.players:
            if c.id == combatant_id:
                return c
        for c in self.monsters:
            if c.id == combatant_id:
                return c
        return None

    def player(self, player_id: str) -> Optional[PlayerState]:
        for p in self.players:
            if p.id == player_id:
                return p
        return None

    def living_players(self) -> List[PlayerState]:
        return [p for p in self.players if p.alive]

    def living_monsters(self) -> List[MonsterState]:
        return [m for m in self.monsters if m.alive]

    @property
    def current_player(self) -> Optional[PlayerState]:
        if 0 <= self.current_player_index < len(self.players):
            return self.players[self.current_player_index]
        return None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameState":
        known = {f.name for f in fields(cls)}
        payload = {k: v for k, v in data.items() if k in known}
        payload["players"] = [PlayerState(**p) for p in data.get("players", [])]
        payload["monsters"] = [MonsterState(**m) for m in data.get("monsters", [])]
        return cls(**payload)
