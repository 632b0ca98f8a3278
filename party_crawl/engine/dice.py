# party_crawl/engine/dice.py
import random
from typing import List, Sequence, TypeVar

T = TypeVar("T")


def rng_for(seed: int, turn: int, tag: str = "") -> random.Random:
    # deterministic per game seed + turn + stream tag
    return random.Random(f"{seed}:{turn}:{tag}")


def next_rng(game, tag: str) -> random.Random:
    """Fresh stream for one roll; the counter lives on the game so replays match."""
    game.roll_counter += 1
    return rng_for(game.seed, game.turn, f"{game.round}:{tag}:{game.roll_counter}")


def roll(dice: str, r: random.Random) -> int:
    # supports "d6", "d20" etc.
    if not dice.startswith("d"):
        raise ValueError("dice must be like 'd20'")
    sides = int(dice[1:])
    return r.randint(1, sides)


def shuffled(items: Sequence[T], r: random.Random) -> List[T]:
    out = list(items)
    r.shuffle(out)
    return out
