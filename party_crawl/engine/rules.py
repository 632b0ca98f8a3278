# party_crawl/engine/rules.py
import math
from typing import List, Optional, Sequence, Tuple


def clamp(x: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, x))


def scaled(value: int, mult: float) -> int:
    # environment and elite multipliers always round down
    return int(math.floor(value * mult))


def split_evenly(amount: int, ways: int) -> List[int]:
    """Even split; the remainder goes +1 each to the first shares."""
    if ways <= 0:
        return []
    share, remainder = divmod(max(0, amount), ways)
    return [share + (1 if i < remainder else 0) for i in range(ways)]


def gauge_fraction(current: int, maximum: int) -> float:
    if maximum <= 0:
        return 0.0
    return current / maximum


def faith_tier(current: int, maximum: int, mid: float, top: float) -> Optional[str]:
    fraction = gauge_fraction(current, maximum)
    if fraction >= top:
        return "top"
    if fraction >= mid:
        return "mid"
    return None


def mana_tier(current: int, maximum: int, threshold: float) -> str:
    return "empowered" if gauge_fraction(current, maximum) >= threshold else "depowered"


def threshold_bonus(fraction: float, table: Sequence[Tuple[float, float]]) -> float:
    # table is ordered from the lowest threshold up; first match wins
    for below, bonus in table:
        if fraction < below:
            return bonus
    return 0.0


def capped_gain(amount: int, divisor: int, cap: int) -> int:
    if amount <= 0:
        return 0
    return min(cap, math.ceil(amount / divisor))
