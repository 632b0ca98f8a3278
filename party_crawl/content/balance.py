# party_crawl/content/balance.py
DEFAULTS = {
    "max_rounds": 3,
    "cards_drawn_per_turn": 2,
    "between_round_heal_pct": 0.5,
    "gold_per_alive_player": 1,
    "mana_regen_per_turn": 2,
    "vulnerable_mult": 1.5,
    "aggro_die": "d20",
    "intent_die": "d6",
    "reward_rounds": 2,  # rounds <= this go to card reward, later ones to the shop
}

ELITE = {
    "enraged_mult": 1.5,
    "regenerating_heal": 10,
    "shielded_regen_pct": 0.1,
    "shielded_max_pct": 0.2,
    "fast_actions": 2,
}

RESOURCE_GAIN = {
    "rage_per_damage_divisor": 10,
    "rage_per_damage_max": 2,
    "rage_when_hit_divisor": 15,
    "rage_when_hit_max": 2,
    "combo_per_card": 1,
    "faith_per_card": 1,
    "faith_heal_bonus": 1,
    "devotion_on_heal": 2,
    "song_per_card": 1,
    "focus_per_card": 1,
    "focus_lost_when_hit": 1,
}

SCALING_THRESHOLDS = {
    "faith_mid": 0.5,
    "faith_top": 1.0,
    "mana_empowered": 0.5,
}

# Blood Frenzy: (hp fraction below, outgoing damage bonus); first match wins
BLOOD_FRENZY = [
    (0.25, 1.0),
    (0.50, 0.5),
    (0.75, 0.25),
]

MANA_COST_BY_RARITY = {
    "common": 1,
    "uncommon": 2,
    "rare": 3,
    "legendary": 4,
}
