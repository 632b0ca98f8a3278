# party_crawl/content/environments.py
# Multipliers apply to DoT ticks and to heal/shield amounts, never to direct hits.
ENVIRONMENTS = {
    "forest": {
        "name": "Ancient Forest",
        "description": "A lush woodland where nature's magic flows freely",
        "modifiers": {"heal": 1.25, "poison": 1.3},
    },
    "castle": {
        "name": "Fortress Battlements",
        "description": "Stone walls echo with the clash of steel",
        "modifiers": {"shield": 1.3},
    },
    "volcano": {
        "name": "Volcanic Crater",
        "description": "Lava flows and scorching heat permeate the air",
        "modifiers": {"burn": 1.5, "ice": 0.5},
    },
    "tundra": {
        "name": "Frozen Tundra",
        "description": "Biting winds freeze everything they touch",
        "modifiers": {"ice": 1.5, "burn": 0.5},
    },
}

ROUND_ENVIRONMENTS = {
    1: "forest",
    2: "castle",
    3: "volcano",
}
