# party_crawl/content/monsters.py
MONSTERS = {
    "goblin": {
        "name": "Goblin",
        "base_hp": 30,
        "gold": 4,
        "xp": 10,
        "abilities": [
            {"roll": 1, "name": "Stumble", "damage": 0, "target": "single"},
            {"roll": 2, "name": "Scratch", "damage": 4, "target": "single"},
            {"roll": 3, "name": "Stab", "damage": 6, "target": "single"},
            {"roll": 4, "name": "Poison Spit", "damage": 3, "target": "single",
             "debuff": {"type": "poison", "value": 2, "duration": 2}},
            {"roll": 5, "name": "Frenzy", "damage": 8, "target": "single"},
            {"roll": 6, "name": "Call Reinforcements", "damage": 4, "target": "all"},
        ],
    },
    "skeleton": {
        "name": "Skeleton",
        "base_hp": 40,
        "gold": 5,
        "xp": 12,
        "abilities": [
            {"roll": 1, "name": "Bone Rattle", "damage": 0, "target": "single"},
            {"roll": 2, "name": "Bone Throw", "damage": 5, "target": "single"},
            {"roll": 3, "name": "Rusty Blade", "damage": 7, "target": "single"},
            {"roll": 4, "name": "Chilling Touch", "damage": 4, "target": "single",
             "debuff": {"type": "ice", "value": 2, "duration": 2}},
            {"roll": 5, "name": "Reassemble", "damage": -8, "target": "single"},
            {"roll": 6, "name": "Bone Storm", "damage": 5, "target": "all"},
        ],
    },
    "troll": {
        "name": "Troll",
        "base_hp": 80,
        "gold": 8,
        "xp": 25,
        "abilities": [
            {"roll": 1, "name": "Club Smash", "damage": 10, "target": "single"},
            {"roll": 2, "name": "Regenerate", "damage": -10, "target": "single"},
            {"roll": 3, "name": "Boulder Toss", "damage": 8, "target": "random"},
            {"roll": 4, "name": "Crushing Blow", "damage": 12, "target": "single",
             "debuff": {"type": "stun", "value": 1, "duration": 1}},
            {"roll": 5, "name": "Ground Pound", "damage": 6, "target": "all"},
            {"roll": 6, "name": "Bellow", "damage": 0, "target": "all",
             "debuff": {"type": "weakness", "value": 2, "duration": 2}},
        ],
    },
    "orc_warlord": {
        "name": "Orc Warlord",
        "base_hp": 150,
        "gold": 15,
        "xp": 60,
        "abilities": [
            {"roll": 1, "name": "War Axe", "damage": 12, "target": "single"},
            {"roll": 2, "name": "Battle Cry", "damage": 0, "target": "all",
             "debuff": {"type": "weakness", "value": 3, "duration": 2}},
            {"roll": 3, "name": "Cleave", "damage": 8, "target": "all"},
            {"roll": 4, "name": "Headbutt", "damage": 10, "target": "single",
             "debuff": {"type": "stun", "value": 1, "duration": 1}},
            {"roll": 5, "name": "Rend", "damage": 8, "target": "single",
             "debuff": {"type": "poison", "value": 3, "duration": 3}},
            {"roll": 6, "name": "Execution", "damage": 20, "target": "single"},
        ],
    },
    "dragon": {
        "name": "Ancient Dragon",
        "base_hp": 250,
        "gold": 40,
        "xp": 150,
        "abilities": [
            {"roll": 1, "name": "Claw", "damage": 14, "target": "single"},
            {"roll": 2, "name": "Tail Sweep", "damage": 10, "target": "all"},
            {"roll": 3, "name": "Fire Breath", "damage": 12, "target": "all",
             "debuff": {"type": "burn", "value": 4, "duration": 2}},
            {"roll": 4, "name": "Terrifying Roar", "damage": 0, "target": "all",
             "debuff": {"type": "accuracy", "value": 5, "duration": 2}},
            {"roll": 5, "name": "Bite", "damage": 22, "target": "single"},
            {"roll": 6, "name": "Wing Buffet", "damage": 8, "target": "random",
             "debuff": {"type": "stun", "value": 1, "duration": 1}},
        ],
    },
}

ROUNDS = [
    {
        "round": 1,
        "name": "The Dark Passage",
        "description": "Goblins and undead block your path...",
        "monsters": [
            {"template_id": "goblin", "level": 1},
            {"template_id": "skeleton", "level": 1},
        ],
    },
    {
        "round": 2,
        "name": "The Orc Stronghold",
        "description": "An Orc Warlord commands his forces!",
        "monsters": [
            {"template_id": "troll", "level": 1, "elite": "regenerating"},
            {"template_id": "orc_warlord", "level": 2, "elite": "enraged"},
        ],
    },
    {
        "round": 3,
        "name": "The Dragon's Lair",
        "description": "Face the Ancient Dragon... if you dare!",
        "monsters": [{"template_id": "dragon", "level": 3, "elite": "shielded"}],
    },
]
