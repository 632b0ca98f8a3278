# party_crawl/content/classes.py
CLASSES = {
    "warrior": {
        "name": "Warrior",
        "base_hp": 120,
        "resource": {"id": "rage", "label": "Rage", "max": 10},
        "resource_gain": "damage_dealt",
        "gain_when_hit": "rage",
        "special": {
            "name": "Action Surge",
            "description": "Deal 25 damage to all enemies and expose them: stun, vulnerable and weakness for 1 turn.",
            "effects": [
                {"type": "damage", "value": 25, "target": "allMonsters"},
                {"type": "stun", "value": 1, "target": "allMonsters", "duration": 1},
                {"type": "vulnerable", "value": 1, "target": "allMonsters", "duration": 1},
                {"type": "weakness", "value": 1, "target": "allMonsters", "duration": 1},
            ],
        },
        "enhance_bonus": {"damage": 8, "heal": 0, "shield": 5},
    },
    "rogue": {
        "name": "Rogue",
        "base_hp": 80,
        "resource": {"id": "combo", "label": "Combo", "max": 5},
        "resource_gain": "per_card",
        "special": {
            "name": "Assassinate",
            "description": "Deal 40 damage to one enemy and gain stealth.",
            "effects": [
                {"type": "damage", "value": 40, "target": "monster"},
                {"type": "stealth", "value": 2, "target": "self", "duration": 2},
            ],
        },
        "enhance_bonus": {"damage": 10, "heal": 0, "shield": 0},
    },
    "paladin": {
        "name": "Paladin",
        "base_hp": 100,
        "resource": {"id": "faith", "label": "Faith", "max": 8},
        "resource_gain": "faith",
        "scaling": "faith",
        "special": {
            "name": "Shield of Faith",
            "description": "Heal and shield all allies; the party blocks all damage until the end of the turn.",
            "effects": [
                {"type": "heal", "value": 10, "target": "allAllies"},
                {"type": "shield", "value": 15, "target": "allAllies"},
                {"type": "block", "value": 1, "target": "allAllies", "duration": 1},
            ],
        },
        "enhance_bonus": {"damage": 5, "heal": 8, "shield": 10},
    },
    "mage": {
        "name": "Mage",
        "base_hp": 70,
        "resource": {"id": "arcana", "label": "Arcana", "max": 10},
        "mana": {"label": "Mana", "max": 10},
        "resource_gain": "mana_spent",
        "scaling": "mana",
        "special": {
            "name": "Mana Overload",
            "description": "Deal 36 damage to all enemies and apply burn, ice and vulnerable for 2 turns.",
            "effects": [
                {"type": "damage", "value": 36, "target": "allMonsters"},
                {"type": "burn", "value": 2, "target": "allMonsters", "duration": 2},
                {"type": "ice", "value": 2, "target": "allMonsters", "duration": 2},
                {"type": "vulnerable", "value": 2, "target": "allMonsters", "duration": 2},
            ],
        },
        "enhance_bonus": {"damage": 12, "heal": 0, "shield": 0},
    },
    "cleric": {
        "name": "Cleric",
        "base_hp": 75,
        "resource": {"id": "devotion", "label": "Devotion", "max": 5},
        "resource_gain": "heal_done",
        "special": {
            "name": "Prayer Cycle",
            "description": "Deal 10 damage to all enemies and heal all allies for 15.",
            "effects": [
                {"type": "damage", "value": 10, "target": "allMonsters"},
                {"type": "heal", "value": 15, "target": "allAllies"},
            ],
        },
        "enhance_bonus": {"damage": 6, "heal": 10, "shield": 5},
    },
    "bard": {
        "name": "Bard",
        "base_hp": 85,
        "resource": {"id": "song", "label": "Song", "max": 5},
        "resource_gain": "song",
        "special": {
            "name": "Crescendo",
            "description": "Harmony: all allies gain 5 strength for 2 turns. Riot: vulnerable and weakness on all enemies for 2 turns.",
            "effects": [
                {"type": "strength", "value": 5, "target": "allAllies", "duration": 2},
                {"type": "vulnerable", "value": 2, "target": "allMonsters", "duration": 2},
                {"type": "weakness", "value": 2, "target": "allMonsters", "duration": 2},
            ],
        },
        "enhance_bonus": {"damage": 3, "heal": 8, "shield": 6},
    },
    "archer": {
        "name": "Archer",
        "base_hp": 75,
        "resource": {"id": "focus", "label": "Focus", "max": 5},
        "resource_gain": "per_card",
        "gain_when_hit": "focus_loss",
        "special": {
            "name": "Perfect Shot",
            "description": "Gain 15 strength for your next turn.",
            "effects": [
                {"type": "strength", "value": 15, "target": "self", "duration": 2},
            ],
        },
        "enhance_bonus": {"damage": 12, "heal": 0, "shield": 0},
    },
    "barbarian": {
        "name": "Barbarian",
        "base_hp": 130,
        "resource": {"id": "fury", "label": "Fury", "max": 10},
        "resource_gain": "damage_dealt",
        "gain_when_hit": "rage",
        "blood_frenzy": True,
        "special": {
            "name": "Bloodbath",
            "description": "Deal 30 damage to all enemies and heal for 15.",
            "effects": [
                {"type": "damage", "value": 30, "target": "allMonsters"},
                {"type": "heal", "value": 15, "target": "self"},
            ],
        },
        "enhance_bonus": {"damage": 10, "heal": 5, "shield": 0},
    },
}
