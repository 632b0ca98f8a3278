# party_crawl/content/cards.py
# Card descriptions cover base effects only; Faith/Mana tier text is generated
# from SCALING by engine.scaling.card_text.
CARDS = {
    # Warrior
    "warrior_slash": {
        "name": "Slash", "class": "warrior", "rarity": "common", "aggro": 2,
        "description": "Deal 8 damage to a monster.",
        "effects": [{"type": "damage", "value": 8, "target": "monster"}],
    },
    "warrior_shield_bash": {
        "name": "Shield Bash", "class": "warrior", "rarity": "common", "aggro": 3,
        "description": "Deal 5 damage and gain 5 shield.",
        "effects": [
            {"type": "damage", "value": 5, "target": "monster"},
            {"type": "shield", "value": 5, "target": "self"},
        ],
    },
    "warrior_raise_shields": {
        "name": "Raise Shields", "class": "warrior", "rarity": "common", "aggro": 4,
        "description": "Gain 12 shield and Taunt for 1 turn.",
        "effects": [
            {"type": "shield", "value": 12, "target": "self"},
            {"type": "taunt", "value": 1, "target": "self", "duration": 1},
        ],
    },
    "warrior_cleave": {
        "name": "Cleave", "class": "warrior", "rarity": "uncommon", "aggro": 3,
        "description": "Deal 6 damage to all monsters.",
        "effects": [{"type": "damage", "value": 6, "target": "allMonsters"}],
    },
    "warrior_execute": {
        "name": "Execute", "class": "warrior", "rarity": "rare", "aggro": 4,
        "description": "Deal 15 damage to a monster.",
        "effects": [{"type": "damage", "value": 15, "target": "monster"}],
    },

    # Rogue
    "rogue_stab": {
        "name": "Stab", "class": "rogue", "rarity": "common", "aggro": 1,
        "description": "Deal 8 damage.",
        "effects": [{"type": "damage", "value": 8, "target": "monster"}],
    },
    "rogue_shadowstep": {
        "name": "Shadowstep", "class": "rogue", "rarity": "common", "aggro": 0,
        "description": "Gain Stealth for 1 turn.",
        "effects": [{"type": "stealth", "value": 1, "target": "self", "duration": 1}],
    },
    "rogue_venomous_strike": {
        "name": "Venomous Strike", "class": "rogue", "rarity": "common", "aggro": 2,
        "description": "Deal 5 damage and apply 3 Poison for 2 turns.",
        "effects": [
            {"type": "damage", "value": 5, "target": "monster"},
            {"type": "poison", "value": 3, "target": "monster", "duration": 2},
        ],
    },
    "rogue_pocket_sand": {
        "name": "Pocket Sand", "class": "rogue", "rarity": "uncommon", "aggro": 0,
        "description": "Gain Stealth for 1 turn and apply 1 Weakness to all enemies for 1 turn.",
        "effects": [
            {"type": "stealth", "value": 1, "target": "self", "duration": 1},
            {"type": "weakness", "value": 1, "target": "allMonsters", "duration": 1},
        ],
    },
    "rogue_blinding_strike": {
        "name": "Blinding Strike", "class": "rogue", "rarity": "rare", "aggro": 2,
        "description": "Deal 12 damage and apply 2 Accuracy penalty for 2 turns.",
        "effects": [
            {"type": "damage", "value": 12, "target": "monster"},
            {"type": "accuracy", "value": 2, "target": "monster", "duration": 2},
        ],
    },

    # Paladin
    "paladin_shield_bash": {
        "name": "Shield Bash", "class": "paladin", "rarity": "common", "aggro": 3,
        "description": "Deal 6 damage and Stun for 1 turn.",
        "effects": [
            {"type": "damage", "value": 6, "target": "monster"},
            {"type": "stun", "value": 1, "target": "monster", "duration": 1},
        ],
    },
    "paladin_blessed_shield": {
        "name": "Blessed Shield", "class": "paladin", "rarity": "common", "aggro": 2,
        "description": "Gain 10 shield.",
        "effects": [{"type": "shield", "value": 10, "target": "self"}],
    },
    "paladin_healing_word": {
        "name": "Healing Word", "class": "paladin", "rarity": "common", "aggro": 1,
        "description": "Heal an ally for 12 HP.",
        "effects": [{"type": "heal", "value": 12, "target": "ally"}],
    },
    "paladin_righteous_blow": {
        "name": "Righteous Blow", "class": "paladin", "rarity": "common", "aggro": 2,
        "description": "Deal 9 damage.",
        "effects": [{"type": "damage", "value": 9, "target": "monster"}],
    },
    "paladin_consecrate": {
        "name": "Consecrate Ground", "class": "paladin", "rarity": "uncommon", "aggro": 3,
        "description": "Deal 5 damage to all enemies and apply 3 Burn for 3 turns.",
        "effects": [
            {"type": "damage", "value": 5, "target": "allMonsters"},
            {"type": "burn", "value": 3, "target": "allMonsters", "duration": 3},
        ],
    },
    "paladin_test_of_faith": {
        "name": "Test of Faith", "class": "paladin", "rarity": "rare", "aggro": 5,
        "description": "Gain 15 shield and Taunt for 2 turns.",
        "effects": [
            {"type": "shield", "value": 15, "target": "self"},
            {"type": "taunt", "value": 1, "target": "self", "duration": 2},
        ],
    },

    # Mage
    "mage_arcane_bolt": {
        "name": "Arcane Bolt", "class": "mage", "rarity": "common", "aggro": 2,
        "description": "Deal 10 damage.",
        "effects": [{"type": "damage", "value": 10, "target": "monster"}],
    },
    "mage_mana_shield": {
        "name": "Mana Shield", "class": "mage", "rarity": "common", "aggro": 1,
        "description": "Gain 8 shield.",
        "effects": [{"type": "shield", "value": 8, "target": "self"}],
    },
    "mage_firebolt": {
        "name": "Firebolt", "class": "mage", "rarity": "common", "aggro": 2,
        "description": "Deal 6 damage and apply 2 Burn for 2 turns.",
        "effects": [
            {"type": "damage", "value": 6, "target": "monster"},
            {"type": "burn", "value": 2, "target": "monster", "duration": 2},
        ],
    },
    "mage_ray_of_frost": {
        "name": "Ray of Frost", "class": "mage", "rarity": "common", "aggro": 2,
        "description": "Deal 6 damage and apply 2 Ice for 2 turns.",
        "effects": [
            {"type": "damage", "value": 6, "target": "monster"},
            {"type": "ice", "value": 2, "target": "monster", "duration": 2},
        ],
    },
    "mage_evocation": {
        "name": "Evocation", "class": "mage", "rarity": "common", "aggro": 0,
        "description": "Restore 3 mana.",
        "mana_cost": 0,
        "mana_restore": 3,
        "effects": [],
    },
    "mage_fireball": {
        "name": "Fireball", "class": "mage", "rarity": "uncommon", "aggro": 4,
        "description": "Deal 8 damage to all enemies and apply 2 Burn for 2 turns.",
        "effects": [
            {"type": "damage", "value": 8, "target": "allMonsters"},
            {"type": "burn", "value": 2, "target": "allMonsters", "duration": 2},
        ],
    },

    # Cleric
    "cleric_sacred_flame": {
        "name": "Sacred Flame", "class": "cleric", "rarity": "common", "aggro": 2,
        "description": "Deal 8 damage and apply 2 Burn for 2 turns.",
        "effects": [
            {"type": "damage", "value": 8, "target": "monster"},
            {"type": "burn", "value": 2, "target": "monster", "duration": 2},
        ],
    },
    "cleric_cure_wounds": {
        "name": "Cure Wounds", "class": "cleric", "rarity": "common", "aggro": 1,
        "description": "Heal an ally for 12 HP.",
        "effects": [{"type": "heal", "value": 12, "target": "ally"}],
    },
    "cleric_mass_healing_word": {
        "name": "Mass Healing Word", "class": "cleric", "rarity": "common", "aggro": 1,
        "description": "Heal all allies for 5 HP.",
        "effects": [{"type": "heal", "value": 5, "target": "allAllies"}],
    },
    "cleric_purify": {
        "name": "Purify", "class": "cleric", "rarity": "uncommon", "aggro": 1,
        "description": "Cleanse all debuffs from an ally and grant 3 Regen for 2 turns.",
        "effects": [
            {"type": "cleanse", "target": "ally"},
            {"type": "regen", "value": 3, "target": "ally", "duration": 2},
        ],
    },
    "cleric_guardian_spirit": {
        "name": "Guardian Spirit", "class": "cleric", "rarity": "rare", "aggro": 2,
        "description": "An ally survives the next lethal blow at 1 HP (2 turns).",
        "effects": [{"type": "survive_lethal", "value": 1, "target": "ally", "duration": 2}],
    },

    # Bard
    "bard_rallying_tune": {
        "name": "Rallying Tune", "class": "bard", "rarity": "common", "aggro": 1,
        "description": "All allies gain 2 Strength for 1 turn. [Harmony]",
        "song": "harmony",
        "effects": [{"type": "strength", "value": 2, "target": "allAllies", "duration": 1}],
    },
    "bard_soothing_chord": {
        "name": "Soothing Chord", "class": "bard", "rarity": "common", "aggro": 1,
        "description": "Give an ally 8 shield. [Harmony]",
        "song": "harmony",
        "effects": [{"type": "shield", "value": 8, "target": "ally"}],
    },
    "bard_discord": {
        "name": "Discord", "class": "bard", "rarity": "common", "aggro": 2,
        "description": "Deal 6 damage and apply 2 Weakness for 2 turns. [Riot]",
        "song": "riot",
        "effects": [
            {"type": "damage", "value": 6, "target": "monster"},
            {"type": "weakness", "value": 2, "target": "monster", "duration": 2},
        ],
    },
    "bard_cacophony": {
        "name": "Cacophony", "class": "bard", "rarity": "uncommon", "aggro": 3,
        "description": "Deal 4 damage to all enemies and apply 1 Vulnerable for 1 turn. [Riot]",
        "song": "riot",
        "effects": [
            {"type": "damage", "value": 4, "target": "allMonsters"},
            {"type": "vulnerable", "value": 1, "target": "allMonsters", "duration": 1},
        ],
    },
    "bard_interlude": {
        "name": "Interlude", "class": "bard", "rarity": "common", "aggro": 0,
        "description": "Gain 5 shield.",
        "effects": [{"type": "shield", "value": 5, "target": "self"}],
    },

    # Archer
    "archer_aimed_shot": {
        "name": "Aimed Shot", "class": "archer", "rarity": "common", "aggro": 2,
        "description": "Deal 9 damage.",
        "effects": [{"type": "damage", "value": 9, "target": "monster"}],
    },
    "archer_volley": {
        "name": "Volley", "class": "archer", "rarity": "common", "aggro": 3,
        "description": "Deal 5 damage to all enemies.",
        "effects": [{"type": "damage", "value": 5, "target": "allMonsters"}],
    },
    "archer_pinning_shot": {
        "name": "Pinning Shot", "class": "archer", "rarity": "uncommon", "aggro": 2,
        "description": "Deal 6 damage and Stun for 1 turn.",
        "effects": [
            {"type": "damage", "value": 6, "target": "monster"},
            {"type": "stun", "value": 1, "target": "monster", "duration": 1},
        ],
    },
    "archer_camouflage": {
        "name": "Camouflage", "class": "archer", "rarity": "common", "aggro": 0,
        "description": "Gain Stealth for 1 turn and 4 shield.",
        "effects": [
            {"type": "stealth", "value": 1, "target": "self", "duration": 1},
            {"type": "shield", "value": 4, "target": "self"},
        ],
    },
    "archer_poison_arrow": {
        "name": "Poison Arrow", "class": "archer", "rarity": "uncommon", "aggro": 2,
        "description": "Deal 4 damage and apply 4 Poison for 3 turns.",
        "effects": [
            {"type": "damage", "value": 4, "target": "monster"},
            {"type": "poison", "value": 4, "target": "monster", "duration": 3},
        ],
    },

    # Barbarian
    "barbarian_rage_strike": {
        "name": "Rage Strike", "class": "barbarian", "rarity": "common", "aggro": 3,
        "description": "Deal 10 damage.",
        "effects": [{"type": "damage", "value": 10, "target": "monster"}],
    },
    "barbarian_reckless_swing": {
        "name": "Reckless Swing", "class": "barbarian", "rarity": "common", "aggro": 4,
        "description": "Deal 16 damage and take 4 damage.",
        "effects": [
            {"type": "damage", "value": 16, "target": "monster"},
            {"type": "damage", "value": 4, "target": "self"},
        ],
    },
    "barbarian_war_cry": {
        "name": "War Cry", "class": "barbarian", "rarity": "common", "aggro": 4,
        "description": "Gain Taunt for 1 turn and 3 Strength for 2 turns.",
        "effects": [
            {"type": "taunt", "value": 1, "target": "self", "duration": 1},
            {"type": "strength", "value": 3, "target": "self", "duration": 2},
        ],
    },
    "barbarian_whirlwind": {
        "name": "Whirlwind", "class": "barbarian", "rarity": "uncommon", "aggro": 4,
        "description": "Deal 7 damage to all enemies.",
        "effects": [{"type": "damage", "value": 7, "target": "allMonsters"}],
    },
    "barbarian_undying_rage": {
        "name": "Undying Rage", "class": "barbarian", "rarity": "rare", "aggro": 3,
        "description": "Survive the next lethal blow at 1 HP (2 turns).",
        "effects": [{"type": "survive_lethal", "value": 1, "target": "self", "duration": 2}],
    },
}

# Tier bonuses keyed by card id. Faith tiers: "mid" (>= 50%), "top" (100%, on top
# of mid). Mana tiers: "empowered" (>= 50% mana), "depowered" (< 50% mana).
SCALING = {
    "paladin_shield_bash": {
        "faith": {
            "mid": [{"type": "damage", "value": 3, "target": "monster"}],
            "top": [{"type": "stun", "value": 1, "target": "monster", "duration": 1}],
        },
    },
    "paladin_blessed_shield": {
        "faith": {
            "mid": [{"type": "shield", "value": 4, "target": "self"}],
            "top": [{"type": "heal", "value": 5, "target": "self"}],
        },
    },
    "paladin_healing_word": {
        "faith": {
            "mid": [{"type": "shield", "value": 4, "target": "ally"}],
            "top": [{"type": "cleanse", "target": "ally"}],
        },
    },
    "paladin_righteous_blow": {
        "faith": {
            "mid": [{"type": "heal", "value": 4, "target": "self"}],
            "top": [{"type": "damage", "value": 5, "target": "monster"}],
        },
    },
    "paladin_consecrate": {
        "faith": {
            "mid": [{"type": "heal", "value": 5, "target": "allAllies"}],
            "top": [{"type": "damage", "value": 3, "target": "allMonsters"}],
        },
    },
    "paladin_test_of_faith": {
        "faith": {
            "mid": [{"type": "damage", "value": 8, "target": "monster"}],
            "top": [{"type": "taunt", "value": 1, "target": "allAllies", "duration": 2}],
        },
    },
    "mage_arcane_bolt": {
        "mana": {
            "empowered": [{"type": "damage", "value": 4, "target": "monster"}],
            "depowered": [{"type": "damage", "value": -4, "target": "monster"}],
        },
    },
    "mage_mana_shield": {
        "mana": {
            "empowered": [{"type": "shield", "value": 4, "target": "self"}],
            "depowered": [{"type": "shield", "value": -4, "target": "self"}],
        },
    },
    "mage_firebolt": {
        "mana": {
            "empowered": [{"type": "burn", "value": 2, "target": "monster", "duration": 0}],
            "depowered": [{"type": "burn", "value": -1, "target": "monster", "duration": 0}],
        },
    },
    "mage_ray_of_frost": {
        "mana": {
            "empowered": [{"type": "damage", "value": 2, "target": "monster"}],
            "depowered": [{"type": "damage", "value": -2, "target": "monster"}],
        },
    },
    "mage_evocation": {
        "mana": {
            "empowered": [{"type": "strength", "value": 5, "target": "self", "duration": 1}],
        },
    },
    "mage_fireball": {
        "mana": {
            "empowered": [{"type": "damage", "value": 4, "target": "allMonsters"}],
            "depowered": [{"type": "damage", "value": -4, "target": "allMonsters"}],
        },
    },
}


def cards_for_class(class_id):
    return [card_id for card_id, card in CARDS.items() if card["class"] == class_id]


def starter_deck(class_id):
    """Every class card once, commons twice."""
    deck = []
    for card_id in cards_for_class(class_id):
        deck.append(card_id)
        if CARDS[card_id]["rarity"] == "common":
            deck.append(card_id)
    return deck
