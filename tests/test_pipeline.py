import pytest

from party_crawl.content.cards import CARDS, SCALING
from party_crawl.engine import effects as fx
from party_crawl.engine import scaling
from party_crawl.engine.errors import ContentError, ContractError
from party_crawl.engine.pipeline import gain_when_hit, play_card, use_special


def _ready(game, hand):
    hero = game.players[0]
    hero.hand = list(hand)
    return hero


def test_enhanced_card_ends_at_zero_resource(make_game):
    game = make_game("warrior")
    warrior = _ready(game, ["warrior_slash"])
    warrior.resource = warrior.resource_max
    game.enhance_mode[warrior.id] = True
    goblin = game.monsters[0]

    outcome = play_card(game, warrior.id, "warrior_slash", goblin.id)

    assert outcome["enhanced"] is True
    assert warrior.resource == 0, "enhancement consumes the gauge and suppresses the normal gain"
    assert goblin.hp == 30 - (8 + 8)
    assert game.enhance_mode[warrior.id] is False


def test_enhance_toggle_without_full_gauge_plays_normally(make_game):
    game = make_game("warrior")
    warrior = _ready(game, ["warrior_slash"])
    warrior.resource = 3
    game.enhance_mode[warrior.id] = True

    outcome = play_card(game, warrior.id, "warrior_slash", "m0")

    assert outcome["enhanced"] is False
    assert warrior.resource == 4


def test_card_moves_from_hand_to_discard_and_adds_aggro(make_game):
    game = make_game("warrior")
    warrior = _ready(game, ["warrior_slash", "warrior_slash"])
    discard_before = len(warrior.discard)

    play_card(game, warrior.id, "warrior_slash", "m0")

    assert warrior.hand == ["warrior_slash"]
    assert len(warrior.discard) == discard_before + 1
    assert warrior.base_aggro == CARDS["warrior_slash"]["aggro"]


def test_faith_mid_tier_adds_bonus_on_top_of_base(make_game):
    game = make_game("paladin")
    paladin = _ready(game, ["paladin_righteous_blow"])
    paladin.resource = 4
    paladin.hp = 50

    outcome = play_card(game, paladin.id, "paladin_righteous_blow", "m0")

    assert outcome["tier"] == "mid"
    assert game.monsters[0].hp == 30 - 9
    assert paladin.hp == 54
    assert paladin.resource == 6, "faith +1 per card, +1 more when the card healed"


def test_faith_top_tier_includes_mid(make_game):
    game = make_game("paladin")
    paladin = _ready(game, ["paladin_righteous_blow"])
    paladin.resource = paladin.resource_max
    paladin.hp = 50

    outcome = play_card(game, paladin.id, "paladin_righteous_blow", "m0")

    assert outcome["tier"] == "top"
    assert game.monsters[0].hp == 30 - 14
    assert paladin.hp == 54


def test_faith_tier_uses_gauge_before_enhancement_spends_it(make_game):
    game = make_game("paladin")
    paladin = _ready(game, ["paladin_righteous_blow"])
    paladin.resource = paladin.resource_max
    paladin.hp = 50
    game.enhance_mode[paladin.id] = True

    outcome = play_card(game, paladin.id, "paladin_righteous_blow", "m0")

    assert outcome["tier"] == "top"
    assert game.monsters[0].hp == 30 - (9 + 5 + 5)
    assert paladin.resource == 0


def test_below_half_faith_gets_no_bonus(make_game):
    game = make_game("paladin")
    paladin = _ready(game, ["paladin_righteous_blow"])
    paladin.resource = 3

    outcome = play_card(game, paladin.id, "paladin_righteous_blow", "m0")

    assert outcome["tier"] is None
    assert game.monsters[0].hp == 21


def test_mage_empowered_and_depowered(make_game):
    game = make_game("mage")
    mage = _ready(game, ["mage_arcane_bolt", "mage_arcane_bolt"])
    mage.mana = 10
    mage.resource = 0

    play_card(game, mage.id, "mage_arcane_bolt", "m0")
    assert game.monsters[0].hp == 30 - 14
    assert mage.mana == 8, "empowered casts cost one extra mana"
    assert mage.resource == 2, "arcana grows by the mana spent"

    mage.mana = 4
    play_card(game, mage.id, "mage_arcane_bolt", "m0")
    assert game.monsters[0].hp == 16 - 6
    assert mage.mana == 3
    assert mage.resource == 3


def test_contract_violations_fail_fast(make_game):
    game = make_game("warrior")
    _ready(game, ["warrior_slash"])

    with pytest.raises(ContractError):
        play_card(game, "p7", "warrior_slash", "m0")
    with pytest.raises(ContractError):
        play_card(game, "p0", "no_such_card", "m0")
    with pytest.raises(ContractError):
        play_card(game, "p0", "warrior_cleave")
    # two monsters alive, so a target is required
    with pytest.raises(ContractError):
        play_card(game, "p0", "warrior_slash")
    assert game.players[0].hand == ["warrior_slash"], "a rejected play must not touch state"


def test_blood_frenzy_boosts_low_hp_barbarian(make_game):
    game = make_game("barbarian")
    barbarian = _ready(game, ["barbarian_rage_strike"])
    barbarian.hp = 30

    play_card(game, barbarian.id, "barbarian_rage_strike", "m1")

    assert game.monsters[1].hp == 40 - 20


def test_bard_switching_song_restarts_gauge(make_game):
    game = make_game("bard")
    bard = _ready(game, ["bard_rallying_tune", "bard_rallying_tune", "bard_discord"])

    play_card(game, bard.id, "bard_rallying_tune")
    play_card(game, bard.id, "bard_rallying_tune")
    assert (bard.song_type, bard.resource) == ("harmony", 2)

    play_card(game, bard.id, "bard_discord", "m0")
    assert (bard.song_type, bard.resource) == ("riot", 1)


def test_resource_when_hit():
    from party_crawl.engine.models import PlayerState

    warrior = PlayerState(id="p0", name="W", class_id="warrior", hp=120, hp_max=120, resource_max=10)
    archer = PlayerState(id="p1", name="A", class_id="archer", hp=75, hp_max=75, resource=3, resource_max=5)

    assert gain_when_hit(warrior, 15) == 1
    assert gain_when_hit(warrior, 40) == 2
    assert gain_when_hit(archer, 5) == -1
    assert archer.resource == 2


def test_special_requires_full_gauge(make_game):
    game = make_game("cleric")
    cleric = game.players[0]
    with pytest.raises(ContractError):
        use_special(game, cleric.id)

    cleric.resource = cleric.resource_max
    cleric.hp = 40
    use_special(game, cleric.id)

    assert cleric.resource == 0
    assert cleric.hp == 55
    assert game.monsters[0].hp == 20


def test_fold_bonuses_floors_and_drops_unmatched_penalties():
    base = [{"type": "damage", "value": 3, "target": "monster"}]
    bonuses = [
        {"type": "damage", "value": -5, "target": "monster"},
        {"type": "shield", "value": -4, "target": "self"},
        {"type": "heal", "value": 2, "target": "self"},
    ]

    folded = scaling.fold_bonuses(base, bonuses, "test")

    assert folded == [
        {"type": "damage", "value": 0, "target": "monster"},
        {"type": "heal", "value": 2, "target": "self"},
    ]
    assert base[0]["value"] == 3, "the card template must stay untouched"


def test_shipped_content_is_valid():
    assert scaling.validate_content() == []


def test_strict_validation_raises_on_bad_scaling(monkeypatch):
    broken = dict(SCALING)
    broken["paladin_healing_word"] = {"faith": {"mid": [{"type": "heal", "value": "lots", "target": "ally"}]}}
    monkeypatch.setattr(scaling, "SCALING", broken)

    with pytest.raises(ContentError):
        scaling.validate_content(strict=True)
    assert scaling.tier_bonuses("paladin_healing_word", "faith", "mid") == []


def test_missing_scaling_entry_degrades_to_no_bonus(monkeypatch):
    trimmed = {k: v for k, v in SCALING.items() if k != "mage_fireball"}
    monkeypatch.setattr(scaling, "SCALING", trimmed)
    assert scaling.tier_bonuses("mage_fireball", "mana", "empowered") == []


def test_card_text_is_generated_from_tiers():
    text = scaling.card_text("paladin_blessed_shield")
    assert text.startswith("Gain 10 shield.")
    assert "Faith 50%: +4 shield" in text
    assert "Faith 100%: +5 heal" in text
    assert "Empowered: +4 damage" in scaling.card_text("mage_arcane_bolt")


def test_faith_bonus_that_needs_a_target_gets_one(make_game):
    game = make_game("paladin")
    paladin = _ready(game, ["paladin_test_of_faith"])
    paladin.resource = paladin.resource_max // 2

    # the mid tier adds a strike, so two living monsters mean a choice is needed
    with pytest.raises(ContractError):
        play_card(game, paladin.id, "paladin_test_of_faith")
    assert paladin.shield == 0 and paladin.base_aggro == 0, "nothing resolves before the target is known"

    outcome = play_card(game, paladin.id, "paladin_test_of_faith", "m1")

    assert outcome["tier"] == "mid"
    assert game.monsters[1].hp == 40 - 8
    assert paladin.shield == 15
    assert paladin.hand == [] and "paladin_test_of_faith" in paladin.discard


def test_bonus_with_a_second_target_kind_is_flagged_and_dropped(monkeypatch):
    broken = dict(SCALING)
    broken["paladin_healing_word"] = {"faith": {"mid": [{"type": "damage", "value": 4, "target": "monster"}]}}
    monkeypatch.setattr(scaling, "SCALING", broken)

    assert any("second target kind" in p for p in scaling.validate_content())
    bonuses = scaling.tier_bonuses("paladin_healing_word", "faith", "mid")
    folded = scaling.fold_bonuses(CARDS["paladin_healing_word"]["effects"], bonuses, "paladin_healing_word")
    assert folded == CARDS["paladin_healing_word"]["effects"]


def test_crescendo_spends_the_current_song(make_game):
    game = make_game("bard", "warrior")
    bard = game.players[0]
    bard.song_type = "harmony"
    bard.resource = bard.resource_max

    use_special(game, bard.id)

    assert bard.song_type is None
    assert all(not m.debuffs for m in game.monsters), "harmony Crescendo leaves the enemies alone"

    bard.resource = bard.resource_max
    use_special(game, bard.id)
    assert all(fx.has_status(m, "vulnerable") for m in game.monsters), "with no song both halves apply"


def test_block_does_not_stop_recklessness(make_game):
    game = make_game("barbarian")
    barbarian = _ready(game, ["barbarian_reckless_swing"])
    fx.add_status(barbarian, fx.make_status("block", 1, 1))

    play_card(game, barbarian.id, "barbarian_reckless_swing", "m0")

    assert barbarian.hp == barbarian.hp_max - 4
