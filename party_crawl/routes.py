# party_crawl/routes.py
from flask import Blueprint, abort, jsonify

from . import state
from .content.cards import CARDS
from .content.classes import CLASSES
from .content.environments import ENVIRONMENTS
from .engine.scaling import card_text

party_bp = Blueprint("party", __name__)


@party_bp.route("/party/content")
def party_content():
    cards = {card_id: dict(card, text=card_text(card_id)) for card_id, card in CARDS.items()}
    return jsonify({"classes": CLASSES, "cards": cards, "environments": ENVIRONMENTS})


@party_bp.route("/party/rooms/<room_id>")
def party_room(room_id):
    game = state.party_rooms.get(room_id)
    if game is None:
        abort(404)
    data = game.to_dict()
    for p in data["players"]:
        p.pop("sid", None)
    data.pop("clients", None)
    return jsonify(data)
