# party_crawl/__init__.py
from loguru import logger

from .content.balance import DEFAULTS
from .engine.errors import ContentError
from .engine.scaling import validate_content
from .routes import party_bp
from .sockets import register_party_socket_handlers


def init_party(app, socketio, overrides=None):
    if overrides:
        unknown = sorted(set(overrides) - set(DEFAULTS))
        if unknown:
            raise ContentError(f"unknown balance keys: {', '.join(unknown)}")
        DEFAULTS.update(overrides)
        logger.info("party balance overrides: {}", overrides)
    validate_content()
    app.register_blueprint(party_bp)
    register_party_socket_handlers(socketio)
