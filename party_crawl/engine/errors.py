# party_crawl/engine/errors.py


class ContractError(ValueError):
    """The caller broke a precondition (unknown id, missing target, wrong phase)."""


class ContentError(ValueError):
    """A content table is malformed. Only raised by strict validation."""
