# karta_backend/core/errors.py
# Domain exceptions raised by services and translated to HTTP errors by the routes.


class TournamentError(Exception):
    """Base class for every error the tournament services raise."""


class ValidationError(TournamentError):
    """Input rejected before any persistence call (blank names, bad dates, ...)."""


class NotFoundError(TournamentError):
    """A team, player or match id does not resolve."""


class ConflictError(TournamentError):
    """The operation is refused by the current data (e.g. a referenced team)."""


class PersistenceError(TournamentError):
    """The document store failed. Carries a generic, user-safe message."""

    def __init__(self, message: str = "The tournament data could not be saved. Please try again."):
        super().__init__(message)
