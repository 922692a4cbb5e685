"""Custom exceptions. Every layer raises a subclass of GameError so callers can catch one top-level type."""


class GameError(Exception):
    """Top-level exception for anything going wrong in the snake backend."""


class GameStateError(GameError):
    """A session was asked to do something its current state does not allow."""


class PlacementError(GameError):
    """No free cell left on the grid to place food on."""


class InvalidRequestError(GameError):
    """Malformed data received at the API boundary (HTTP body or websocket message)."""


class RepositoryError(GameError):
    """Persistence layer could not complete the request."""


class StorageError(RepositoryError):
    """Reading or writing the durable leaderboard record failed."""
