"""Custom exceptions for Movie Ranker.

Hard failures (bad input, unknown ids, calls after completion) are raised as
exceptions from this module. Running out of pairs to compare is not an error:
selectors return the ``EXHAUSTED`` sentinel and the session finalizes itself.
"""

from __future__ import annotations


class MovieRankerError(Exception):
    """Base exception for all Movie Ranker errors."""

    pass


class InvalidInputError(MovieRankerError):
    """Invalid input supplied to the ranking engine.

    Raised when fewer than two movies are supplied, ids are duplicated,
    or an outcome names the same movie as winner and loser.
    """

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        full_message = message
        if field:
            full_message = f"Invalid input for '{field}': {message}"
        super().__init__(full_message)


class ItemNotFoundError(MovieRankerError):
    """An outcome referenced a movie that is not part of the session."""

    def __init__(self, item_id: str | int):
        self.item_id = item_id
        super().__init__(f"Movie '{item_id}' is not part of this ranking session")


class InvalidStateError(MovieRankerError):
    """Operation not allowed in the session's current state.

    Raised when a session is used after it has completed, or when an
    outcome does not match the pair awaiting comparison.
    """

    def __init__(self, operation: str, status: str, message: str | None = None):
        self.operation = operation
        self.status = status
        full_message = f"Cannot {operation} while session is '{status}'"
        if message:
            full_message += f"\n{message}"
        super().__init__(full_message)


class ConfigError(MovieRankerError):
    """Error in configuration.

    Raised when configuration is invalid or missing required fields.
    """

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        full_message = message
        if field:
            full_message = f"Configuration error in '{field}': {message}"
        super().__init__(full_message)
