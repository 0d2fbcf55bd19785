"""
Error kinds raised by the scoring core and its persistence helpers.

None of these are fatal: the request layer translates each into a
response (see app.main).
"""


class QuizServiceError(Exception):
    """Base class for all quiz service errors."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message or self.__class__.__name__


class NotFound(QuizServiceError):
    """Quiz or attempt is absent."""


class EmptyPopulation(QuizServiceError):
    """Statistics were requested over zero scores."""


class StorageError(QuizServiceError):
    """Transient persistence failure, retryable by the caller."""


class ConcurrentModification(StorageError):
    """A row changed underneath an optimistic write."""


class Unauthorized(QuizServiceError):
    """Caller may not access the requested quiz."""


class AlreadyTaken(QuizServiceError):
    """The (quiz, user) pair already has an attempt."""
