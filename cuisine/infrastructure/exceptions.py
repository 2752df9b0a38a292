"""Infrastructure exceptions for recipe store operations.

Store errors extend CuisineException so presentation can map them
to HTTP responses consistently.
"""

from cuisine.domain.exceptions import CuisineException


class RetrievalFailedException(CuisineException):
    """Recipe store could not be reached or answered with an error."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(
            f"Recipe store request failed: {operation}",
            "RETRIEVAL_FAILED",
            {"operation": operation, "reason": reason},
        )
