"""Domain exceptions."""


class BlogSearchError(Exception):
    """Base exception for blogsearch."""

    pass


class InvalidArgument(BlogSearchError):
    """Empty or out-of-range input to a public operation."""

    pass


class InvalidInput(InvalidArgument):
    """Text cannot be embedded (empty, not a string, or empty after normalization)."""

    pass


class NotFound(BlogSearchError):
    """Requested resource was not found."""

    pass


class NotInitialized(BlogSearchError):
    """Embedding gateway used before initialize() completed."""

    pass


class EmbeddingFailure(BlogSearchError):
    """Embedding model failed for a specific text."""

    pass


class DimensionMismatch(EmbeddingFailure):
    """Embedding has an unexpected number of components."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"Expected {expected} dimensions, got {actual}")
        self.expected = expected
        self.actual = actual


class StorageFailure(BlogSearchError):
    """Persistence failed; the current transaction was rolled back."""

    pass
