"""Domain errors for the artworks module."""

from common.errors import DomainError, ErrorCode


class ArtworkNotFoundError(DomainError):
    """Raised when an artwork id or scan code matches nothing."""

    def __init__(self, lookup: str) -> None:
        super().__init__(
            code=ErrorCode.ARTWORK_NOT_FOUND,
            message="Artwork not found",
        )
        self.lookup = lookup


class ArtworkUnavailableError(DomainError):
    def __init__(self, title: str) -> None:
        super().__init__(
            code=ErrorCode.ARTWORK_UNAVAILABLE,
            message=f'"{title}" is not currently on display',
        )
