"""Custom exception hierarchy for the study helper."""


class StudyHelperError(Exception):
    """Base exception for all study helper errors."""

    def __init__(self, message: str) -> None:
        """Initialize exception with message."""
        self.message = message
        super().__init__(self.message)


class StudyFetchError(StudyHelperError):
    """
    Remote question bank request failed.

    ``cause`` holds the underlying transport or decoding error.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        """Initialize with message and the original error."""
        super().__init__(message)
        self.cause = cause
