"""Error types raised across the snack analysis pipeline."""


class SnackMeterError(Exception):
    """Base class for application errors."""


class InvalidInputError(SnackMeterError):
    """The request payload could not be understood."""


class ClassificationError(SnackMeterError):
    """The snack could not be classified."""


class MeasurementIncompleteError(SnackMeterError):
    """The measurements were insufficient to compute an area."""


class CommentaryUnavailableError(SnackMeterError):
    """The commentary backend failed to produce a remark."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RateLimitedError(CommentaryUnavailableError):
    """The commentary backend rejected the call because of quota limits."""

    def __init__(self, message: str, status_code: int | None = 429) -> None:
        super().__init__(message, status_code=status_code)


class StorageUnavailableError(SnackMeterError):
    """The snack store could not be reached."""
