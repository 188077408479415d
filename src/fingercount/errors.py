"""Exception hierarchy for Finger Count."""


class FingerCountError(Exception):
    """Base class for all Finger Count errors."""


class ImageEncodingError(FingerCountError):
    """A selected file could not be read into an image asset."""


class InvalidDataURIError(FingerCountError, ValueError):
    """A string is not a well-formed base64 data URI."""


class MissingImageError(FingerCountError):
    """An analysis was requested without an image asset."""


class WorkflowBusyError(FingerCountError):
    """An analysis is already in flight."""


class AnalysisError(FingerCountError):
    """The remote model call failed.

    ``message`` is the human-readable text shown to the user.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
