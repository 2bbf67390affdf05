"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class TrackpageError(Exception):
    """Base exception for all application-specific errors."""


class ManifestNotFoundError(TrackpageError):
    """Raised when the manifest file does not exist."""


class ManifestParseError(TrackpageError):
    """Raised when the manifest is not valid JSON or does not match the schema."""


class WriteError(TrackpageError):
    """Raised when an output file cannot be written."""


class ManifestWriteError(WriteError):
    """Raised when the manifest cannot be saved."""


class PageWriteError(WriteError):
    """Raised when the rendered HTML page cannot be saved."""


class ConfigurationError(TrackpageError):
    """Raised for issues related to configuration loading or validation."""


class CheckInfrastructureError(TrackpageError):
    """
    Raised when the reachability checks themselves could not be run or joined,
    as opposed to a track simply being unreachable.
    """


class TrackUnreachableError(TrackpageError):
    """Raised when one or more tracks failed their reachability check."""

    def __init__(self, failures):
        self.failures = list(failures)
        urls = ", ".join(result.url for result in self.failures)
        super().__init__(f"{len(self.failures)} track(s) not reachable: {urls}")
