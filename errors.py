# Error types raised by the history core and its collaborators.
# Each one ends the current turn; nothing is retried.

class ChatRelayError(Exception):
    """Base class for errors surfaced to the caller of a chat turn."""


class ExternalFetchError(ChatRelayError):
    """The file service could not return the requested document."""


class FileUploadError(ChatRelayError):
    """The file service rejected or failed an upload."""


class CompletionServiceError(ChatRelayError):
    """The completion service failed or returned no usable reply."""


class EmptyHistoryError(ChatRelayError):
    """Eviction was requested on an empty history."""
