"""Custom exception hierarchy for the work-log chat engine."""


class WorklogChatError(Exception):
    """Base exception for all work-log chat errors."""


class InvalidMonthName(WorklogChatError, ValueError):
    """A month token that is not an English month name reached a date factory."""


class InvalidDateRangeError(WorklogChatError, ValueError):
    """Date range whose start lies after its end."""


class InvalidDocumentError(WorklogChatError, ValueError):
    """Retrieval document with empty text, empty source or negative chunk index."""


class IndexUnavailable(WorklogChatError):
    """The similarity index cannot be reached."""


class EmptyIndexError(WorklogChatError):
    """The similarity index is reachable but holds no embeddings."""


class IngestionError(WorklogChatError):
    """Error while loading or splitting work-log files."""


class EmbeddingError(WorklogChatError):
    """Error generating embeddings."""


class GenerationError(WorklogChatError):
    """Error during answer generation."""


class ConfigurationError(WorklogChatError):
    """Error in system configuration."""
