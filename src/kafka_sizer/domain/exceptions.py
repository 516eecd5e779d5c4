"""Domain-specific exceptions."""


class KafkaSizerError(Exception):
    """Base exception for kafka-sizer."""

    pass


class InvalidConfigurationError(KafkaSizerError):
    """Raised when configuration is invalid or violates invariants."""

    pass


class PersistenceUnavailableError(KafkaSizerError):
    """Raised when the snapshot store cannot be read or written."""

    pass


class MalformedSnapshotError(KafkaSizerError):
    """Raised when a stored snapshot is missing keys or has the wrong shape."""

    pass
