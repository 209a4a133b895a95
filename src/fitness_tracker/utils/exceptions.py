"""Custom exceptions for the fitness tracker."""


class FitnessTrackerError(Exception):
    """Base exception for all fitness tracker errors."""

    pass


class ConfigurationError(FitnessTrackerError):
    """Raised when there is a configuration error."""

    pass


class StorageError(FitnessTrackerError):
    """Raised when the entry store cannot be written."""

    pass


class ImportFailedError(FitnessTrackerError):
    """Raised when an import payload is unreadable or malformed."""

    pass


class ExportError(FitnessTrackerError):
    """Raised when an export file cannot be written."""

    pass


class ValidationError(FitnessTrackerError):
    """Raised when user input fails validation."""

    pass
