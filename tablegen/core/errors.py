class TableGenError(Exception):
    """Base error of the service"""


class ValidationError(TableGenError):
    """Input rejected before any script was produced"""


class StorageError(TableGenError):
    """Saved-script list could not be read or written"""
