# -*- coding: utf-8 -*-


class TrackerError(ValueError):
    """Base for recoverable tracker errors. The UI shows str(e) to the user."""


class ValidationError(TrackerError):
    pass


class NotFoundError(TrackerError):
    pass


class StorageError(TrackerError):
    """Persisted data could not be decoded."""
