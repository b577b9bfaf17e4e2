"""Errors raised by the optimizer and its data collaborators."""


class InvalidPolicyError(ValueError):
    """Unknown weight policy selector (anything but 'hot' or 'cold')."""


class MalformedRecordError(ValueError):
    """Draw record with missing fields or out-of-range numbers."""


class DataUnavailableError(RuntimeError):
    """No local history and the remote fetch failed."""
