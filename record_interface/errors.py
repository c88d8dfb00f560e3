from __future__ import annotations


class RecordInterfaceError(Exception):
    """Base class for record interface failures."""


class InvalidArgument(RecordInterfaceError, ValueError):
    """Raised when a handle is built or written with unusable arguments."""
