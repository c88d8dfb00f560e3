from .config import Settings, load_settings
from .errors import InvalidArgument, RecordInterfaceError
from .handle import RecordHandle, maybe_wrap, wrap
from .records import MISSING, deep_copy, deep_merge, is_record

__all__ = [
    "wrap",
    "RecordHandle",
    "maybe_wrap",
    "MISSING",
    "is_record",
    "deep_copy",
    "deep_merge",
    "InvalidArgument",
    "RecordInterfaceError",
    "Settings",
    "load_settings",
]
