from overlay.logs.session import SessionLog
from overlay.logs.store import LogFileStore, format_byte_count

__all__ = ["LogFileStore", "SessionLog", "format_byte_count"]
