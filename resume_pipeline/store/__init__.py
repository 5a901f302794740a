from .connection import SQLiteConnection
from .record_store import RecordId, ResumeRecordStore

__all__ = ["SQLiteConnection", "ResumeRecordStore", "RecordId"]
