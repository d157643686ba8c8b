"""
Repositories package - Infrastructure Layer

Concrete record store implementations.
"""

from .in_memory_record_store import InMemoryRecordStore
from .mongo_record_store import MongoRecordStore

__all__ = ["InMemoryRecordStore", "MongoRecordStore"]
